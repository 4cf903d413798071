"""
Local image storage for uploaded pictures.

Uploaded files are written under ``settings.upload_dir`` with a random
name and served by the application at ``settings.upload_url_prefix``.
"""

import uuid
from dataclasses import dataclass
from pathlib import Path

from shared.config.settings import settings
from shared.config.logging import get_logger
from shared.utils.validators import image_extension

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    """Raw image file received from a client."""

    filename: str
    content: bytes


class ImageStorage:
    """Writes uploaded images to the static directory and returns their URL."""

    def __init__(
        self,
        directory: str | Path | None = None,
        url_prefix: str | None = None,
        max_bytes: int | None = None,
    ):
        self.directory = Path(directory or settings.upload_dir)
        self.url_prefix = (url_prefix or settings.upload_url_prefix).rstrip("/")
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_upload_bytes
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, url: str) -> Path:
        """Filesystem path of a URL returned by save()."""
        return self.directory / url.rsplit("/", 1)[-1]

    def save(self, upload: ImageUpload) -> str:
        """
        Store the upload and return its public URL path.

        Raises:
            ValueError: If the file is empty, too large or not an image type
        """
        extension = image_extension(upload.filename)
        if not upload.content:
            raise ValueError("Le fichier est vide")
        if len(upload.content) > self.max_bytes:
            raise ValueError(f"Fichier trop volumineux ({self.max_bytes} octets maximum)")

        name = f"{uuid.uuid4().hex}{extension}"
        (self.directory / name).write_bytes(upload.content)
        logger.info("Image stored", filename=name, size=len(upload.content))
        return f"{self.url_prefix}/{name}"


def get_image_storage() -> ImageStorage:
    """FastAPI dependency returning the configured storage."""
    return ImageStorage()
