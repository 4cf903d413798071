"""
Image upload endpoint.

Files land in the static upload directory; the returned URL is what the
dashboard then sends as imageUrl on categories, businesses and items.
"""

from fastapi import File, UploadFile

from cityfood_api.routers.admin._base import APIRouter, Depends
from shared.config.logging import api_logger as logger
from shared.infrastructure.storage import ImageStorage, ImageUpload, get_image_storage
from shared.utils.admin_schemas import UploadOutput
from shared.utils.exceptions import ValidationError


router = APIRouter(tags=["uploads"])


@router.post("/uploads", response_model=UploadOutput)
async def upload_image(
    file: UploadFile = File(...),
    storage: ImageStorage = Depends(get_image_storage),
) -> UploadOutput:
    """Store an image file and return its public URL."""
    # One byte past the limit is enough to know the file is too large
    content = await file.read(storage.max_bytes + 1)
    if len(content) > storage.max_bytes:
        raise ValidationError(
            "Fichier image invalide",
            details=f"Image trop volumineuse ({storage.max_bytes} octets maximum)",
            filename=file.filename,
        )
    try:
        url = storage.save(ImageUpload(filename=file.filename or "", content=content))
    except ValueError as e:
        raise ValidationError("Fichier image invalide", details=str(e), filename=file.filename)
    logger.info("Image uploaded", url=url)
    return UploadOutput(url=url)
