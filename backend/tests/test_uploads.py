"""
Tests for image uploads and the static files they are served from.
"""

from pathlib import Path

import pytest

from cityfood_api.main import app
from cityfood_api.models import Category
from cityfood_api.services.domain.category_service import CategoryService
from shared.config.settings import settings
from shared.infrastructure.storage import ImageStorage, ImageUpload, get_image_storage
from shared.utils.exceptions import ValidationError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestUploadEndpoint:
    """Test POST /api/uploads."""

    def test_upload_returns_static_url(self, client, auth_headers):
        response = client.post(
            "/api/uploads",
            headers=auth_headers,
            files={"file": ("poulet.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 200
        url = response.json()["url"]
        assert url.startswith("/static/uploads/")
        assert url.endswith(".png")

        served = client.get(url)
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    def test_uploaded_url_accepted_as_image(self, client, auth_headers):
        url = client.post(
            "/api/uploads",
            headers=auth_headers,
            files={"file": ("logo.jpg", b"jpeg-bytes", "image/jpeg")},
        ).json()["url"]

        response = client.post(
            "/api/categories", headers=auth_headers, json={"name": "Boutique", "imageUrl": url}
        )
        assert response.status_code == 201
        assert response.json()["imageUrl"] == url

    def test_upload_rejects_non_image(self, client, auth_headers):
        response = client.post(
            "/api/uploads",
            headers=auth_headers,
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400

    def test_upload_requires_admin(self, client, db_session):
        response = client.post(
            "/api/uploads",
            files={"file": ("poulet.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 401

    def test_oversized_upload_rejected(self, client, auth_headers, tmp_path):
        """Bodies past the storage limit are refused without being stored."""
        app.dependency_overrides[get_image_storage] = lambda: ImageStorage(directory=tmp_path, max_bytes=10)
        try:
            response = client.post(
                "/api/uploads",
                headers=auth_headers,
                files={"file": ("poulet.png", b"x" * 50, "image/png")},
            )
        finally:
            app.dependency_overrides.pop(get_image_storage)
        assert response.status_code == 400
        assert list(Path(tmp_path).iterdir()) == []


class TestImageStorage:
    """Unit tests for the storage backend."""

    def test_save_writes_file(self, tmp_path):
        storage = ImageStorage(directory=tmp_path, url_prefix="/static/uploads")
        url = storage.save(ImageUpload(filename="Plat.JPEG", content=b"data"))
        assert url.endswith(".jpeg")
        assert storage.path_for(url).read_bytes() == b"data"

    def test_empty_file_rejected(self, tmp_path):
        storage = ImageStorage(directory=tmp_path)
        with pytest.raises(ValueError):
            storage.save(ImageUpload(filename="a.png", content=b""))

    def test_size_limit(self, tmp_path):
        storage = ImageStorage(directory=tmp_path, max_bytes=4)
        with pytest.raises(ValueError):
            storage.save(ImageUpload(filename="a.png", content=b"12345"))
        assert list(Path(tmp_path).iterdir()) == []


class TestServiceImages:
    """Raw images handed to a service are stored and their URL persisted."""

    def test_create_with_image(self, db_session, tmp_path):
        storage = ImageStorage(directory=tmp_path)
        service = CategoryService(db_session, storage=storage)

        output = service.create({"name": "Boulangerie"}, image=ImageUpload("logo.png", PNG_BYTES))

        assert output.image_url.startswith(settings.upload_url_prefix + "/")
        assert storage.path_for(output.image_url).read_bytes() == PNG_BYTES
        assert db_session.get(Category, output.id).image_url == output.image_url

    def test_create_with_bad_extension(self, db_session, tmp_path):
        service = CategoryService(db_session, storage=ImageStorage(directory=tmp_path))
        with pytest.raises(ValidationError):
            service.create({"name": "Boulangerie"}, image=ImageUpload("logo.exe", b"MZ"))
        assert db_session.query(Category).count() == 0

    def test_update_without_image_keeps_it(self, db_session, tmp_path):
        service = CategoryService(db_session, storage=ImageStorage(directory=tmp_path))
        created = service.create({"name": "Boulangerie"}, image=ImageUpload("logo.png", PNG_BYTES))

        updated = service.update(created.id, {"name": "Boulangerie Moderne"})

        assert updated.image_url == created.image_url
        assert updated.slug == "boulangerie-moderne"

    def test_update_replaces_image(self, db_session, tmp_path):
        service = CategoryService(db_session, storage=ImageStorage(directory=tmp_path))
        created = service.create({"name": "Boulangerie"}, image=ImageUpload("logo.png", PNG_BYTES))

        updated = service.update(
            created.id, {"name": "Boulangerie"}, image=ImageUpload("nouveau.jpg", b"jpeg-bytes")
        )

        assert updated.image_url != created.image_url
        assert updated.image_url.endswith(".jpg")
