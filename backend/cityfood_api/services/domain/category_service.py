"""
Category Service.

Business rules:
- The slug is derived from the name on create and on every update
- Slugs are unique (409 "Cette catégorie existe déjà")
- A category that still has businesses cannot be deleted
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from cityfood_api.models import Business, Category
from cityfood_api.services.base_service import BaseCRUDService
from cityfood_api.services.crud.repository import BaseRepository
from cityfood_api.services.domain._slugs import SlugMixin
from shared.config.constants import ErrorMessages
from shared.infrastructure.storage import ImageStorage
from shared.utils.admin_schemas import CategoryOutput
from shared.utils.exceptions import ConflictError


class CategoryService(SlugMixin, BaseCRUDService[Category, CategoryOutput]):
    """Service for marketplace categories."""

    def __init__(self, db: Session, storage: ImageStorage | None = None):
        super().__init__(
            db=db,
            model=Category,
            output_schema=CategoryOutput,
            entity_name="Catégorie",
            conflict_message=ErrorMessages.CATEGORY_EXISTS,
            storage=storage,
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._assign_slug(data)

    def _validate_update(self, entity: Category, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._assign_slug(data, exclude_id=entity.id)

    def _validate_delete(self, entity: Category) -> None:
        business_count = BaseRepository(Business, self.db).count(
            Business.category_id == entity.id
        )
        if business_count:
            raise ConflictError(
                "Impossible de supprimer une catégorie qui contient des commerces",
                details=f"{business_count} commerce(s) rattaché(s)",
                category_id=entity.id,
            )
