"""
Business Service.

Business rules:
- A business belongs to an existing category
- Its slug is derived from the name and unique (409 "Ce commerce existe déjà")
- The admin set is replaced, never merged, when adminIds is supplied
- Deleting a business deletes its menu; it is refused while orders reference it

Usage:
    service = BusinessService(db)
    business = service.create({"name": "Pharmacie Koné", "category_id": cid})
    detail = service.get_by_id_or_slug("pharmacie-koné", include_sections=True)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from cityfood_api.models import Business, Category, MenuItem, MenuSection, Order, User
from cityfood_api.services.base_service import BaseCRUDService
from cityfood_api.services.crud.repository import BaseRepository
from cityfood_api.services.domain._slugs import SlugMixin
from cityfood_api.services.domain.menu_item_service import release_menu_items
from shared.config.constants import ErrorMessages
from shared.config.logging import catalog_logger as logger
from shared.infrastructure.storage import ImageStorage
from shared.utils.admin_schemas import BusinessDetailOutput, BusinessOutput, MenuSectionOutput
from shared.utils.exceptions import ConflictError, NotFoundError, ValidationError


class BusinessService(SlugMixin, BaseCRUDService[Business, BusinessOutput]):
    """Service for businesses (restaurants, pharmacies, shops...)."""

    def __init__(self, db: Session, storage: ImageStorage | None = None):
        super().__init__(
            db=db,
            model=Business,
            output_schema=BusinessOutput,
            entity_name="Commerce",
            conflict_message=ErrorMessages.BUSINESS_EXISTS,
            storage=storage,
            list_options=[selectinload(Business.category), selectinload(Business.admins)],
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_by_id_or_slug(self, key: str, *, include_sections: bool = False) -> BusinessDetailOutput:
        """
        Find one business by id or slug.

        Raises:
            NotFoundError: If neither matches.
        """
        options = list(self._list_options)
        if include_sections:
            options.append(
                selectinload(Business.menu_sections)
                .selectinload(MenuSection.menu_items)
                .selectinload(MenuItem.menu_section)
            )
        business = self.db.scalar(
            select(Business)
            .where(or_(Business.id == key, Business.slug == key))
            .options(*options)
            .limit(1)
        )
        if business is None:
            raise NotFoundError("Commerce", key)

        output = BusinessDetailOutput.model_validate(BusinessOutput.model_validate(business).model_dump())
        if include_sections:
            output.menu_sections = [MenuSectionOutput.model_validate(s) for s in business.menu_sections]
        return output

    # =========================================================================
    # Validation hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._assign_slug(data)
        self._check_category(data.get("category_id"))
        self._resolve_admins(data)

    def _validate_update(self, entity: Business, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._assign_slug(data, exclude_id=entity.id)
        self._check_category(data.get("category_id"))
        if data.get("is_open") is None:
            data.pop("is_open", None)
        self._resolve_admins(data)

    def _validate_delete(self, entity: Business) -> None:
        order_count = BaseRepository(Order, self.db).count(Order.business_id == entity.id)
        if order_count:
            raise ConflictError(
                "Impossible de supprimer un commerce qui a des commandes",
                details=f"{order_count} commande(s) rattachée(s)",
                business_id=entity.id,
            )

    def _before_commit_create(self, entity: Business, data: dict[str, Any]) -> None:
        if "admins" in data:
            entity.admins = data["admins"]

    def _before_commit_update(self, entity: Business, data: dict[str, Any]) -> None:
        if "admins" in data:
            # Full replacement of the association
            entity.admins = data["admins"]
            logger.info(
                "Business admins replaced",
                business_id=entity.id,
                admin_count=len(data["admins"]),
            )

    def _before_delete(self, entity: Business) -> None:
        item_ids = [item.id for section in entity.menu_sections for item in section.menu_items]
        release_menu_items(self.db, item_ids)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _check_category(self, category_id: str | None) -> None:
        if not category_id:
            raise ValidationError("La catégorie est requise", field="categoryId")
        if self.db.scalar(select(Category.id).where(Category.id == category_id)) is None:
            raise NotFoundError("Catégorie", category_id)

    def _resolve_admins(self, data: dict[str, Any]) -> None:
        """Turn data["admin_ids"] into data["admins"] (User rows)."""
        admin_ids = data.pop("admin_ids", None)
        if admin_ids is None:
            return

        unique_ids = list(dict.fromkeys(admin_ids))
        users = self.db.scalars(select(User).where(User.id.in_(unique_ids))).all() if unique_ids else []
        found = {user.id: user for user in users}
        for admin_id in unique_ids:
            user = found.get(admin_id)
            if user is None:
                raise NotFoundError("Administrateur", admin_id)
            if not user.is_admin:
                raise ValidationError(
                    "Seuls les administrateurs peuvent gérer un commerce",
                    field="adminIds",
                    user_id=admin_id,
                )
        data["admins"] = [found[admin_id] for admin_id in unique_ids]
