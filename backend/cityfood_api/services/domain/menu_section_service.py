"""
Menu Section Service.

A section belongs to one business; deleting it deletes its items.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from cityfood_api.models import Business, MenuItem, MenuSection
from cityfood_api.services.base_service import BaseCRUDService
from cityfood_api.services.domain.menu_item_service import release_menu_items
from shared.utils.admin_schemas import MenuSectionOutput
from shared.utils.exceptions import NotFoundError, ValidationError


class MenuSectionService(BaseCRUDService[MenuSection, MenuSectionOutput]):
    """Service for menu sections."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuSection,
            output_schema=MenuSectionOutput,
            entity_name="Section du menu",
            list_options=[
                selectinload(MenuSection.business),
                selectinload(MenuSection.menu_items).selectinload(MenuItem.menu_section),
            ],
        )

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._check_business(data.get("business_id"))

    def _validate_update(self, entity: MenuSection, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._check_business(data.get("business_id"))

    def _before_delete(self, entity: MenuSection) -> None:
        release_menu_items(self.db, [item.id for item in entity.menu_items])

    def _check_business(self, business_id: str | None) -> None:
        if not business_id:
            raise ValidationError("Le commerce est requis", field="businessId")
        if self.db.scalar(select(Business.id).where(Business.id == business_id)) is None:
            raise NotFoundError("Commerce", business_id)
