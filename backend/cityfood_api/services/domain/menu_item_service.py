"""
Menu Item Service.

Business rules:
- An item belongs to an existing menu section
- Price is a positive whole amount in francs CFA
- isAvailable defaults to true
- Deleting items removes them from carts; order lines keep their snapshot
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from cityfood_api.models import CartItem, MenuItem, MenuSection, OrderItem
from cityfood_api.services.base_service import BaseCRUDService
from shared.config.constants import Limits
from shared.infrastructure.storage import ImageStorage
from shared.utils.admin_schemas import MenuItemOutput
from shared.utils.exceptions import NotFoundError, ValidationError


def release_menu_items(db: Session, menu_item_ids: list[str]) -> None:
    """
    Detach menu items that are about to be deleted.

    Cart lines pointing at them are removed and order lines lose their
    live reference. Runs inside the caller's unit of work.
    """
    if not menu_item_ids:
        return
    db.execute(delete(CartItem).where(CartItem.menu_item_id.in_(menu_item_ids)))
    db.execute(
        update(OrderItem)
        .where(OrderItem.menu_item_id.in_(menu_item_ids))
        .values(menu_item_id=None)
    )


class MenuItemService(BaseCRUDService[MenuItem, MenuItemOutput]):
    """Service for menu items."""

    def __init__(self, db: Session, storage: ImageStorage | None = None):
        super().__init__(
            db=db,
            model=MenuItem,
            output_schema=MenuItemOutput,
            entity_name="Article",
            storage=storage,
            list_options=[selectinload(MenuItem.menu_section)],
        )

    def list_items(self, menu_section_id: str | None = None) -> list[MenuItemOutput]:
        """List items newest first, optionally for one section."""
        where = [MenuItem.menu_section_id == menu_section_id] if menu_section_id else None
        return self.list_all(where=where)

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._check_price(data)
        self._check_section(data.get("menu_section_id"))

    def _validate_update(self, entity: MenuItem, data: dict[str, Any]) -> None:
        self._require_name(data)
        self._check_price(data)
        self._check_section(data.get("menu_section_id"))
        if data.get("is_available") is None:
            data.pop("is_available", None)

    def _before_delete(self, entity: MenuItem) -> None:
        release_menu_items(self.db, [entity.id])

    def _check_price(self, data: dict[str, Any]) -> None:
        price = data.get("price")
        if price is None:
            raise ValidationError("Le prix est requis", field="price")
        if isinstance(price, bool) or not isinstance(price, int) or price < Limits.MIN_PRICE:
            raise ValidationError("Le prix doit être un entier positif", field="price", value=price)

    def _check_section(self, menu_section_id: str | None) -> None:
        if not menu_section_id:
            raise ValidationError("La section du menu est requise", field="menuSectionId")
        found = self.db.scalar(select(MenuSection.id).where(MenuSection.id == menu_section_id))
        if found is None:
            raise NotFoundError("Section du menu", menu_section_id)
