"""
Order Service.

Business rules:
- An order is created with at least one line
- Each line copies the menu item's name and price at creation time
- total = sum(price * quantity) over the snapshot lines
- No stock or availability check is made
- Status can be set to any known value at any time (no transition rules)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from cityfood_api.models import Address, Business, MenuItem, Order, OrderItem, User
from cityfood_api.services.base_service import BaseService
from shared.config.constants import ErrorMessages, Limits, OrderStatus, validate_order_status
from shared.config.logging import order_logger as logger
from shared.utils.admin_schemas import OrderOutput
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import validate_quantity

ORDER_OPTIONS = [selectinload(Order.business), selectinload(Order.items)]


class OrderService(BaseService[Order]):
    """Service for customer orders."""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def list_orders(self) -> list[OrderOutput]:
        """All orders, newest first."""
        orders = self.repo.find_all(options=ORDER_OPTIONS, order_by=Order.created_at.desc())
        return [OrderOutput.model_validate(o) for o in orders]

    def get_order(self, order_id: str) -> OrderOutput:
        order = self.repo.find_by_id(order_id, options=ORDER_OPTIONS)
        if order is None:
            raise NotFoundError("Commande", order_id)
        return OrderOutput.model_validate(order)

    def create_order(
        self,
        user_id: str,
        phone: str,
        address_id: str,
        business_id: str,
        status: str | None,
        line_items: list[dict[str, Any]],
    ) -> OrderOutput:
        """
        Persist an order with denormalized line items.

        Args:
            line_items: [{"menu_item_id": str, "quantity": int}, ...]

        Raises:
            ValidationError: Bad status, empty order, quantity outside 1..999, missing phone.
            NotFoundError: Unknown user, address, business or menu item.
        """
        status = status or OrderStatus.PENDING
        self._check_status(status)
        if not line_items:
            raise ValidationError("La commande doit contenir au moins un article", field="items")
        if not (phone or "").strip():
            raise ValidationError("Le téléphone est requis", field="phone")

        if self.db.get(User, user_id) is None:
            raise NotFoundError("Utilisateur", user_id)
        address = self.db.get(Address, address_id)
        if address is None:
            raise NotFoundError("Adresse", address_id)
        if address.user_id != user_id:
            raise ValidationError("L'adresse n'appartient pas à cet utilisateur", field="addressId")
        if self.db.get(Business, business_id) is None:
            raise NotFoundError("Commerce", business_id)

        menu_item_ids = {line["menu_item_id"] for line in line_items}
        menu_items = {
            item.id: item
            for item in self.db.scalars(select(MenuItem).where(MenuItem.id.in_(menu_item_ids)))
        }

        order = Order(
            user_id=user_id,
            phone=phone.strip(),
            address_id=address_id,
            business_id=business_id,
            status=status,
        )
        total = 0
        for line in line_items:
            quantity = line.get("quantity", 1)
            try:
                validate_quantity(quantity, Limits.MIN_QUANTITY, Limits.MAX_QUANTITY)
            except ValueError as e:
                raise ValidationError(str(e), field="quantity", value=quantity)
            menu_item = menu_items.get(line["menu_item_id"])
            if menu_item is None:
                raise NotFoundError("Article", line["menu_item_id"])
            order.items.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    name=menu_item.name,
                    price=menu_item.price,
                    quantity=quantity,
                )
            )
            total += menu_item.price * quantity
        order.total = total

        self.db.add(order)
        self._commit("create order")
        logger.info(
            "Order created",
            order_id=order.id,
            business_id=business_id,
            total=total,
            lines=len(order.items),
        )
        return self.get_order(order.id)

    def update_status(self, order_id: str, status: str) -> OrderOutput:
        """Write a new status; any known status is accepted from any state."""
        self._check_status(status)
        order = self.repo.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Commande", order_id)

        previous = order.status
        order.status = status
        self._commit("update order status")
        logger.info("Order status changed", order_id=order_id, previous=previous, status=status)
        return self.get_order(order_id)

    @staticmethod
    def _check_status(status: str) -> None:
        if not validate_order_status(status):
            raise ValidationError(
                ErrorMessages.INVALID_STATUS,
                details=f"Valeurs possibles : {', '.join(OrderStatus.ALL)}",
                field="status",
                value=status,
            )
