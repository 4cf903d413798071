"""
Order Models: Order and OrderItem.

OrderItem keeps a snapshot of the menu item name and price taken when the
order was created; later menu edits never change it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus

from .base import AuditMixin, Base, IdMixin

if TYPE_CHECKING:
    from .catalog import Business
    from .user import Address, User


class Order(IdMixin, AuditMixin, Base):
    """
    A finalized purchase.

    Status values: PENDING, PREPARING, READY, DELIVERED, CANCELLED.
    """

    __tablename__ = "customer_order"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    address_id: Mapped[str] = mapped_column(
        ForeignKey("address.id", ondelete="RESTRICT"), nullable=False
    )
    business_id: Mapped[str] = mapped_column(
        ForeignKey("business.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING, index=True
    )

    user: Mapped["User"] = relationship(back_populates="orders")
    address: Mapped["Address"] = relationship()
    business: Mapped["Business"] = relationship(back_populates="orders")
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, business_id={self.business_id}, total={self.total}, status={self.status})>"


class OrderItem(IdMixin, Base):
    """Line item of an order with name/price snapshot."""

    __tablename__ = "order_item"

    order_id: Mapped[str] = mapped_column(
        ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Live reference is informational only; cleared when the menu item is deleted
    menu_item_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("menu_item.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped["Order"] = relationship(back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_item_quantity"),
    )

    def __repr__(self) -> str:
        return f"<OrderItem(id={self.id}, name={self.name}, price={self.price}, qty={self.quantity})>"
