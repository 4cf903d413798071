"""
Cart Models: one Cart per user holding CartItems.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, IdMixin

if TYPE_CHECKING:
    from .catalog import MenuItem
    from .user import User


class Cart(IdMixin, AuditMixin, Base):
    """A user's in-progress selection. Keyed 1:1 with User."""

    __tablename__ = "cart"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("app_user.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="cart")
    cart_items: Mapped[list["CartItem"]] = relationship(
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.created_at",
    )

    def __repr__(self) -> str:
        return f"<Cart(id={self.id}, user_id={self.user_id})>"


class CartItem(IdMixin, AuditMixin, Base):
    """
    A menu item in a cart.

    Adding the same menu item again increments quantity instead of
    inserting a second row.
    """

    __tablename__ = "cart_item"

    cart_id: Mapped[str] = mapped_column(
        ForeignKey("cart.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_item_id: Mapped[str] = mapped_column(
        ForeignKey("menu_item.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    cart: Mapped["Cart"] = relationship(back_populates="cart_items")
    menu_item: Mapped["MenuItem"] = relationship()

    __table_args__ = (
        UniqueConstraint("cart_id", "menu_item_id", name="uq_cart_item_cart_menu_item"),
        CheckConstraint("quantity >= 1", name="ck_cart_item_quantity"),
    )

    def __repr__(self) -> str:
        return f"<CartItem(id={self.id}, cart_id={self.cart_id}, menu_item_id={self.menu_item_id}, qty={self.quantity})>"
