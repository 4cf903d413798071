"""
Catalog models: Category, Business, MenuSection, MenuItem.

Category 1--N Business 1--N MenuSection 1--N MenuItem, plus the
many-to-many business_admin association between Business and User.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, IdMixin

if TYPE_CHECKING:
    from .order import Order
    from .user import User


business_admin = Table(
    "business_admin",
    Base.metadata,
    Column("business_id", ForeignKey("business.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True),
)


class Category(IdMixin, AuditMixin, Base):
    """Top-level marketplace category (Restaurant, Pharmacie, Taxi...)."""

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), unique=True, nullable=False, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    businesses: Mapped[list["Business"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug={self.slug})>"


class Business(IdMixin, AuditMixin, Base):
    """A commerce or service provider belonging to one category."""

    __tablename__ = "business"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category_id: Mapped[str] = mapped_column(
        ForeignKey("category.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    is_open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    category: Mapped["Category"] = relationship(back_populates="businesses")
    admins: Mapped[list["User"]] = relationship(
        secondary=business_admin, back_populates="managed_businesses"
    )
    menu_sections: Mapped[list["MenuSection"]] = relationship(
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="MenuSection.created_at",
    )
    orders: Mapped[list["Order"]] = relationship(back_populates="business")

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, slug={self.slug}, category_id={self.category_id})>"


class MenuSection(IdMixin, AuditMixin, Base):
    """A section of a business menu (Entrée, Plat Principal, Dessert)."""

    __tablename__ = "menu_section"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    business_id: Mapped[str] = mapped_column(
        ForeignKey("business.id", ondelete="CASCADE"), nullable=False, index=True
    )

    business: Mapped["Business"] = relationship(back_populates="menu_sections")
    menu_items: Mapped[list["MenuItem"]] = relationship(
        back_populates="menu_section",
        cascade="all, delete-orphan",
        order_by="MenuItem.created_at",
    )

    def __repr__(self) -> str:
        return f"<MenuSection(id={self.id}, name={self.name}, business_id={self.business_id})>"


class MenuItem(IdMixin, AuditMixin, Base):
    """
    A purchasable item. Price is an integer amount in francs CFA.
    """

    __tablename__ = "menu_item"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    menu_section_id: Mapped[str] = mapped_column(
        ForeignKey("menu_section.id", ondelete="CASCADE"), nullable=False, index=True
    )

    menu_section: Mapped["MenuSection"] = relationship(back_populates="menu_items")

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_menu_item_price_positive"),
    )

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name={self.name}, price={self.price})>"
