"""
SQLAlchemy ORM Models Package.

- base: Base class, IdMixin and AuditMixin
- user: User, Address
- catalog: Category, Business (+ business_admin), MenuSection, MenuItem
- cart: Cart, CartItem
- order: Order, OrderItem
"""

from .base import Base, AuditMixin, IdMixin
from .user import User, Address
from .catalog import Category, Business, MenuSection, MenuItem, business_admin
from .cart import Cart, CartItem
from .order import Order, OrderItem

__all__ = [
    "Base",
    "AuditMixin",
    "IdMixin",
    "User",
    "Address",
    "Category",
    "Business",
    "MenuSection",
    "MenuItem",
    "business_admin",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
]
