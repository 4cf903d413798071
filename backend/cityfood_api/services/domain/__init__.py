"""
Domain services.

Usage:
    from cityfood_api.services.domain import CategoryService

    service = CategoryService(db)
    category = service.create({"name": "Pharmacie"})
"""

from .address_service import AddressService
from .admin_service import AdminService
from .business_service import BusinessService
from .cart_service import CartService
from .category_service import CategoryService
from .dashboard_service import DashboardService
from .menu_item_service import MenuItemService
from .menu_section_service import MenuSectionService
from .order_service import OrderService

__all__ = [
    "AddressService",
    "AdminService",
    "BusinessService",
    "CartService",
    "CategoryService",
    "DashboardService",
    "MenuItemService",
    "MenuSectionService",
    "OrderService",
]
