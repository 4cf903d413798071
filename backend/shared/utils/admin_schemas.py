"""
Pydantic schemas for the back-office API.

Output schemas are built from ORM objects (from_attributes); inputs mirror
the request bodies of each resource.
"""

from datetime import datetime

from pydantic import EmailStr, Field

from shared.config.constants import Limits
from shared.utils.schemas import CamelModel


# =============================================================================
# Categories
# =============================================================================


class CategoryOutput(CamelModel):
    id: str
    name: str
    slug: str
    image_url: str | None = None
    created_at: datetime


class CategoryCreate(CamelModel):
    name: str
    image_url: str | None = None


class CategoryUpdate(CamelModel):
    id: str
    name: str
    image_url: str | None = None


# =============================================================================
# Admin users
# =============================================================================


class AdminOutput(CamelModel):
    id: str
    name: str | None = None
    email: str
    phone: str | None = None
    created_at: datetime


class AdminCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str | None = None
    phone: str | None = None


class AdminUpdate(CamelModel):
    id: str
    name: str | None = None
    phone: str | None = None


# =============================================================================
# Businesses
# =============================================================================


class BusinessRef(CamelModel):
    """Minimal business reference embedded in other outputs."""

    id: str
    name: str
    slug: str


class BusinessOutput(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    category_id: str
    is_open: bool
    created_at: datetime
    category: CategoryOutput | None = None
    admins: list[AdminOutput] = []


class BusinessCreate(CamelModel):
    name: str
    category_id: str
    description: str | None = None
    image_url: str | None = None
    is_open: bool = True
    admin_ids: list[str] | None = None


class BusinessUpdate(CamelModel):
    id: str
    name: str
    category_id: str
    description: str | None = None
    image_url: str | None = None
    is_open: bool | None = None
    # None keeps the current admins; a list (even empty) replaces them
    admin_ids: list[str] | None = None


# =============================================================================
# Menu items
# =============================================================================


class MenuSectionRef(CamelModel):
    id: str
    name: str


class MenuItemOutput(CamelModel):
    id: str
    name: str
    description: str | None = None
    price: int
    type: str | None = None
    image_url: str | None = None
    is_available: bool
    menu_section_id: str
    created_at: datetime
    menu_section: MenuSectionRef | None = None


class MenuItemCreate(CamelModel):
    name: str
    price: int
    menu_section_id: str
    description: str | None = None
    type: str | None = None
    image_url: str | None = None
    is_available: bool = True


class MenuItemUpdate(CamelModel):
    id: str
    name: str
    price: int
    menu_section_id: str
    description: str | None = None
    type: str | None = None
    image_url: str | None = None
    is_available: bool | None = None


# =============================================================================
# Menu sections
# =============================================================================


class MenuSectionOutput(CamelModel):
    id: str
    name: str
    business_id: str
    created_at: datetime
    business: BusinessRef | None = None
    menu_items: list[MenuItemOutput] = []


class MenuSectionCreate(CamelModel):
    name: str
    business_id: str


class MenuSectionUpdate(CamelModel):
    id: str
    name: str
    business_id: str


class BusinessDetailOutput(BusinessOutput):
    """Single business, optionally with its menu."""

    menu_sections: list[MenuSectionOutput] | None = None


# =============================================================================
# Cart
# =============================================================================


class CartItemOutput(CamelModel):
    id: str
    cart_id: str
    menu_item_id: str
    quantity: int
    menu_item: MenuItemOutput | None = None


class CartOutput(CamelModel):
    id: str
    user_id: str
    cart_items: list[CartItemOutput] = []


class AddToCartRequest(CamelModel):
    user_id: str
    menu_item_id: str
    quantity: int = 1


class SetCartItemQuantityRequest(CamelModel):
    cart_item_id: str
    quantity: int


class RemoveCartItemRequest(CamelModel):
    cart_item_id: str


# =============================================================================
# Addresses
# =============================================================================


class AddressOutput(CamelModel):
    id: str
    street: str
    city: str
    zip_code: str
    country: str
    user_id: str


class AddressCreate(CamelModel):
    user_id: str
    street: str
    city: str
    zip_code: str
    country: str = "Mali"


# =============================================================================
# Orders
# =============================================================================


class OrderItemOutput(CamelModel):
    id: str
    menu_item_id: str | None = None
    name: str
    price: int
    quantity: int


class OrderBusiness(CamelModel):
    name: str


class OrderOutput(CamelModel):
    id: str
    user_id: str
    phone: str
    address_id: str
    business_id: str
    total: int
    status: str
    created_at: datetime
    business: OrderBusiness | None = None
    items: list[OrderItemOutput] = []


class OrderLineInput(CamelModel):
    menu_item_id: str
    quantity: int = Field(default=1, ge=Limits.MIN_QUANTITY, le=Limits.MAX_QUANTITY)


class OrderCreate(CamelModel):
    user_id: str
    phone: str
    address_id: str
    business_id: str
    status: str | None = None
    items: list[OrderLineInput]


class OrderStatusUpdate(CamelModel):
    id: str
    status: str


# =============================================================================
# Dashboard
# =============================================================================


class OrdersByDay(CamelModel):
    created_at: datetime
    count: int


class OrdersByCategory(CamelModel):
    name: str
    total: int


class RevenueStats(CamelModel):
    total_revenue: float
    average_order_value: float


class DashboardStats(CamelModel):
    user_count: int
    business_count: int
    category_count: int
    order_count: int
    orders_by_day: list[OrdersByDay]
    orders_by_category: list[OrdersByCategory]
    recent_orders: list[OrderOutput]
    revenue_stats: RevenueStats


class UploadOutput(CamelModel):
    url: str
