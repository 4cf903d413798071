"""
Back-office API router - combines all admin sub-routers.

- categories, businesses, menu_sections, menu_items: catalog CRUD
- cart: per-user carts
- orders, addresses: orders and the addresses they ship to
- admins: administrator accounts
- dashboard: aggregate statistics
- uploads: image files

All routes are prefixed with /api and require an admin token.
"""

from fastapi import APIRouter, Depends

from shared.security.auth import require_admin
from shared.utils.schemas import ErrorResponse

from .categories import router as categories_router
from .businesses import router as businesses_router
from .menu_sections import router as menu_sections_router
from .menu_items import router as menu_items_router
from .cart import router as cart_router
from .orders import router as orders_router
from .addresses import router as addresses_router
from .admins import router as admins_router
from .dashboard import router as dashboard_router
from .uploads import router as uploads_router


# Documented error shapes shared by every admin route
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409)
}

router = APIRouter(
    prefix="/api",
    dependencies=[Depends(require_admin)],
    responses=ERROR_RESPONSES,
)

router.include_router(categories_router)
router.include_router(businesses_router)
router.include_router(menu_sections_router)
router.include_router(menu_items_router)
router.include_router(cart_router)
router.include_router(orders_router)
router.include_router(addresses_router)
router.include_router(admins_router)
router.include_router(dashboard_router)
router.include_router(uploads_router)
