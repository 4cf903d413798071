"""
Cart endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Query, Session, get_db, DeleteResponse,
)
from cityfood_api.services.domain import CartService
from shared.utils.admin_schemas import (
    AddToCartRequest,
    CartItemOutput,
    CartOutput,
    RemoveCartItemRequest,
    SetCartItemQuantityRequest,
)


router = APIRouter(tags=["cart"])


@router.get("/cart", response_model=CartOutput | None)
def get_cart(
    user_id: str = Query(alias="userId"),
    db: Session = Depends(get_db),
) -> CartOutput | None:
    """The user's cart with items, or null when the user has none yet."""
    return CartService(db).get_cart(user_id)


@router.post("/cart", response_model=CartItemOutput)
def add_to_cart(body: AddToCartRequest, db: Session = Depends(get_db)) -> CartItemOutput:
    """Add an item; an item already in the cart has its quantity increased."""
    return CartService(db).add_to_cart(body.user_id, body.menu_item_id, body.quantity)


@router.put("/cart", response_model=CartItemOutput)
def set_cart_item_quantity(
    body: SetCartItemQuantityRequest,
    db: Session = Depends(get_db),
) -> CartItemOutput:
    return CartService(db).set_cart_item_quantity(body.cart_item_id, body.quantity)


@router.delete("/cart", response_model=DeleteResponse)
def remove_cart_item(body: RemoveCartItemRequest, db: Session = Depends(get_db)) -> DeleteResponse:
    CartService(db).remove_cart_item(body.cart_item_id)
    return DeleteResponse(id=body.cart_item_id)
