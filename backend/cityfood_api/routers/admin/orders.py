"""
Order endpoints.

Status updates are not checked against a transition graph.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Session, get_db,
)
from cityfood_api.services.domain import OrderService
from shared.utils.admin_schemas import OrderCreate, OrderOutput, OrderStatusUpdate


router = APIRouter(tags=["orders"])


@router.get("/orders", response_model=list[OrderOutput])
def list_orders(db: Session = Depends(get_db)) -> list[OrderOutput]:
    return OrderService(db).list_orders()


@router.get("/orders/{order_id}", response_model=OrderOutput)
def get_order(order_id: str, db: Session = Depends(get_db)) -> OrderOutput:
    return OrderService(db).get_order(order_id)


@router.post("/orders", response_model=OrderOutput)
def create_order(body: OrderCreate, db: Session = Depends(get_db)) -> OrderOutput:
    """Create an order; line names and prices are copied from the menu."""
    return OrderService(db).create_order(
        user_id=body.user_id,
        phone=body.phone,
        address_id=body.address_id,
        business_id=body.business_id,
        status=body.status,
        line_items=[line.model_dump() for line in body.items],
    )


@router.put("/orders", response_model=OrderOutput)
def update_order_status(body: OrderStatusUpdate, db: Session = Depends(get_db)) -> OrderOutput:
    return OrderService(db).update_status(body.id, body.status)
