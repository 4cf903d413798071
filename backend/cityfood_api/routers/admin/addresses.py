"""
Address endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Query, Session, get_db,
)
from cityfood_api.services.domain import AddressService
from shared.utils.admin_schemas import AddressCreate, AddressOutput


router = APIRouter(tags=["addresses"])


@router.get("/addresses", response_model=list[AddressOutput])
def list_addresses(
    user_id: str = Query(alias="userId"),
    db: Session = Depends(get_db),
) -> list[AddressOutput]:
    return AddressService(db).list_for_user(user_id)


@router.post("/addresses", response_model=AddressOutput)
def create_address(body: AddressCreate, db: Session = Depends(get_db)) -> AddressOutput:
    return AddressService(db).create(body.model_dump())
