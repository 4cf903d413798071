"""
Administrator management endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Session, get_db, IdInput, DeleteResponse,
)
from cityfood_api.services.domain import AdminService
from shared.utils.admin_schemas import AdminCreate, AdminOutput, AdminUpdate


router = APIRouter(tags=["admins"])


@router.get("/admins", response_model=list[AdminOutput])
def list_admins(db: Session = Depends(get_db)) -> list[AdminOutput]:
    return AdminService(db).list_admins()


@router.post("/admins", response_model=AdminOutput)
def create_admin(body: AdminCreate, db: Session = Depends(get_db)) -> AdminOutput:
    """Create an administrator. 409 if the e-mail is taken."""
    return AdminService(db).create_admin(body.email, body.password, body.name, body.phone)


@router.put("/admins", response_model=AdminOutput)
def update_admin(body: AdminUpdate, db: Session = Depends(get_db)) -> AdminOutput:
    return AdminService(db).update_admin(body.id, body.model_dump(exclude={"id"}))


@router.delete("/admins", response_model=DeleteResponse)
def delete_admin(body: IdInput, db: Session = Depends(get_db)) -> DeleteResponse:
    AdminService(db).delete_admin(body.id)
    return DeleteResponse(id=body.id)
