"""
Menu section endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Session, get_db, IdInput, DeleteResponse,
)
from cityfood_api.services.domain import MenuSectionService
from shared.utils.admin_schemas import MenuSectionCreate, MenuSectionOutput, MenuSectionUpdate


router = APIRouter(tags=["menu-sections"])


@router.get("/menu-sections", response_model=list[MenuSectionOutput])
def list_menu_sections(db: Session = Depends(get_db)) -> list[MenuSectionOutput]:
    """List sections with their business and items."""
    return MenuSectionService(db).list_all()


@router.post("/menu-sections", response_model=MenuSectionOutput)
def create_menu_section(body: MenuSectionCreate, db: Session = Depends(get_db)) -> MenuSectionOutput:
    return MenuSectionService(db).create(body.model_dump())


@router.put("/menu-sections", response_model=MenuSectionOutput)
def update_menu_section(body: MenuSectionUpdate, db: Session = Depends(get_db)) -> MenuSectionOutput:
    return MenuSectionService(db).update(body.id, body.model_dump(exclude={"id"}))


@router.delete("/menu-sections", response_model=DeleteResponse)
def delete_menu_section(body: IdInput, db: Session = Depends(get_db)) -> DeleteResponse:
    """Delete a section together with all of its items."""
    MenuSectionService(db).delete(body.id)
    return DeleteResponse(id=body.id)
