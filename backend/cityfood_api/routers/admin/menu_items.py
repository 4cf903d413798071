"""
Menu item endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Query, Session, get_db, IdInput, DeleteResponse,
)
from cityfood_api.services.domain import MenuItemService
from shared.utils.admin_schemas import MenuItemCreate, MenuItemOutput, MenuItemUpdate


router = APIRouter(tags=["menu-items"])


@router.get("/menu-items", response_model=list[MenuItemOutput])
def list_menu_items(
    menu_section_id: str | None = Query(default=None, alias="menuSectionId"),
    db: Session = Depends(get_db),
) -> list[MenuItemOutput]:
    """List items, optionally restricted to one section."""
    return MenuItemService(db).list_items(menu_section_id)


@router.post("/menu-items", response_model=MenuItemOutput)
def create_menu_item(body: MenuItemCreate, db: Session = Depends(get_db)) -> MenuItemOutput:
    return MenuItemService(db).create(body.model_dump())


@router.put("/menu-items", response_model=MenuItemOutput)
def update_menu_item(body: MenuItemUpdate, db: Session = Depends(get_db)) -> MenuItemOutput:
    return MenuItemService(db).update(body.id, body.model_dump(exclude={"id"}))


@router.delete("/menu-items", response_model=DeleteResponse)
def delete_menu_item(body: IdInput, db: Session = Depends(get_db)) -> DeleteResponse:
    MenuItemService(db).delete(body.id)
    return DeleteResponse(id=body.id)
