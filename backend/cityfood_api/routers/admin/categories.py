"""
Category management endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Session, status, get_db, IdInput, DeleteResponse,
)
from cityfood_api.services.domain import CategoryService
from shared.utils.admin_schemas import CategoryCreate, CategoryOutput, CategoryUpdate


router = APIRouter(tags=["categories"])


@router.get("/categories", response_model=list[CategoryOutput])
def list_categories(db: Session = Depends(get_db)) -> list[CategoryOutput]:
    """List categories, newest first."""
    return CategoryService(db).list_all()


@router.post("/categories", response_model=CategoryOutput, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryCreate, db: Session = Depends(get_db)) -> CategoryOutput:
    """Create a category. 409 if its slug already exists."""
    return CategoryService(db).create(body.model_dump())


@router.put("/categories", response_model=CategoryOutput)
def update_category(body: CategoryUpdate, db: Session = Depends(get_db)) -> CategoryOutput:
    """Rename a category; the image is only replaced when a new one is given."""
    return CategoryService(db).update(body.id, body.model_dump(exclude={"id"}))


@router.delete("/categories", response_model=DeleteResponse)
def delete_category(body: IdInput, db: Session = Depends(get_db)) -> DeleteResponse:
    """Delete a category that no longer has businesses."""
    CategoryService(db).delete(body.id)
    return DeleteResponse(id=body.id)
