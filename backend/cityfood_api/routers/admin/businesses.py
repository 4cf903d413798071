"""
Business management endpoints.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Query, Session, status, get_db, IdInput, DeleteResponse,
)
from cityfood_api.services.domain import BusinessService
from shared.utils.admin_schemas import (
    BusinessCreate,
    BusinessDetailOutput,
    BusinessOutput,
    BusinessUpdate,
)


router = APIRouter(tags=["businesses"])


@router.get("/businesses", response_model=list[BusinessOutput])
def list_businesses(db: Session = Depends(get_db)) -> list[BusinessOutput]:
    """List businesses with their category and admins, newest first."""
    return BusinessService(db).list_all()


@router.get("/businesses/{id_or_slug}", response_model=BusinessDetailOutput)
def get_business(
    id_or_slug: str,
    include_sections: bool = Query(default=False, alias="includeSections"),
    db: Session = Depends(get_db),
) -> BusinessDetailOutput:
    """Get one business by id or slug, optionally with its menu."""
    return BusinessService(db).get_by_id_or_slug(id_or_slug, include_sections=include_sections)


@router.post("/businesses", response_model=BusinessOutput, status_code=status.HTTP_201_CREATED)
def create_business(body: BusinessCreate, db: Session = Depends(get_db)) -> BusinessOutput:
    """Create a business in an existing category."""
    return BusinessService(db).create(body.model_dump())


@router.put("/businesses", response_model=BusinessOutput)
def update_business(body: BusinessUpdate, db: Session = Depends(get_db)) -> BusinessOutput:
    """Update a business; adminIds, when present, replaces the admin set."""
    return BusinessService(db).update(body.id, body.model_dump(exclude={"id"}))


@router.delete("/businesses", response_model=DeleteResponse)
def delete_business(body: IdInput, db: Session = Depends(get_db)) -> DeleteResponse:
    """Delete a business and its menu. 409 while orders reference it."""
    BusinessService(db).delete(body.id)
    return DeleteResponse(id=body.id)
