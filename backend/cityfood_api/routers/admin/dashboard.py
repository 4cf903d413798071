"""
Dashboard statistics endpoint.
"""

from cityfood_api.routers.admin._base import (
    APIRouter, Depends, Session, get_db,
)
from cityfood_api.services.domain import DashboardService
from shared.utils.admin_schemas import DashboardStats


router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(db: Session = Depends(get_db)) -> DashboardStats:
    """Counts, orders per day and per category, recent orders and revenue."""
    return DashboardService(db).get_dashboard_stats()
