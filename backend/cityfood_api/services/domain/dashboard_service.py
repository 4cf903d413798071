"""
Dashboard statistics.

All figures are all-time and unfiltered; the dashboard narrows the
per-day series to a 7 or 30 day window on its side.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from cityfood_api.models import Business, Category, Order, User
from cityfood_api.services.crud.repository import BaseRepository
from shared.config.constants import Limits
from shared.utils.admin_schemas import (
    DashboardStats,
    OrderOutput,
    OrdersByCategory,
    OrdersByDay,
    RevenueStats,
)


class DashboardService:
    """Aggregates counts, order series and revenue for the admin dashboard."""

    def __init__(self, db: Session):
        self._db = db

    def get_dashboard_stats(self) -> DashboardStats:
        order_count = self._count(Order)
        return DashboardStats(
            user_count=self._count(User),
            business_count=self._count(Business),
            category_count=self._count(Category),
            order_count=order_count,
            orders_by_day=self.orders_by_day(),
            orders_by_category=self.orders_by_category(),
            recent_orders=self.recent_orders(),
            revenue_stats=self.revenue_stats(order_count),
        )

    def _count(self, model) -> int:
        return BaseRepository(model, self._db).count()

    def orders_by_day(self) -> list[OrdersByDay]:
        """Order counts grouped by creation timestamp, oldest first."""
        rows = self._db.execute(
            select(Order.created_at, func.count(Order.id))
            .group_by(Order.created_at)
            .order_by(Order.created_at.asc())
        ).all()
        return [OrdersByDay(created_at=created_at, count=count) for created_at, count in rows]

    def orders_by_category(self) -> list[OrdersByCategory]:
        """Number of orders per category, summed over its businesses."""
        rows = self._db.execute(
            select(Category.name, func.count(Order.id))
            .select_from(Category)
            .outerjoin(Business, Business.category_id == Category.id)
            .outerjoin(Order, Order.business_id == Business.id)
            .group_by(Category.id, Category.name)
            .order_by(Category.name)
        ).all()
        return [OrdersByCategory(name=name, total=total) for name, total in rows]

    def recent_orders(self) -> list[OrderOutput]:
        orders = self._db.scalars(
            select(Order)
            .options(selectinload(Order.business), selectinload(Order.items))
            .order_by(Order.created_at.desc())
            .limit(Limits.RECENT_ORDERS)
        ).all()
        return [OrderOutput.model_validate(o) for o in orders]

    def revenue_stats(self, order_count: int | None = None) -> RevenueStats:
        """Sum and mean of order totals; 0/0 when there are no orders."""
        if order_count is None:
            order_count = self._count(Order)
        total_revenue = self._db.scalar(select(func.sum(Order.total))) or 0
        average = total_revenue / order_count if order_count > 0 else 0
        return RevenueStats(total_revenue=total_revenue, average_order_value=average)
