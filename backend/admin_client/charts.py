"""
Shapes dashboard statistics for charts and summary cards.

The server groups ordersByDay by exact timestamp; the folding into
calendar days happens here, after the 7 or 30 day window is applied.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Sequence

from admin_client.listing import parse_datetime

PERIODS = (7, 30)

# Monday first, as date.weekday()
WEEKDAY_LABELS = ["Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim"]

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class DayPoint:
    day: date
    label: str
    count: int


@dataclass(frozen=True)
class CategoryShare:
    name: str
    total: int
    share: float


@dataclass(frozen=True)
class RevenueSummary:
    total_revenue: float
    average_order_value: float
    order_count: int

    @property
    def total_label(self) -> str:
        return format_fcfa(self.total_revenue)

    @property
    def average_label(self) -> str:
        return format_fcfa(self.average_order_value)


def format_fcfa(amount: float) -> str:
    """12500 -> "12 500 FCFA"."""
    return f"{round(amount):,}".replace(",", " ") + " FCFA"


def day_label(day: date) -> str:
    return f"{WEEKDAY_LABELS[day.weekday()]} {day:%d/%m}"


def orders_per_day(
    orders_by_day: Sequence[dict[str, Any]],
    period: int = 7,
    now: datetime | None = None,
) -> list[DayPoint]:
    """
    Orders per calendar day over the last `period` days, oldest first.

    An entry is kept when its age in whole days is below the period.
    Days without orders are not emitted.

    Raises:
        ValueError: If period is not 7 or 30.
    """
    if period not in PERIODS:
        raise ValueError(f"period must be one of {PERIODS}")
    now = parse_datetime(now or datetime.now(timezone.utc))

    buckets: Counter[date] = Counter()
    for entry in orders_by_day:
        created = parse_datetime(entry["createdAt"])
        age_days = int((now - created).total_seconds() // SECONDS_PER_DAY)
        if age_days < period:
            buckets[created.date()] += entry.get("count", 0)

    return [DayPoint(day=day, label=day_label(day), count=buckets[day]) for day in sorted(buckets)]


def category_shares(orders_by_category: Sequence[dict[str, Any]]) -> list[CategoryShare]:
    """Per-category order totals with their share of all orders, largest first."""
    grand_total = sum(entry["total"] for entry in orders_by_category)
    shares = [
        CategoryShare(
            name=entry["name"],
            total=entry["total"],
            share=entry["total"] / grand_total if grand_total else 0.0,
        )
        for entry in orders_by_category
    ]
    return sorted(shares, key=lambda s: (-s.total, s.name))


def revenue_summary(stats: dict[str, Any]) -> RevenueSummary:
    revenue = stats.get("revenueStats") or {}
    return RevenueSummary(
        total_revenue=float(revenue.get("totalRevenue") or 0),
        average_order_value=float(revenue.get("averageOrderValue") or 0),
        order_count=int(stats.get("orderCount") or 0),
    )
