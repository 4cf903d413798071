"""
Dashboard client for the CityFood back-office API.

- client: HTTP access (login, stats, full resource lists)
- listing: in-memory search, filters and pagination of fetched lists
- charts: shaping of dashboard statistics for display
"""

from .client import AdminClient, AdminClientError
from .listing import ListFilters, ListView, Page, filter_records, paginate
from .charts import category_shares, orders_per_day, revenue_summary

__all__ = [
    "AdminClient",
    "AdminClientError",
    "ListFilters",
    "ListView",
    "Page",
    "filter_records",
    "paginate",
    "category_shares",
    "orders_per_day",
    "revenue_summary",
]
