"""
In-memory search, filtering and pagination for dashboard lists.

Records are the camelCase dicts returned by the API. Everything here is a
pure function of the fetched list; nothing goes back to the server.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
import math
from typing import Any, Iterable, Sequence

from shared.config.constants import Limits

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"


@dataclass(frozen=True)
class ListFilters:
    """Current filter state of a list view. Empty values disable a filter."""

    search: str = ""
    category_id: str | None = None
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class Page:
    items: list[dict[str, Any]]
    page: int
    page_size: int
    total: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def first_index(self) -> int:
        """1-based position of the first item shown, 0 when empty."""
        return (self.page - 1) * self.page_size + 1 if self.items else 0

    @property
    def last_index(self) -> int:
        return self.first_index + len(self.items) - 1 if self.items else 0


def parse_datetime(value: str | datetime) -> datetime:
    """Parse an API timestamp into a naive UTC datetime."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# =============================================================================
# Predicates
# =============================================================================


def _searchable_text(record: dict[str, Any]) -> Iterable[str]:
    yield record.get("name") or ""
    yield record.get("description") or ""
    for relation in ("category", "menuSection", "business"):
        related = record.get(relation)
        if isinstance(related, dict):
            yield related.get("name") or ""


def matches_search(record: dict[str, Any], search: str) -> bool:
    """Case-insensitive substring match over name, description and parent names."""
    needle = search.strip().lower()
    if not needle:
        return True
    return any(needle in text.lower() for text in _searchable_text(record))


def matches_category(record: dict[str, Any], category_id: str | None, category_field: str) -> bool:
    if not category_id:
        return True
    return record.get(category_field) == category_id


def matches_status(record: dict[str, Any], status: str | None) -> bool:
    """
    "open"/"closed" test isOpen (businesses) or isAvailable (menu items);
    any other value is compared with the record's status.
    """
    if not status:
        return True
    if status in (STATUS_OPEN, STATUS_CLOSED):
        wanted = status == STATUS_OPEN
        flag = record.get("isOpen", record.get("isAvailable"))
        return flag is wanted
    return record.get("status") == status


def matches_dates(record: dict[str, Any], start_date: date | None, end_date: date | None) -> bool:
    """Inclusive range on createdAt; the end date covers the whole day."""
    if start_date is None and end_date is None:
        return True
    created = record.get("createdAt")
    if not created:
        return False
    created_day = parse_datetime(created).date()
    if start_date is not None and created_day < start_date:
        return False
    if end_date is not None and created_day > end_date:
        return False
    return True


def filter_records(
    records: Sequence[dict[str, Any]],
    filters: ListFilters,
    *,
    category_field: str = "categoryId",
) -> list[dict[str, Any]]:
    """
    Apply every active filter, keeping the original order.

    Args:
        records: Full list as fetched from the API.
        filters: Current filter state.
        category_field: Record key the category filter compares against
            (menuSectionId for menu items, businessId for sections).
    """
    return [
        record
        for record in records
        if matches_search(record, filters.search)
        and matches_category(record, filters.category_id, category_field)
        and matches_status(record, filters.status)
        and matches_dates(record, filters.start_date, filters.end_date)
    ]


# =============================================================================
# Pagination
# =============================================================================


def paginate(items: Sequence[dict[str, Any]], page: int, page_size: int) -> Page:
    """
    Slice one page out of items. Out-of-range pages are clamped.

    Raises:
        ValueError: If page_size < 1.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )


@dataclass
class ListView:
    """
    A fetched list plus its filter and page state.

    Changing filters or the page size goes back to page 1.
    """

    records: list[dict[str, Any]]
    filters: ListFilters = field(default_factory=ListFilters)
    page_size: int = Limits.DEFAULT_PAGE_SIZE
    page: int = 1
    category_field: str = "categoryId"

    def set_filters(self, filters: ListFilters) -> None:
        self.filters = filters
        self.page = 1

    def update_filters(self, **changes: Any) -> None:
        self.set_filters(replace(self.filters, **changes))

    def clear_filters(self) -> None:
        self.set_filters(ListFilters())

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.page = 1

    def go_to(self, page: int) -> Page:
        current = paginate(self.filtered(), page, self.page_size)
        self.page = current.page
        return current

    def filtered(self) -> list[dict[str, Any]]:
        return filter_records(self.records, self.filters, category_field=self.category_field)

    def current(self) -> Page:
        return paginate(self.filtered(), self.page, self.page_size)
