"""
Tests for the dashboard client's local filtering and pagination.
"""

from datetime import date

import pytest

from admin_client.listing import ListFilters, ListView, filter_records, paginate


BUSINESSES = [
    {
        "id": "b1",
        "name": "Pharmacie Koné",
        "description": "Pharmacie de garde",
        "categoryId": "c-pharma",
        "category": {"id": "c-pharma", "name": "Pharmacie"},
        "isOpen": True,
        "createdAt": "2026-10-01T08:00:00",
    },
    {
        "id": "b2",
        "name": "Chez Fatou",
        "description": "Cuisine malienne",
        "categoryId": "c-resto",
        "category": {"id": "c-resto", "name": "Restaurant"},
        "isOpen": False,
        "createdAt": "2026-10-05T23:30:00",
    },
    {
        "id": "b3",
        "name": "Taxi Diarra",
        "description": None,
        "categoryId": "c-taxi",
        "category": {"id": "c-taxi", "name": "Taxi"},
        "isOpen": True,
        "createdAt": "2026-10-10T12:00:00Z",
    },
]


def _ids(records):
    return [r["id"] for r in records]


class TestFilterRecords:
    """Search, category, status and date filters."""

    def test_no_filters_keeps_everything(self):
        assert _ids(filter_records(BUSINESSES, ListFilters())) == ["b1", "b2", "b3"]

    def test_search_is_case_insensitive_on_name(self):
        assert _ids(filter_records(BUSINESSES, ListFilters(search="FATOU"))) == ["b2"]

    def test_search_matches_description(self):
        assert _ids(filter_records(BUSINESSES, ListFilters(search="malienne"))) == ["b2"]

    def test_search_matches_category_name(self):
        assert _ids(filter_records(BUSINESSES, ListFilters(search="restau"))) == ["b2"]

    def test_category_filter(self):
        assert _ids(filter_records(BUSINESSES, ListFilters(category_id="c-taxi"))) == ["b3"]

    def test_open_and_closed(self):
        assert _ids(filter_records(BUSINESSES, ListFilters(status="open"))) == ["b1", "b3"]
        assert _ids(filter_records(BUSINESSES, ListFilters(status="closed"))) == ["b2"]

    def test_order_status(self):
        orders = [{"id": "o1", "status": "PENDING"}, {"id": "o2", "status": "DELIVERED"}]
        assert _ids(filter_records(orders, ListFilters(status="DELIVERED"))) == ["o2"]

    def test_menu_item_availability(self):
        items = [{"id": "i1", "isAvailable": True}, {"id": "i2", "isAvailable": False}]
        assert _ids(filter_records(items, ListFilters(status="closed"))) == ["i2"]

    def test_end_date_covers_whole_day(self):
        filters = ListFilters(start_date=date(2026, 10, 5), end_date=date(2026, 10, 5))
        assert _ids(filter_records(BUSINESSES, filters)) == ["b2"]

    def test_open_ended_ranges(self):
        assert _ids(filter_records(BUSINESSES, ListFilters(start_date=date(2026, 10, 2)))) == ["b2", "b3"]
        assert _ids(filter_records(BUSINESSES, ListFilters(end_date=date(2026, 10, 5)))) == ["b1", "b2"]

    def test_custom_category_field(self):
        items = [{"id": "i1", "menuSectionId": "s1"}, {"id": "i2", "menuSectionId": "s2"}]
        filtered = filter_records(items, ListFilters(category_id="s2"), category_field="menuSectionId")
        assert _ids(filtered) == ["i2"]


class TestPaginate:
    """Pure slicing with clamped pages."""

    def test_slices_pages(self):
        items = [{"id": str(i)} for i in range(25)]
        page = paginate(items, 3, 10)
        assert _ids(page.items) == [str(i) for i in range(20, 25)]
        assert page.total == 25
        assert page.total_pages == 3
        assert page.has_previous and not page.has_next
        assert (page.first_index, page.last_index) == (21, 25)

    def test_empty_list_has_one_page(self):
        page = paginate([], 1, 10)
        assert page.items == []
        assert page.total_pages == 1
        assert (page.first_index, page.last_index) == (0, 0)

    def test_out_of_range_page_clamped(self):
        items = [{"id": str(i)} for i in range(5)]
        assert paginate(items, 9, 2).page == 3
        assert paginate(items, 0, 2).page == 1

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate([], 1, 0)


class TestListView:
    """Filter and page-size changes go back to page 1."""

    def _view(self):
        records = [{"id": str(i), "name": f"Commerce {i}", "isOpen": i % 2 == 0} for i in range(30)]
        return ListView(records, page_size=5)

    def test_filter_change_resets_page(self):
        view = self._view()
        view.go_to(4)
        assert view.page == 4
        view.update_filters(status="open")
        assert view.page == 1
        assert view.current().total == 15

    def test_page_size_change_resets_page(self):
        view = self._view()
        view.go_to(3)
        view.set_page_size(20)
        assert view.page == 1
        assert view.current().total_pages == 2

    def test_clear_filters(self):
        view = self._view()
        view.update_filters(search="Commerce 1")
        assert view.current().total == 11
        view.clear_filters()
        assert view.current().total == 30
