"""
Property-based tests with Hypothesis.

Covers slug derivation, quantity validation, list pagination and the
cart line merge.
"""

import uuid

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from admin_client.listing import ListFilters, filter_records, paginate
from cityfood_api.models import CartItem, User
from cityfood_api.services.domain import CartService
from shared.utils.validators import slugify, validate_quantity


class TestSlugProperties:
    """slugify lowercases and collapses whitespace runs into one hyphen."""

    @given(st.text(max_size=60))
    def test_slug_has_no_whitespace(self, name):
        slug = slugify(name)
        assert not any(ch.isspace() for ch in slug)

    @given(st.text(alphabet="abcdeéèàôçKMNZ -\t\n", max_size=60))
    def test_slug_is_idempotent(self, name):
        slug = slugify(name)
        assert slugify(slug) == slug

    @given(st.lists(st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8), min_size=1, max_size=5))
    def test_words_joined_by_single_hyphen(self, words):
        assert slugify("   ".join(words)) == "-".join(words)

    def test_accents_kept(self):
        assert slugify("Pharmacie  Koné") == "pharmacie-koné"


class TestQuantityProperties:

    @given(st.integers(min_value=1, max_value=999))
    def test_valid_quantities_returned(self, quantity):
        assert validate_quantity(quantity) == quantity

    @given(st.integers(max_value=0))
    def test_non_positive_rejected(self, quantity):
        with pytest.raises(ValueError):
            validate_quantity(quantity)

    @given(st.integers(min_value=1000))
    def test_too_large_rejected(self, quantity):
        with pytest.raises(ValueError):
            validate_quantity(quantity)


records_strategy = st.lists(
    st.builds(lambda n: {"id": str(n), "name": f"Commerce {n}"}, st.integers(0, 10_000)),
    max_size=60,
    unique_by=lambda r: r["id"],
)


class TestPaginationProperties:
    """Pages partition the list and the page number is always in range."""

    @given(records_strategy, st.integers(min_value=1, max_value=25))
    def test_pages_partition_items(self, records, page_size):
        first = paginate(records, 1, page_size)
        collected = []
        for number in range(1, first.total_pages + 1):
            collected.extend(paginate(records, number, page_size).items)
        assert collected == records

    @given(records_strategy, st.integers(min_value=-5, max_value=50), st.integers(min_value=1, max_value=25))
    def test_page_clamped(self, records, page, page_size):
        result = paginate(records, page, page_size)
        assert 1 <= result.page <= result.total_pages
        assert len(result.items) <= page_size
        assert result.total == len(records)

    @given(records_strategy, st.text(max_size=5))
    def test_filter_is_subset_in_order(self, records, search):
        filtered = filter_records(records, ListFilters(search=search))
        positions = [records.index(r) for r in filtered]
        assert positions == sorted(positions)


class TestCartMergeProperties:
    """Repeated adds of one menu item end up in a single line."""

    @settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.lists(st.integers(min_value=1, max_value=50), min_size=1, max_size=6))
    def test_quantities_summed_into_one_line(self, db_session, seed_menu_item, quantities):
        user = User(email=f"{uuid.uuid4().hex}@cityfood.ml", password="x", name="Client")
        db_session.add(user)
        db_session.commit()

        service = CartService(db_session)
        for quantity in quantities:
            service.add_to_cart(user.id, seed_menu_item.id, quantity)

        cart = service.get_cart(user.id)
        assert cart is not None
        assert len(cart.cart_items) == 1
        assert cart.cart_items[0].quantity == sum(quantities)
        assert db_session.query(CartItem).filter_by(cart_id=cart.id).count() == 1
