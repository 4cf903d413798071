"""
Tests for dashboard statistics.
"""

from datetime import datetime, timedelta, timezone

from cityfood_api.models import Business, Category, Order, OrderItem


def _add_order(db_session, user, address, business, total, created_at=None):
    order = Order(
        user_id=user.id,
        phone="+22376000000",
        address_id=address.id,
        business_id=business.id,
        total=total,
        status="DELIVERED",
        items=[OrderItem(name="Poulet Yassa", price=total, quantity=1)],
    )
    if created_at is not None:
        order.created_at = created_at
    db_session.add(order)
    db_session.commit()
    return order


class TestDashboardStats:
    """Test GET /api/dashboard/stats."""

    def test_empty_store(self, client, auth_headers):
        """Only the admin exists: zero everywhere, no error."""
        response = client.get("/api/dashboard/stats", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["userCount"] == 1
        assert data["businessCount"] == 0
        assert data["categoryCount"] == 0
        assert data["orderCount"] == 0
        assert data["ordersByDay"] == []
        assert data["ordersByCategory"] == []
        assert data["recentOrders"] == []
        assert data["revenueStats"] == {"totalRevenue": 0, "averageOrderValue": 0}

    def test_revenue_sum_and_mean(self, client, auth_headers, db_session, seed_customer, seed_address, seed_business):
        for total in (1000, 2500, 4000):
            _add_order(db_session, seed_customer, seed_address, seed_business, total)

        data = client.get("/api/dashboard/stats", headers=auth_headers).json()
        assert data["orderCount"] == 3
        assert data["revenueStats"]["totalRevenue"] == 7500
        assert data["revenueStats"]["averageOrderValue"] == 2500

    def test_orders_by_category_counts_orders(
        self, client, auth_headers, db_session, seed_customer, seed_address, seed_business
    ):
        """Every category is listed with the number of orders of its businesses."""
        empty = Category(name="Taxi", slug="taxi")
        db_session.add(empty)
        db_session.commit()
        second = Business(name="Chez Awa", slug="chez-awa", category_id=seed_business.category_id)
        db_session.add(second)
        db_session.commit()

        _add_order(db_session, seed_customer, seed_address, seed_business, 1000)
        _add_order(db_session, seed_customer, seed_address, seed_business, 9000)
        _add_order(db_session, seed_customer, seed_address, second, 500)

        data = client.get("/api/dashboard/stats", headers=auth_headers).json()
        assert data["ordersByCategory"] == [
            {"name": "Restaurant", "total": 3},
            {"name": "Taxi", "total": 0},
        ]

    def test_recent_orders_limited_to_five(
        self, client, auth_headers, db_session, seed_customer, seed_address, seed_business
    ):
        now = datetime.now(timezone.utc)
        orders = [
            _add_order(db_session, seed_customer, seed_address, seed_business, 1000 + i, now - timedelta(hours=i))
            for i in range(7)
        ]

        data = client.get("/api/dashboard/stats", headers=auth_headers).json()
        recent = data["recentOrders"]
        assert len(recent) == 5
        assert [o["id"] for o in recent] == [o.id for o in orders[:5]]
        assert recent[0]["business"] == {"name": "Chez Fatou"}

    def test_orders_by_day_ascending(self, client, auth_headers, db_session, seed_customer, seed_address, seed_business):
        now = datetime.now(timezone.utc)
        _add_order(db_session, seed_customer, seed_address, seed_business, 1000, now - timedelta(days=2))
        _add_order(db_session, seed_customer, seed_address, seed_business, 1000, now)

        data = client.get("/api/dashboard/stats", headers=auth_headers).json()
        series = data["ordersByDay"]
        assert len(series) == 2
        assert series[0]["createdAt"] < series[1]["createdAt"]
        assert all(point["count"] == 1 for point in series)
