"""
Tests for order endpoints.
"""

import pytest

from cityfood_api.models import Address, MenuItem, Order
from cityfood_api.services.domain.order_service import OrderService
from shared.utils.exceptions import ValidationError


@pytest.fixture
def order_payload(seed_customer, seed_address, seed_business, seed_menu_item):
    """Body of a valid order with one line of two items."""
    return {
        "userId": seed_customer.id,
        "phone": "+22376000000",
        "addressId": seed_address.id,
        "businessId": seed_business.id,
        "items": [{"menuItemId": seed_menu_item.id, "quantity": 2}],
    }


class TestCreateOrder:
    """Order creation copies menu data into the lines."""

    def test_create_order(self, client, auth_headers, order_payload):
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["total"] == 4000
        assert data["business"]["name"] == "Chez Fatou"
        assert data["items"][0]["name"] == "Poulet Yassa"
        assert data["items"][0]["price"] == 2000
        assert data["items"][0]["quantity"] == 2

    def test_total_sums_every_line(self, client, auth_headers, db_session, order_payload, seed_section):
        dessert = MenuItem(name="Beignets de Banane", price=300, menu_section_id=seed_section.id)
        db_session.add(dessert)
        db_session.commit()
        order_payload["items"].append({"menuItemId": dessert.id, "quantity": 3})

        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 200
        assert response.json()["total"] == 2 * 2000 + 3 * 300

    def test_snapshot_survives_price_change(self, client, auth_headers, db_session, order_payload, seed_menu_item):
        order = client.post("/api/orders", headers=auth_headers, json=order_payload).json()

        seed_menu_item.price = 9999
        seed_menu_item.name = "Poulet Yassa Royal"
        db_session.commit()

        stored = client.get(f"/api/orders/{order['id']}", headers=auth_headers).json()
        assert stored["items"][0]["price"] == 2000
        assert stored["items"][0]["name"] == "Poulet Yassa"
        assert stored["total"] == 4000

    def test_unavailable_item_accepted(self, client, auth_headers, db_session, order_payload, seed_menu_item):
        """No availability check is made when ordering."""
        seed_menu_item.is_available = False
        db_session.commit()

        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 200

    def test_explicit_status(self, client, auth_headers, order_payload):
        order_payload["status"] = "READY"
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.json()["status"] == "READY"

    def test_unknown_status_rejected(self, client, auth_headers, order_payload):
        order_payload["status"] = "SHIPPED"
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 400

    def test_empty_order_rejected(self, client, auth_headers, order_payload):
        order_payload["items"] = []
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 400

    def test_zero_quantity_rejected(self, client, auth_headers, order_payload):
        order_payload["items"][0]["quantity"] = 0
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 400

    def test_quantity_above_limit_rejected(self, client, auth_headers, order_payload):
        order_payload["items"][0]["quantity"] = 1000
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 400

    def test_service_rejects_quantity_above_limit(self, db_session, order_payload):
        """The service enforces the bound for callers that skip the HTTP schema."""
        with pytest.raises(ValidationError):
            OrderService(db_session).create_order(
                user_id=order_payload["userId"],
                phone=order_payload["phone"],
                address_id=order_payload["addressId"],
                business_id=order_payload["businessId"],
                status=None,
                line_items=[{"menu_item_id": order_payload["items"][0]["menuItemId"], "quantity": 1000}],
            )
        assert db_session.query(Order).count() == 0

    def test_unknown_menu_item(self, client, auth_headers, order_payload):
        order_payload["items"][0]["menuItemId"] = "missing"
        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 404

    def test_address_of_another_user_rejected(self, client, auth_headers, db_session, order_payload, seed_admin_user):
        foreign = Address(street="Rue 1", city="Kayes", zip_code="2000", country="Mali", user_id=seed_admin_user.id)
        db_session.add(foreign)
        db_session.commit()
        order_payload["addressId"] = foreign.id

        response = client.post("/api/orders", headers=auth_headers, json=order_payload)
        assert response.status_code == 400


class TestOrderStatus:
    """Any known status may be written from any state."""

    def test_list_orders_newest_first(self, client, auth_headers, order_payload):
        first = client.post("/api/orders", headers=auth_headers, json=order_payload).json()
        second = client.post("/api/orders", headers=auth_headers, json=order_payload).json()

        response = client.get("/api/orders", headers=auth_headers)
        assert [o["id"] for o in response.json()] == [second["id"], first["id"]]

    def test_any_transition_allowed(self, client, auth_headers, order_payload):
        order = client.post("/api/orders", headers=auth_headers, json=order_payload).json()
        for status in ("DELIVERED", "PENDING", "CANCELLED", "PREPARING"):
            response = client.put(
                "/api/orders", headers=auth_headers, json={"id": order["id"], "status": status}
            )
            assert response.status_code == 200
            assert response.json()["status"] == status

    def test_unknown_status_update_rejected(self, client, auth_headers, order_payload):
        order = client.post("/api/orders", headers=auth_headers, json=order_payload).json()
        response = client.put(
            "/api/orders", headers=auth_headers, json={"id": order["id"], "status": "LOST"}
        )
        assert response.status_code == 400

    def test_get_unknown_order(self, client, auth_headers):
        response = client.get("/api/orders/missing", headers=auth_headers)
        assert response.status_code == 404
