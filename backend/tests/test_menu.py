"""
Tests for menu sections and menu items.
"""

from cityfood_api.models import CartItem, MenuItem, OrderItem


class TestMenuSectionEndpoints:
    """Test menu section CRUD operations."""

    def test_create_section(self, client, auth_headers, seed_business):
        response = client.post(
            "/api/menu-sections",
            headers=auth_headers,
            json={"name": "Dessert", "businessId": seed_business.id},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Dessert"
        assert data["business"]["slug"] == seed_business.slug
        assert data["menuItems"] == []

    def test_create_section_unknown_business(self, client, auth_headers):
        response = client.post(
            "/api/menu-sections",
            headers=auth_headers,
            json={"name": "Dessert", "businessId": "missing"},
        )
        assert response.status_code == 404

    def test_list_sections_with_items(self, client, auth_headers, seed_menu_item):
        response = client.get("/api/menu-sections", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data[0]["business"]["name"] == "Chez Fatou"
        assert data[0]["menuItems"][0]["id"] == seed_menu_item.id

    def test_update_section(self, client, auth_headers, seed_section):
        response = client.put(
            "/api/menu-sections",
            headers=auth_headers,
            json={"id": seed_section.id, "name": "Entrée", "businessId": seed_section.business_id},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Entrée"

    def test_delete_section_cascades_items(self, client, auth_headers, db_session, seed_menu_item, seed_section):
        """Items of a deleted section are gone and no longer listed."""
        response = client.request(
            "DELETE", "/api/menu-sections", headers=auth_headers, json={"id": seed_section.id}
        )
        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(MenuItem, seed_menu_item.id) is None

        listed = client.get("/api/menu-items", headers=auth_headers).json()
        assert seed_menu_item.id not in [item["id"] for item in listed]


class TestMenuItemEndpoints:
    """Test menu item CRUD operations."""

    def test_create_item_defaults_available(self, client, auth_headers, seed_section):
        response = client.post(
            "/api/menu-items",
            headers=auth_headers,
            json={"name": "Riz au Gras", "price": 1500, "menuSectionId": seed_section.id},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 1500
        assert data["isAvailable"] is True
        assert data["menuSection"]["name"] == "Plat Principal"

    def test_create_item_rejects_non_positive_price(self, client, auth_headers, seed_section):
        for price in (0, -500):
            response = client.post(
                "/api/menu-items",
                headers=auth_headers,
                json={"name": "Tô avec Sauce", "price": price, "menuSectionId": seed_section.id},
            )
            assert response.status_code == 400

    def test_create_item_unknown_section(self, client, auth_headers):
        response = client.post(
            "/api/menu-items",
            headers=auth_headers,
            json={"name": "Tô avec Sauce", "price": 1200, "menuSectionId": "missing"},
        )
        assert response.status_code == 404

    def test_filter_by_section(self, client, auth_headers, seed_menu_item, seed_business):
        other = client.post(
            "/api/menu-sections",
            headers=auth_headers,
            json={"name": "Dessert", "businessId": seed_business.id},
        ).json()
        client.post(
            "/api/menu-items",
            headers=auth_headers,
            json={"name": "Beignets de Banane", "price": 300, "menuSectionId": other["id"]},
        )

        response = client.get(
            "/api/menu-items", headers=auth_headers, params={"menuSectionId": other["id"]}
        )
        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Beignets de Banane"]
        assert len(client.get("/api/menu-items", headers=auth_headers).json()) == 2

    def test_update_item(self, client, auth_headers, seed_menu_item):
        response = client.put(
            "/api/menu-items",
            headers=auth_headers,
            json={
                "id": seed_menu_item.id,
                "name": "Poulet Yassa",
                "price": 2500,
                "menuSectionId": seed_menu_item.menu_section_id,
                "isAvailable": False,
            },
        )
        assert response.status_code == 200
        assert response.json()["price"] == 2500
        assert response.json()["isAvailable"] is False

    def test_delete_item_keeps_order_snapshot(
        self, client, auth_headers, db_session, seed_menu_item, seed_business, seed_customer, seed_address
    ):
        """Deleting an item removes it from carts; order lines keep name and price."""
        client.post(
            "/api/cart",
            headers=auth_headers,
            json={"userId": seed_customer.id, "menuItemId": seed_menu_item.id},
        )
        order = client.post(
            "/api/orders",
            headers=auth_headers,
            json={
                "userId": seed_customer.id,
                "phone": "+22376000000",
                "addressId": seed_address.id,
                "businessId": seed_business.id,
                "items": [{"menuItemId": seed_menu_item.id, "quantity": 2}],
            },
        ).json()

        response = client.request(
            "DELETE", "/api/menu-items", headers=auth_headers, json={"id": seed_menu_item.id}
        )
        assert response.status_code == 200

        db_session.expire_all()
        assert db_session.query(CartItem).count() == 0
        line = db_session.get(OrderItem, order["items"][0]["id"])
        assert line.menu_item_id is None
        assert line.name == "Poulet Yassa"
        assert line.price == 2000
