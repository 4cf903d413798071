"""
Tests for address endpoints.
"""


class TestAddressEndpoints:
    """Addresses are listed and created per user."""

    def test_create_address_defaults_country(self, client, auth_headers, seed_customer):
        response = client.post(
            "/api/addresses",
            headers=auth_headers,
            json={"userId": seed_customer.id, "street": "Rue 20 Badalabougou", "city": "Bamako", "zipCode": "1000"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["country"] == "Mali"
        assert data["userId"] == seed_customer.id

    def test_create_address_unknown_user(self, client, auth_headers):
        response = client.post(
            "/api/addresses",
            headers=auth_headers,
            json={"userId": "missing", "street": "Rue 1", "city": "Ségou", "zipCode": "3000"},
        )
        assert response.status_code == 404

    def test_create_address_blank_city(self, client, auth_headers, seed_customer):
        response = client.post(
            "/api/addresses",
            headers=auth_headers,
            json={"userId": seed_customer.id, "street": "Rue 1", "city": " ", "zipCode": "3000"},
        )
        assert response.status_code == 400

    def test_list_for_user(self, client, auth_headers, seed_address, seed_admin_user):
        response = client.get(
            "/api/addresses", headers=auth_headers, params={"userId": seed_address.user_id}
        )
        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [seed_address.id]

        other = client.get("/api/addresses", headers=auth_headers, params={"userId": seed_admin_user.id})
        assert other.json() == []
