"""
Tests for authentication endpoints and the admin gate.
"""

import jwt

from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET
from shared.security.auth import sign_jwt
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


class TestLogin:
    """Test login endpoint."""

    def test_login_success(self, client, seed_admin_user):
        """Valid credentials should return a token and the user."""
        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] > 0
        assert data["user"]["email"] == ADMIN_EMAIL
        assert data["user"]["isAdmin"] is True

    def test_token_carries_admin_claim(self, client, seed_admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        )
        token = response.json()["accessToken"]
        payload = jwt.decode(
            token, JWT_SECRET, algorithms=["HS256"], audience=JWT_AUDIENCE, issuer=JWT_ISSUER
        )
        assert payload["sub"] == seed_admin_user.id
        assert payload["isAdmin"] is True

    def test_login_email_is_case_insensitive(self, client, seed_admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 200

    def test_login_wrong_password(self, client, seed_admin_user):
        """Wrong password should return 401."""
        response = client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": "wrongpassword"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Identifiants invalides"

    def test_login_nonexistent_user(self, client, db_session):
        """Nonexistent user should return 401."""
        response = client.post(
            "/api/auth/login",
            json={"email": "nobody@test.com", "password": "password"},
        )
        assert response.status_code == 401

    def test_login_non_admin_refused(self, client, seed_customer):
        """A customer account cannot open a back-office session."""
        response = client.post(
            "/api/auth/login",
            json={"email": "client@test.com", "password": "client123"},
        )
        assert response.status_code == 401

    def test_login_invalid_email_format(self, client, db_session):
        """Malformed e-mail is a validation error."""
        response = client.post(
            "/api/auth/login",
            json={"email": "not-an-email", "password": "password"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Données invalides"


class TestMe:
    """Test the token introspection endpoint."""

    def test_me_returns_current_user(self, client, auth_headers, seed_admin_user):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["id"] == seed_admin_user.id

    def test_me_requires_token(self, client, db_session):
        response = client.get("/api/auth/me")
        assert response.status_code == 401


class TestAdminGate:
    """Every /api route outside auth and health needs an admin token."""

    def test_missing_token(self, client, db_session):
        response = client.get("/api/categories")
        assert response.status_code == 401
        assert response.json()["error"] == "Authentification requise"

    def test_malformed_header(self, client, db_session):
        response = client.get("/api/categories", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_garbage_token(self, client, db_session):
        response = client.get("/api/categories", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["error"] == "Jeton invalide"

    def test_expired_token(self, client, seed_admin_user):
        token = sign_jwt({"sub": seed_admin_user.id, "isAdmin": True}, ttl_seconds=-10)
        response = client.get("/api/categories", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"] == "Session expirée"

    def test_non_admin_token_forbidden(self, client, customer_auth_headers):
        response = client.get("/api/dashboard/stats", headers=customer_auth_headers)
        assert response.status_code == 403

    def test_admin_token_accepted(self, client, auth_headers):
        response = client.get("/api/categories", headers=auth_headers)
        assert response.status_code == 200
