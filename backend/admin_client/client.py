"""
HTTP client for the back-office API.

Lists are fetched whole; filtering and pagination happen locally in
admin_client.listing.

Usage:
    with AdminClient("http://localhost:8000") as api:
        api.login("admin1@cityfood.ml", "password123")
        businesses = api.list_resource("businesses")
"""

from __future__ import annotations

from typing import Any

import httpx

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

# CLI resource name -> API path
RESOURCE_PATHS: dict[str, str] = {
    "categories": "/api/categories",
    "businesses": "/api/businesses",
    "menu-sections": "/api/menu-sections",
    "menu-items": "/api/menu-items",
    "orders": "/api/orders",
    "admins": "/api/admins",
}


class AdminClientError(Exception):
    """Non-2xx response from the API, carrying its {error, details} body."""

    def __init__(self, status_code: int, error: str, details: str | None = None):
        self.status_code = status_code
        self.error = error
        self.details = details
        super().__init__(f"{status_code}: {error}" + (f" ({details})" if details else ""))


class AdminClient:
    """
    Thin wrapper over httpx for the admin endpoints.

    Accepts either a base URL or a ready httpx.Client (a FastAPI
    TestClient works, since it is one).
    """

    def __init__(
        self,
        base_url: str | httpx.Client | None = None,
        *,
        token: str | None = None,
        timeout: float = 10.0,
    ):
        if isinstance(base_url, httpx.Client):
            self._http = base_url
            self._owns_http = False
        else:
            self._http = httpx.Client(base_url=base_url or settings.api_base_url, timeout=timeout)
            self._owns_http = True
        self.token = token

    def __enter__(self) -> "AdminClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # =========================================================================
    # Requests
    # =========================================================================

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, path, headers=self._headers(), **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            logger.warning(
                "API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise AdminClientError(
                response.status_code,
                body.get("error") or response.reason_phrase,
                body.get("details"),
            )
        return response.json()

    # =========================================================================
    # Endpoints
    # =========================================================================

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and keep the access token for later calls."""
        body = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = body["accessToken"]
        return body

    def dashboard_stats(self) -> dict[str, Any]:
        return self._request("GET", "/api/dashboard/stats")

    def list_resource(self, resource: str, **params: Any) -> list[dict[str, Any]]:
        """
        Fetch the full list of a resource.

        Raises:
            KeyError: Unknown resource name.
        """
        path = RESOURCE_PATHS[resource]
        query = {k: v for k, v in params.items() if v is not None}
        return self._request("GET", path, params=query)

    def list_categories(self) -> list[dict[str, Any]]:
        return self.list_resource("categories")

    def list_businesses(self) -> list[dict[str, Any]]:
        return self.list_resource("businesses")

    def list_menu_sections(self) -> list[dict[str, Any]]:
        return self.list_resource("menu-sections")

    def list_menu_items(self, menu_section_id: str | None = None) -> list[dict[str, Any]]:
        return self.list_resource("menu-items", menuSectionId=menu_section_id)

    def list_orders(self) -> list[dict[str, Any]]:
        return self.list_resource("orders")

    def list_admins(self) -> list[dict[str, Any]]:
        return self.list_resource("admins")

    def get_cart(self, user_id: str) -> dict[str, Any] | None:
        return self._request("GET", "/api/cart", params={"userId": user_id})
