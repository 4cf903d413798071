"""
CORS for the dashboard front-end.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings

# Vite and CRA dev servers
DEV_ORIGINS = [
    f"http://{host}:{port}"
    for host in ("localhost", "127.0.0.1")
    for port in (3000, 5173)
]


def get_cors_origins() -> list[str]:
    """Origins from ALLOWED_ORIGINS (comma separated), else the dev servers."""
    configured = [origin.strip() for origin in settings.allowed_origins.split(",")]
    return [origin for origin in configured if origin] or DEV_ORIGINS


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID", "Accept", "Accept-Language"],
        expose_headers=["X-Request-ID"],
        # No preflight caching in development
        max_age=0 if settings.environment == "development" else 600,
    )
