"""
Rate limiting utilities using slowapi.
Protects the login endpoint from credential stuffing.

Usage:
    from shared.security.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(settings.login_rate_limit)
    def login(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

# Client IP is the rate limiting key
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render rate limit rejections in the standard error shape."""
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        ip_address=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "Trop de tentatives. Réessayez plus tard.",
            "details": str(exc.detail),
        },
    )
