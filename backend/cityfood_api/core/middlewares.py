"""
HTTP middlewares: security headers, request body content type, correlation IDs.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
HSTS = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds SECURITY_HEADERS to every response, plus HSTS in production."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = HSTS
        return response


class ContentTypeValidationMiddleware(BaseHTTPMiddleware):
    """
    Answers 415 when a POST/PUT/DELETE body is neither JSON nor, on the
    upload endpoint, multipart form data. Bodiless requests pass.
    """

    BODY_METHODS = frozenset({"POST", "PUT", "DELETE"})
    MULTIPART_PATHS = ("/api/uploads",)

    def _accepts(self, request: Request, content_type: str) -> bool:
        if content_type.startswith("application/json"):
            return True
        return (
            content_type.startswith("multipart/form-data")
            and request.url.path.startswith(self.MULTIPART_PATHS)
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        content_type = request.headers.get("content-type", "")
        if request.method in self.BODY_METHODS and content_type and not self._accepts(request, content_type):
            return JSONResponse(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                content={"error": "Type de contenu non supporté. Utilisez application/json"},
            )
        return await call_next(request)


def register_middlewares(app: FastAPI) -> None:
    # Last added runs first: correlation IDs wrap everything else
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ContentTypeValidationMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
