"""
HTTP exceptions raised by services and dependencies.

Each subclass fixes its status code and log level; constructing one logs it.
The application handlers render them as ``{"error": ..., "details": ...}``.

    raise NotFoundError("Catégorie", category_id)
    raise ConflictError("Cette catégorie existe déjà", slug=slug)
    raise ValidationError("Le nom est requis", field="name")
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """Base class. Keyword arguments beyond the known ones are log context only."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level: str = "warning"

    def __init__(
        self,
        detail: str,
        details: str | None = None,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        getattr(logger, self.log_level)(detail, status_code=self.status_code, **log_context)
        self.details = details
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """400: missing or malformed field."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppException):
    """401: missing, malformed or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Authentification requise", **log_context: Any):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"}, **log_context)


class ForbiddenError(AppException):
    """403: authenticated but not allowed."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, detail: str = "Accès refusé", **log_context: Any):
        super().__init__(detail, **log_context)


class NotFoundError(AppException):
    """404: ``NotFoundError("Commerce", business_id)``."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any = None, **log_context: Any):
        detail = f"{entity} introuvable" if entity_id is None else f"{entity} introuvable (ID {entity_id})"
        super().__init__(detail, entity=entity, entity_id=entity_id, **log_context)


class ConflictError(AppException):
    """409: duplicate unique key, or delete refused while dependents exist."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(AppException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level = "error"

    def __init__(self, detail: str = "Erreur interne du serveur", **log_context: Any):
        super().__init__(detail, **log_context)


class DatabaseError(InternalError):
    """Unexpected SQLAlchemy failure during a write."""

    def __init__(self, operation: str, **log_context: Any):
        super().__init__(f"Erreur de base de données pendant {operation}", operation=operation, **log_context)
