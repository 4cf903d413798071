"""
Shared dependencies and helpers for back-office routers.

Every router under this package is mounted behind require_admin.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import require_admin
from shared.utils.schemas import CamelModel, IdInput

__all__ = [
    "APIRouter",
    "DeleteResponse",
    "Depends",
    "IdInput",
    "Query",
    "Session",
    "get_db",
    "require_admin",
    "status",
]


class DeleteResponse(CamelModel):
    """Acknowledgement returned by DELETE endpoints."""

    id: str
    deleted: bool = True
