"""
Shared Pydantic schemas used across the application.

JSON on the wire is camelCase; Python attributes stay snake_case.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel


# =============================================================================
# Common Types
# =============================================================================

OrderStatusValue = Literal["PENDING", "PREPARING", "READY", "DELIVERED", "CANCELLED"]


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, accepts both spellings, reads ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: str | None = None


class IdInput(CamelModel):
    """Body of DELETE requests that address a record by id."""

    id: str


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class UserInfo(CamelModel):
    """Basic user information included in auth responses."""

    id: str
    email: str
    name: str | None = None
    is_admin: bool


class LoginResponse(CamelModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo
