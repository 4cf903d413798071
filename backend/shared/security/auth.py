"""
Bearer tokens for back-office administrators.

Tokens are HS256 JWTs carrying ``sub``, ``email`` and the ``isAdmin`` claim,
bound to the configured issuer and audience.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Depends, Header

from shared.config.logging import get_logger
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET, settings
from shared.utils.exceptions import AuthenticationError, ForbiddenError

logger = get_logger(__name__)

ADMIN_CLAIM = "isAdmin"
ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "

INVALID_TOKEN = "Jeton invalide"
EXPIRED_TOKEN = "Session expirée"


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign ``payload`` with registered claims added.

    ttl_seconds defaults to the configured access token lifetime; a negative
    value produces an already expired token.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60
    issued_at = int(time.time())
    claims = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Decode a token and return its claims.

    Raises:
        AuthenticationError: Expired, badly signed, wrong issuer/audience,
            or no subject.
    """
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(EXPIRED_TOKEN)
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(INVALID_TOKEN, reason=str(e))
    if not claims.get("sub"):
        raise AuthenticationError(INVALID_TOKEN, reason="empty subject")
    return claims


def get_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthenticationError()
    if not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError("En-tête Authorization invalide. Format attendu : Bearer <token>")
    return authorization[len(BEARER_PREFIX):].strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """FastAPI dependency: verified claims of the caller's token."""
    return verify_jwt(get_bearer_token(authorization))


def require_admin(user: dict[str, Any] = Depends(current_user_context)) -> dict[str, Any]:
    """FastAPI dependency: the caller's claims, provided they carry isAdmin."""
    if user.get(ADMIN_CLAIM) is not True:
        raise ForbiddenError("Accès réservé aux administrateurs", user_id=user.get("sub"))
    return user
