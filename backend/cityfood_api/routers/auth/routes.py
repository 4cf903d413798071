"""
Authentication router.
Handles administrator login and token introspection.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from cityfood_api.models import User
from cityfood_api.services.domain import AdminService
from shared.config.logging import audit_auth_event, auth_logger as logger, mask_email
from shared.config.constants import ErrorMessages
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.auth import ADMIN_CLAIM, INVALID_TOKEN, current_user_context, sign_jwt
from shared.security.rate_limit import limiter
from shared.utils.exceptions import AuthenticationError
from shared.utils.schemas import LoginRequest, LoginResponse, UserInfo


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate an administrator and return an access token.

    The token contains:
    - sub: user ID
    - email: user's email
    - isAdmin: always true, non-admin accounts cannot log in
    """
    ip_address = request.client.host if request.client else None
    user = AdminService(db).authenticate(body.email, body.password)

    if user is None:
        audit_auth_event(
            "LOGIN_FAILED",
            email=body.email,
            success=False,
            reason="invalid_credentials",
            ip_address=ip_address,
        )
        raise AuthenticationError(ErrorMessages.INVALID_CREDENTIALS)

    access_token = sign_jwt({
        "sub": user.id,
        "email": user.email,
        ADMIN_CLAIM: True,
    })

    audit_auth_event("LOGIN", user_id=user.id, email=user.email, ip_address=ip_address)
    logger.info("LOGIN_SUCCESS", email=mask_email(user.email), user_id=user.id)

    return LoginResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserInfo.model_validate(user),
    )


@router.get("/me", response_model=UserInfo)
def me(
    user: dict[str, Any] = Depends(current_user_context),
    db: Session = Depends(get_db),
) -> UserInfo:
    """Return the account behind the current token."""
    account = db.get(User, user["sub"])
    if account is None:
        raise AuthenticationError(INVALID_TOKEN, user_id=user["sub"])
    return UserInfo.model_validate(account)
