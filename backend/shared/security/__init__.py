"""
Security module: Authentication, password hashing, rate limiting.
"""

from shared.security.auth import (
    ADMIN_CLAIM,
    sign_jwt,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    require_admin,
)
from shared.security.password import hash_password, verify_password
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "ADMIN_CLAIM",
    "sign_jwt",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "require_admin",
    # password
    "hash_password",
    "verify_password",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]
