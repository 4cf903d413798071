"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    AuthenticationError,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    ConflictError,
)
from shared.utils.validators import (
    slugify,
    validate_image_url,
    validate_name,
    validate_quantity,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "AppException",
    "AuthenticationError",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    # validators
    "slugify",
    "validate_image_url",
    "validate_name",
    "validate_quantity",
    # schemas
    "ErrorResponse",
]
