"""
Shared module for common utilities of the CityFood back-office.

STRUCTURE:
- shared.security: Authentication and authorization
  - auth.py: JWT signing/verification, current_user_context, require_admin
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting

- shared.infrastructure: Database, storage, request context
  - db.py: SQLAlchemy engine and sessions, safe_commit()
  - storage.py: Uploaded image files
  - correlation.py: Request correlation IDs

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: OrderStatus, Limits, ErrorMessages

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Slugs, names, quantities, image URLs
  - schemas.py / admin_schemas.py: Pydantic schemas

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, require_admin
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import OrderStatus
    from shared.utils.exceptions import NotFoundError, ConflictError
    from shared.utils.validators import slugify
"""
