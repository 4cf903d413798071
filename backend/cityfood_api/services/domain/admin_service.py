"""
Admin Service.

Manages back-office administrators (users with is_admin=True):
- E-mail is unique (409)
- Passwords are stored as bcrypt hashes
- An administrator who still owns orders cannot be deleted
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cityfood_api.models import Order, User
from cityfood_api.services.base_service import BaseService
from cityfood_api.services.crud.repository import BaseRepository
from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger, mask_email
from shared.security.password import hash_password, verify_password
from shared.utils.admin_schemas import AdminOutput
from shared.utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = get_logger(__name__)


class AdminService(BaseService[User]):
    """Service for administrator accounts."""

    def __init__(self, db: Session):
        super().__init__(db, User)
        self._entity_name = "Administrateur"

    def list_admins(self) -> list[AdminOutput]:
        admins = self.repo.find_all(
            where=[User.is_admin.is_(True)],
            order_by=User.created_at.desc(),
        )
        return [AdminOutput.model_validate(a) for a in admins]

    def create_admin(
        self,
        email: str,
        password: str,
        name: str | None = None,
        phone: str | None = None,
    ) -> AdminOutput:
        """
        Create an administrator.

        Raises:
            ValidationError: If email or password is missing.
            ConflictError: If the e-mail is already registered.
        """
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("L'email et le mot de passe sont requis")

        if self.db.scalar(select(User.id).where(func.lower(User.email) == email)) is not None:
            raise ConflictError(ErrorMessages.EMAIL_EXISTS, email=mask_email(email))

        user = User(
            email=email,
            password=hash_password(password),
            name=name,
            phone=phone,
            is_admin=True,
        )
        self.db.add(user)
        self._commit("create admin", ErrorMessages.EMAIL_EXISTS)
        self.db.refresh(user)
        logger.info("Admin created", user_id=user.id, email=mask_email(email))
        return AdminOutput.model_validate(user)

    def update_admin(self, admin_id: str, data: dict[str, Any]) -> AdminOutput:
        """Update name and/or phone; absent fields are left unchanged."""
        user = self._get_admin(admin_id)
        for field_name in ("name", "phone"):
            if data.get(field_name) is not None:
                setattr(user, field_name, data[field_name])
        self._commit("update admin")
        self.db.refresh(user)
        return AdminOutput.model_validate(user)

    def delete_admin(self, admin_id: str) -> None:
        user = self._get_admin(admin_id)
        if BaseRepository(Order, self.db).count(Order.user_id == user.id):
            raise ConflictError(
                "Impossible de supprimer un utilisateur qui a des commandes",
                user_id=admin_id,
            )
        self.db.delete(user)
        self._commit("delete admin")
        logger.info("Admin deleted", user_id=admin_id)

    def authenticate(self, email: str, password: str) -> User | None:
        """
        Return the administrator matching the credentials, or None.

        Unknown users, non-admin users and wrong passwords are
        indistinguishable to the caller.
        """
        user = self.db.scalar(select(User).where(func.lower(User.email) == email.strip().lower()))
        if user is None or not user.is_admin:
            return None
        if not verify_password(password, user.password):
            return None
        return user

    def _get_admin(self, admin_id: str) -> User:
        user = self.repo.find_by_id(admin_id)
        if user is None or not user.is_admin:
            raise NotFoundError(self._entity_name, admin_id)
        return user
