"""
Address Service: delivery addresses owned by users.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from cityfood_api.models import Address, User
from cityfood_api.services.base_service import BaseService
from shared.utils.admin_schemas import AddressOutput
from shared.utils.exceptions import NotFoundError, ValidationError


class AddressService(BaseService[Address]):
    """Service for user addresses."""

    REQUIRED_FIELDS = ("street", "city", "zip_code", "country")

    def __init__(self, db: Session):
        super().__init__(db, Address)

    def list_for_user(self, user_id: str) -> list[AddressOutput]:
        addresses = self.repo.find_all(where=[Address.user_id == user_id], order_by=Address.city)
        return [AddressOutput.model_validate(a) for a in addresses]

    def create(self, data: dict[str, Any]) -> AddressOutput:
        if self.db.get(User, data.get("user_id")) is None:
            raise NotFoundError("Utilisateur", data.get("user_id"))
        for field_name in self.REQUIRED_FIELDS:
            if not str(data.get(field_name) or "").strip():
                raise ValidationError(f"Le champ {field_name} est requis", field=field_name)

        address = Address(
            user_id=data["user_id"],
            **{field_name: data[field_name].strip() for field_name in self.REQUIRED_FIELDS},
        )
        self.db.add(address)
        self._commit("create address")
        self.db.refresh(address)
        return AddressOutput.model_validate(address)
