"""
Base Service Classes.

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Usage:
    from cityfood_api.services.base_service import BaseCRUDService

    class CategoryService(BaseCRUDService[Category, CategoryOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Category,
                output_schema=CategoryOutput,
                entity_name="Catégorie",
            )

Every write commits exactly once. A unique-constraint violation raised by
the database becomes a ConflictError, whatever the pre-checks said.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cityfood_api.models import Base
from cityfood_api.services.crud.repository import BaseRepository
from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.infrastructure.storage import ImageStorage, ImageUpload
from shared.utils.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from shared.utils.validators import validate_image_url, validate_name

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(Generic[ModelT]):
    """
    Base service for domain operations.

    Holds the session and a repository for the service's main model.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self._db = db
        self._model = model
        self._repo = BaseRepository(model, db)

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    def _commit(self, operation: str, conflict_message: str = ErrorMessages.DUPLICATE_ENTRY) -> None:
        """
        Commit the unit of work.

        Raises:
            ConflictError: On unique or foreign-key violations.
            DatabaseError: On any other database failure.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            logger.warning("Integrity violation", operation=operation, error=str(e.orig))
            raise ConflictError(conflict_message, details=operation)
        except SQLAlchemyError as e:
            logger.error("Database failure", operation=operation, error=str(e), exc_info=True)
            raise DatabaseError(operation)


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Subclasses customize behaviour through the _validate_* and _after_*
    hooks and by overriding to_output.
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        conflict_message: str = ErrorMessages.DUPLICATE_ENTRY,
        storage: ImageStorage | None = None,
        list_options: list[Any] | None = None,
    ):
        super().__init__(db, model)
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._conflict_message = conflict_message
        self._storage = storage
        self._list_options = list_options or []

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: str, *, options: list[Any] | None = None) -> ModelT:
        """
        Get raw entity.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(entity_id, options=options)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: str) -> OutputT:
        return self.to_output(self.get_entity(entity_id, options=self._list_options))

    def list_all(self, *, where: list[Any] | None = None) -> list[OutputT]:
        """List entities, newest first."""
        entities = self._repo.find_all(
            options=self._list_options,
            where=where,
            order_by=self._model.created_at.desc(),
        )
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], image: ImageUpload | None = None) -> OutputT:
        """
        Create new entity.

        Args:
            data: Entity data dictionary (model attribute names).
            image: Optional raw image; its stored URL replaces data["image_url"].

        Raises:
            ValidationError: If data is invalid.
            ConflictError: If a unique key already exists.
        """
        data = self._prepare_image(data, image)
        self._validate_create(data)

        entity = self._model(**self._model_fields(data))
        self._db.add(entity)
        self._before_commit_create(entity, data)
        self._commit(f"create {self._model.__tablename__}", self._conflict_message)
        self._db.refresh(entity)

        logger.info(f"{self._entity_name} created", entity_id=entity.id)
        return self.to_output(entity)

    def update(
        self,
        entity_id: str,
        data: dict[str, Any],
        image: ImageUpload | None = None,
    ) -> OutputT:
        """
        Update existing entity.

        An absent image keeps the stored one.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
            ConflictError: If a unique key already exists.
        """
        entity = self.get_entity(entity_id)

        data = self._prepare_image(data, image)
        if data.get("image_url") is None:
            data.pop("image_url", None)

        self._validate_update(entity, data)

        for field_name, value in self._model_fields(data).items():
            setattr(entity, field_name, value)
        self._before_commit_update(entity, data)

        self._commit(f"update {self._model.__tablename__}", self._conflict_message)
        self._db.refresh(entity)

        logger.info(f"{self._entity_name} updated", entity_id=entity.id)
        return self.to_output(entity)

    def delete(self, entity_id: str) -> None:
        """
        Delete entity.

        Raises:
            NotFoundError: If entity not found.
            ConflictError: If a delete policy forbids it.
        """
        entity = self.get_entity(entity_id)
        self._validate_delete(entity)
        self._before_delete(entity)
        self._db.delete(entity)
        self._commit(f"delete {self._model.__tablename__}")
        logger.info(f"{self._entity_name} deleted", entity_id=entity_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """Convert entity to output DTO."""
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _model_fields(self, data: dict[str, Any]) -> dict[str, Any]:
        """Keep only keys that are mapped columns of the model."""
        columns = self._model.__table__.columns.keys()
        return {k: v for k, v in data.items() if k in columns and k != "id"}

    def _prepare_image(self, data: dict[str, Any], image: ImageUpload | None) -> dict[str, Any]:
        """Store a raw upload and validate the resulting or supplied image URL."""
        data = dict(data)
        try:
            if image is not None:
                storage = self._storage or ImageStorage()
                data["image_url"] = storage.save(image)
            if "image_url" in data:
                data["image_url"] = validate_image_url(data["image_url"])
        except ValueError as e:
            raise ValidationError("Image invalide", details=str(e), field="image_url")
        return data

    def _require_name(self, data: dict[str, Any]) -> str:
        """Validate and normalize data["name"]."""
        try:
            data["name"] = validate_name(data.get("name"))
        except ValueError as e:
            raise ValidationError(str(e), field="name")
        return data["name"]

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._require_name(data)

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        self._require_name(data)

    def _validate_delete(self, entity: ModelT) -> None:
        pass

    def _before_commit_create(self, entity: ModelT, data: dict[str, Any]) -> None:
        pass

    def _before_commit_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        pass

    def _before_delete(self, entity: ModelT) -> None:
        pass
