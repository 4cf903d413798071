"""
Read-side data access for one model.

Services write through the session directly; the repository covers the
lookups they share: by id, filtered lists with eager loading, and counts.

    orders = BaseRepository(Order, db).find_all(
        options=[selectinload(Order.items)],
        order_by=Order.created_at.desc(),
    )
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from cityfood_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):

    def __init__(self, model: type[ModelT], session: Session):
        self.model = model
        self.session = session

    def _select(self, options: Sequence[Any] | None = None) -> Select:
        query = select(self.model)
        return query.options(*options) if options else query

    def find_by_id(self, entity_id: str, *, options: Sequence[Any] | None = None) -> ModelT | None:
        return self.session.scalar(self._select(options).where(self.model.id == entity_id))

    def find_all(
        self,
        *,
        options: Sequence[Any] | None = None,
        where: Sequence[Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """All rows matching ``where``, in ``order_by`` order."""
        query = self._select(options)
        if where:
            query = query.where(*where)
        if order_by is not None:
            query = query.order_by(order_by)
        # unique() is required once joinedload options touch collections
        return self.session.scalars(query).unique().all()

    def count(self, *where: Any) -> int:
        query = select(func.count()).select_from(self.model)
        if where:
            query = query.where(*where)
        return self.session.scalar(query) or 0
