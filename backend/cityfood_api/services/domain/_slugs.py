"""
Slug handling shared by the category and business services.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from shared.utils.exceptions import ConflictError
from shared.utils.validators import slugify


class SlugMixin:
    """
    Derives ``data["slug"]`` from ``data["name"]`` and pre-checks uniqueness.

    The pre-check only gives a friendlier error early; the unique
    constraint remains the authority at commit time.
    """

    _db: Any
    _model: Any
    _conflict_message: str

    def _assign_slug(self, data: dict[str, Any], exclude_id: str | None = None) -> str:
        slug = slugify(data["name"])
        query = select(self._model.id).where(self._model.slug == slug)
        if exclude_id is not None:
            query = query.where(self._model.id != exclude_id)
        if self._db.scalar(query.limit(1)) is not None:
            raise ConflictError(self._conflict_message, details=f"slug '{slug}'", slug=slug)
        data["slug"] = slug
        return slug
