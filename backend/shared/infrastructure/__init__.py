"""
Infrastructure module: Database sessions, image storage, correlation IDs.
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    build_engine,
    get_db,
    get_db_context,
    safe_commit,
)

__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "get_db",
    "get_db_context",
    "safe_commit",
]
