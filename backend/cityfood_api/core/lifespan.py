"""
Startup and shutdown of the API process.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from cityfood_api.models import Base
from shared.config.logging import api_logger as logger, setup_logging
from shared.config.settings import DEV_JWT_SECRET, settings
from shared.infrastructure.db import engine, get_db_context


def check_configuration() -> None:
    """
    Refuse to start in production with unsafe settings; warn elsewhere.

    Raises:
        RuntimeError: Listing every problem found.
    """
    problems = settings.validate_production_secrets()
    for problem in problems:
        logger.error("Configuration error: %s", problem)
    if problems:
        raise RuntimeError("Unsafe production configuration: " + "; ".join(problems))
    if not settings.is_production and settings.jwt_secret == DEV_JWT_SECRET:
        logger.warning("Using the development JWT secret")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    check_configuration()
    logger.info("API starting", port=settings.rest_api_port, env=settings.environment)

    Base.metadata.create_all(bind=engine)

    if settings.seed_on_startup:
        from cityfood_api.seed import seed

        with get_db_context() as db:
            seed(db)

    yield

    logger.info("API stopping")
    engine.dispose()
