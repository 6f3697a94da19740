"""API application lifespan.

Startup configures logging, opens the store, ensures the schema and loads the
sample data when enabled. Shutdown closes the store.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_book.database import Database
from recipe_book.database.seed import seed_database
from recipe_book.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_book.core.config import Settings


logger = get_logger(__name__)


async def open_database(settings: Settings) -> Database:
    """Open the store described by ``settings`` and prepare it for use."""
    database = Database(settings.database.url, echo=settings.database.echo)
    await database.open()
    await database.create_schema()
    if settings.database.seed:
        async with database.session() as session:
            await seed_database(session)
    return database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage the store for the lifetime of the application."""
    settings: Settings = app.state.settings

    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
    )

    app.state.database = await open_database(settings)
    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Shutting down application")
        await app.state.database.close()
        app.state.database = None
        logger.info("Application shutdown complete")
