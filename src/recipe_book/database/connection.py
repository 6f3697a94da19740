"""Relational store handle.

``Database`` wraps a SQLAlchemy async engine and session factory. It is
constructed explicitly, opened and closed by the application lifespan and
handed to whoever needs it; there is no process-wide instance.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from recipe_book.database.models import Base
from recipe_book.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator


logger = get_logger(__name__)


def _enable_sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ignores foreign keys (and so ON DELETE CASCADE) unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """Async store handle with an explicit open/close lifecycle.

    Example:
        ```python
        database = Database("sqlite+aiosqlite:///./recipe-book.db")
        await database.open()
        await database.create_schema()

        async with database.session() as session:
            ...

        await database.close()
        ```
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        """Initialize the handle without connecting.

        Args:
            url: SQLAlchemy async database URL.
            echo: Log every SQL statement.
        """
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """The underlying engine.

        Raises:
            RuntimeError: If the handle has not been opened.
        """
        if self._engine is None:
            msg = "Database not opened. Call open() first."
            raise RuntimeError(msg)
        return self._engine

    async def open(self) -> None:
        """Create the engine and verify connectivity."""
        if self._engine is not None:
            return

        logger.info("Opening database", backend=self.url.split(":", 1)[0])
        engine = create_async_engine(self.url, echo=self.echo)
        if self.is_sqlite:
            event.listen(engine.sync_engine, "connect", _enable_sqlite_pragmas)

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Failed to connect to database")
            await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)
        logger.info("Database connection established")

    async def close(self) -> None:
        """Dispose of the engine; safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; uncommitted work is rolled back on error."""
        if self._session_factory is None:
            msg = "Database not opened. Call open() first."
            raise RuntimeError(msg)
        async with self._session_factory() as session:
            try:
                yield session
            except BaseException:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """Create every table and index that does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Database schema ensured")

    async def drop_schema(self) -> None:
        """Drop every table."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def check_health(self) -> dict[str, str]:
        """Report connectivity as ``{"database": "healthy" | ...}``."""
        if self._engine is None:
            return {"database": "not_initialized"}
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("Database health check failed")
            return {"database": "unhealthy"}
        return {"database": "healthy"}
