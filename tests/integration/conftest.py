"""Integration test fixtures.

Each test gets its own SQLite file; the API runs in-process through
``ASGITransport`` with its lifespan driven explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_book.database import Database
from recipe_book.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_book.core.config import Settings


pytestmark = pytest.mark.integration


@pytest.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database]:
    """Open store with the schema in place."""
    database = Database(test_settings.database.url)
    await database.open()
    await database.create_schema()
    try:
        yield database
    finally:
        await database.close()


@pytest.fixture
async def app(test_settings: Settings) -> AsyncGenerator[FastAPI]:
    """API application with its lifespan running."""
    app = create_app(test_settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def api(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the in-process API."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def catalogue(api: AsyncClient) -> dict[str, int]:
    """A few stored ingredients, keyed by name."""
    ids: dict[str, int] = {}
    for name, unit in (("Flour", "g"), ("Eggs", "piece"), ("Salt", "pinch")):
        response = await api.post("/api/ingredients", json={"name": name, "unit": unit})
        assert response.status_code == 201
        ids[name] = response.json()["data"]["id"]
    return ids
