"""Shared test fixtures and configuration for the Recipe Book tests."""

from __future__ import annotations

import os


# Settings are resolved at import time by some modules; pin the test profile
os.environ["APP_ENV"] = "test"

from typing import TYPE_CHECKING, Any

import pytest

from recipe_book.core.config import Settings, get_settings
from recipe_book.core.config.settings import (
    ClientSettings,
    DatabaseSettings,
    LoggingSettings,
)


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None]:
    """Every test sees settings loaded from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test settings backed by a throwaway SQLite file."""
    return Settings(
        APP_ENV="test",
        database=DatabaseSettings(
            url=f"sqlite+aiosqlite:///{tmp_path / 'recipe-book.db'}",
            seed=False,
        ),
        logging=LoggingSettings(level="DEBUG", format="json"),
        client=ClientSettings(base_url="http://test/api", retries=0, retry_delay=0.0),
    )


@pytest.fixture
def recipe_payload() -> dict[str, Any]:
    """A minimal valid recipe create payload."""
    return {
        "name": "Lemon Rice",
        "description": "Bright and quick",
        "instructions": "Rinse the rice.\nCook with lemon.",
        "prep_time": 5,
        "cook_time": 20,
        "servings": 2,
    }
