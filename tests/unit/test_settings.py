"""Unit tests for YAML-backed settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_book.core.config import Settings, get_settings
from recipe_book.core.config.yaml_source import CONFIG_DIR_ENV_VAR, deep_merge


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestDeepMerge:
    """Tests for merging YAML layers."""

    def test_nested_keys_merge(self) -> None:
        """Should merge nested dicts key by key."""
        base = {"database": {"url": "a", "echo": False}, "app": {"name": "x"}}
        override = {"database": {"url": "b"}}

        assert deep_merge(base, override) == {
            "database": {"url": "b", "echo": False},
            "app": {"name": "x"},
        }

    def test_scalars_and_lists_replace(self) -> None:
        """Should replace non-dict values outright."""
        merged = deep_merge({"origins": ["a"], "port": 1}, {"origins": ["b"], "port": 2})

        assert merged == {"origins": ["b"], "port": 2}

    def test_inputs_untouched(self) -> None:
        """Should not modify the base dict."""
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}


class TestSettings:
    """Tests for settings resolution."""

    def test_test_environment_overrides(self) -> None:
        """Should layer the test profile over the base files."""
        settings = get_settings()

        assert settings.is_testing is True
        assert settings.database.seed is False
        assert settings.client.retry_delay == 0.0
        assert settings.client.retries == 2
        assert settings.server.port == 3001
        assert settings.web.port == 3000
        assert settings.api.prefix == "/api"
        assert settings.is_sqlite is True

    def test_environment_variables_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should let nested environment variables override YAML."""
        monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./elsewhere.db")
        monkeypatch.setenv("CLIENT__RETRIES", "4")

        settings = Settings()

        assert settings.database.url == "sqlite+aiosqlite:///./elsewhere.db"
        assert settings.client.retries == 4

    def test_custom_config_directory(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Should read YAML from the directory named by the override variable."""
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "app.yaml").write_text("app:\n  name: Cookbook\n")
        (tmp_path / "environments" / "test").mkdir(parents=True)
        (tmp_path / "environments" / "test" / "api.yaml").write_text(
            "api:\n  cors_origins: http://a.test, http://b.test\n"
        )
        monkeypatch.setenv(CONFIG_DIR_ENV_VAR, str(tmp_path))

        settings = Settings()

        assert settings.app.name == "Cookbook"
        assert settings.api.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.server.port == 3001

    def test_cached(self) -> None:
        """Should return the same instance until the cache is cleared."""
        assert get_settings() is get_settings()
