"""Response envelopes: ``{data}`` and ``{data, meta}``."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from recipe_book.schemas.base import APIResponse


T = TypeVar("T")


class ListMeta(APIResponse):
    """Metadata attached to list responses."""

    total: int
    search: str | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_search(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if data.get("search") is None:
            data.pop("search", None)
        return data


class DataResponse(BaseModel, Generic[T]):
    """Single-entity envelope."""

    data: T


class ListResponse(BaseModel, Generic[T]):
    """Collection envelope."""

    data: list[T]
    meta: ListMeta


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = Field(default="ok", examples=["ok"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ReadinessResponse(HealthResponse):
    """Readiness payload with dependency status."""

    dependencies: dict[str, str] = Field(default_factory=dict)
