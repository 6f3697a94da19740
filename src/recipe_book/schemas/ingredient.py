"""Ingredient schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_book.schemas.base import APIRequest, APIResponse
from recipe_book.schemas.enums import IngredientUnit


class IngredientCreate(APIRequest):
    """Accepted payload for creating an ingredient (name already trimmed)."""

    name: str = Field(..., min_length=1, max_length=100)
    unit: IngredientUnit = IngredientUnit.PIECE


class IngredientUpdate(APIRequest):
    """Accepted partial update; only fields in ``model_fields_set`` are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    unit: IngredientUnit | None = None


class IngredientRead(APIResponse):
    """Ingredient as returned by the API."""

    id: int
    name: str
    unit: IngredientUnit
    created_at: datetime
