"""Recipe schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_book.schemas.base import APIRequest, APIResponse
from recipe_book.schemas.enums import IngredientUnit


class RecipeIngredientInput(APIRequest):
    """One ingredient row of a recipe payload that passed the row filter."""

    ingredient_id: int = Field(..., gt=0)
    quantity: float = Field(..., ge=0)


class RecipeCreate(APIRequest):
    """Accepted payload for creating a recipe (strings already trimmed)."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    instructions: str = Field(..., min_length=1)
    prep_time: int = Field(default=0, ge=0)
    cook_time: int = Field(default=0, ge=0)
    servings: int = Field(default=1, ge=1)
    ingredients: list[RecipeIngredientInput] | None = None
    # True when the payload carried ingredient rows, even if all were dropped
    ingredient_rows_supplied: bool = Field(default=False, exclude=True)


class RecipeUpdate(APIRequest):
    """Accepted partial update; only fields in ``model_fields_set`` are applied.

    ``ingredients`` replaces the whole ingredient set when present.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    instructions: str | None = Field(default=None, min_length=1)
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    ingredients: list[RecipeIngredientInput] | None = None
    ingredient_rows_supplied: bool = Field(default=False, exclude=True)


class RecipeIngredientRead(APIResponse):
    """An ingredient as used by a recipe, with its quantity."""

    id: int
    name: str
    unit: IngredientUnit
    quantity: float


class RecipeRead(APIResponse):
    """Recipe columns as stored."""

    id: int
    name: str
    description: str | None = None
    instructions: str
    prep_time: int
    cook_time: int
    servings: int
    created_at: datetime
    updated_at: datetime


class RecipeSummary(RecipeRead):
    """List entry: the recipe plus how many ingredients it uses."""

    ingredient_count: int = 0


class RecipeDetail(RecipeRead):
    """Recipe with resolved ingredient details."""

    ingredients: list[RecipeIngredientRead] = Field(default_factory=list)

    @property
    def total_time(self) -> int:
        """Prep plus cook time in minutes."""
        return self.prep_time + self.cook_time

    @property
    def steps(self) -> list[str]:
        """Instructions split into non-blank lines."""
        return [line.strip() for line in self.instructions.splitlines() if line.strip()]
