"""Limits and messages used by the validation rules."""

from __future__ import annotations

from typing import Final

from recipe_book.schemas.enums import IngredientUnit


MAX_INGREDIENT_NAME_LENGTH: Final[int] = 100
MIN_SERVINGS: Final[int] = 1

# Largest value an SQLite INTEGER column holds
MAX_STORED_INT: Final[int] = 2**63 - 1

DEFAULT_PREP_TIME: Final[int] = 0
DEFAULT_COOK_TIME: Final[int] = 0
DEFAULT_SERVINGS: Final[int] = 1
DEFAULT_UNIT: Final[IngredientUnit] = IngredientUnit.PIECE

VALID_UNITS: Final[tuple[str, ...]] = tuple(unit.value for unit in IngredientUnit)

# Recipe messages
NAME_REQUIRED: Final[str] = "Name is required"
NAME_EMPTY: Final[str] = "Name cannot be empty"
INSTRUCTIONS_REQUIRED: Final[str] = "Instructions are required"
INSTRUCTIONS_EMPTY: Final[str] = "Instructions cannot be empty"
DESCRIPTION_INVALID: Final[str] = "Description must be text"
PREP_TIME_INVALID: Final[str] = "Prep time must be a non-negative number"
COOK_TIME_INVALID: Final[str] = "Cook time must be a non-negative number"
SERVINGS_INVALID: Final[str] = "Servings must be at least 1"
PREP_TIME_TOO_LARGE: Final[str] = "Prep time is too large"
COOK_TIME_TOO_LARGE: Final[str] = "Cook time is too large"
SERVINGS_TOO_LARGE: Final[str] = "Servings is too large"
INGREDIENTS_NOT_LIST: Final[str] = "Ingredients must be a list"
INGREDIENTS_NONE_VALID: Final[str] = (
    "Please add at least one valid ingredient with quantity"
)
BODY_NOT_OBJECT: Final[str] = "Request body must be a JSON object"

# Ingredient messages
NAME_TOO_LONG: Final[str] = (
    f"Name must be at most {MAX_INGREDIENT_NAME_LENGTH} characters"
)
UNIT_INVALID: Final[str] = f"Unit must be one of: {', '.join(VALID_UNITS)}"

# Identifier messages
ID_NOT_NUMBER: Final[str] = "ID must be a number"
