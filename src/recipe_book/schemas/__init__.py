"""Pydantic schemas for requests, responses and shared enums."""

from recipe_book.schemas.common import (
    DataResponse,
    HealthResponse,
    ListMeta,
    ListResponse,
    ReadinessResponse,
)
from recipe_book.schemas.enums import ErrorKind, IngredientUnit
from recipe_book.schemas.errors import FieldError
from recipe_book.schemas.ingredient import (
    IngredientCreate,
    IngredientRead,
    IngredientUpdate,
)
from recipe_book.schemas.recipe import (
    RecipeCreate,
    RecipeDetail,
    RecipeIngredientInput,
    RecipeIngredientRead,
    RecipeRead,
    RecipeSummary,
    RecipeUpdate,
)


__all__ = [
    "DataResponse",
    "ErrorKind",
    "FieldError",
    "HealthResponse",
    "IngredientCreate",
    "IngredientRead",
    "IngredientUnit",
    "IngredientUpdate",
    "ListMeta",
    "ListResponse",
    "ReadinessResponse",
    "RecipeCreate",
    "RecipeDetail",
    "RecipeIngredientInput",
    "RecipeIngredientRead",
    "RecipeRead",
    "RecipeSummary",
    "RecipeUpdate",
]
