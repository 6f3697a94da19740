"""FastAPI dependencies for store and service access.

The ``Database`` handle is opened during application startup and stored in
``app.state``; services are cheap wrappers built per request around it.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from recipe_book.core.exceptions import NotFoundError, ValidationError
from recipe_book.database import Database
from recipe_book.services.ingredients import IngredientService
from recipe_book.services.recipes import RecipeService
from recipe_book.services.validation import id_errors, is_storable_id, parse_id


async def get_database(request: Request) -> Database:
    """Get the store handle from app state.

    Raises:
        HTTPException: 503 if the store is not open.
    """
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None or not database.is_open:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not available",
        )
    return database


async def get_recipe_service(
    database: Annotated[Database, Depends(get_database)],
) -> RecipeService:
    return RecipeService(database)


async def get_ingredient_service(
    database: Annotated[Database, Depends(get_database)],
) -> IngredientService:
    return IngredientService(database)


def recipe_id_path(recipe_id: str) -> int:
    """Parse the ``{recipe_id}`` path segment.

    Raises:
        ValidationError: If the segment is not an integer.
        NotFoundError: If the id is beyond what the store can hold.
    """
    parsed = parse_id(recipe_id)
    if parsed is None:
        raise ValidationError("Invalid recipe ID", id_errors())
    if not is_storable_id(parsed):
        raise NotFoundError("Recipe", parsed)
    return parsed


def ingredient_id_path(ingredient_id: str) -> int:
    """Parse the ``{ingredient_id}`` path segment.

    Raises:
        ValidationError: If the segment is not an integer.
        NotFoundError: If the id is beyond what the store can hold.
    """
    parsed = parse_id(ingredient_id)
    if parsed is None:
        raise ValidationError("Invalid ingredient ID", id_errors())
    if not is_storable_id(parsed):
        raise NotFoundError("Ingredient", parsed)
    return parsed


DatabaseDep = Annotated[Database, Depends(get_database)]
RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
IngredientServiceDep = Annotated[IngredientService, Depends(get_ingredient_service)]
RecipeId = Annotated[int, Depends(recipe_id_path)]
IngredientId = Annotated[int, Depends(ingredient_id_path)]
