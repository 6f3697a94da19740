"""Recipe endpoints.

Provides:
- GET /recipes for the recipe list with ingredient counts
- GET /recipes/{recipe_id} for a recipe with its ingredients
- POST /recipes to create a recipe
- PUT /recipes/{recipe_id} for partial updates
- DELETE /recipes/{recipe_id} to delete a recipe and its ingredient links

Request bodies are accepted as raw JSON and checked by the validation rules
so that every failure is reported with the same field-level messages.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response, status

from recipe_book.api.dependencies import RecipeId, RecipeServiceDep  # noqa: TC001
from recipe_book.core.exceptions import ErrorResponse
from recipe_book.schemas.common import DataResponse, ListMeta, ListResponse
from recipe_book.schemas.recipe import RecipeDetail, RecipeSummary


router = APIRouter(prefix="/recipes", tags=["Recipes"])

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    404: {"model": ErrorResponse, "description": "Recipe not found"},
}


@router.get(
    "",
    response_model=ListResponse[RecipeSummary],
    summary="List recipes",
)
async def list_recipes(service: RecipeServiceDep) -> ListResponse[RecipeSummary]:
    """All recipes, newest first, each with ``ingredient_count``."""
    recipes = await service.list_recipes()
    return ListResponse[RecipeSummary](data=recipes, meta=ListMeta(total=len(recipes)))


@router.get(
    "/{recipe_id}",
    response_model=DataResponse[RecipeDetail],
    summary="Get a recipe",
    responses=_ERRORS,
)
async def get_recipe(
    recipe_id: RecipeId,
    service: RecipeServiceDep,
) -> DataResponse[RecipeDetail]:
    """A recipe with resolved ingredient details."""
    return DataResponse[RecipeDetail](data=await service.get_recipe(recipe_id))


@router.post(
    "",
    response_model=DataResponse[RecipeDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={400: _ERRORS[400]},
)
async def create_recipe(
    payload: Annotated[Any, Body()],
    service: RecipeServiceDep,
) -> DataResponse[RecipeDetail]:
    """Create a recipe; unknown or malformed ingredient rows are dropped."""
    return DataResponse[RecipeDetail](data=await service.create_recipe(payload))


@router.put(
    "/{recipe_id}",
    response_model=DataResponse[RecipeDetail],
    summary="Update a recipe",
    responses=_ERRORS,
)
async def update_recipe(
    recipe_id: RecipeId,
    payload: Annotated[Any, Body()],
    service: RecipeServiceDep,
) -> DataResponse[RecipeDetail]:
    """Partial update. A supplied ``ingredients`` list replaces the whole set."""
    return DataResponse[RecipeDetail](data=await service.update_recipe(recipe_id, payload))


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe",
    responses=_ERRORS,
)
async def delete_recipe(recipe_id: RecipeId, service: RecipeServiceDep) -> Response:
    await service.delete_recipe(recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
