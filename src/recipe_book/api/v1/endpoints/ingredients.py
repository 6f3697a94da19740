"""Ingredient endpoints.

Provides:
- GET /ingredients with an optional case-insensitive ``search`` filter
- GET /ingredients/{ingredient_id}
- POST /ingredients
- PUT /ingredients/{ingredient_id}
- DELETE /ingredients/{ingredient_id}, refused while a recipe uses it
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, Response, status

from recipe_book.api.dependencies import IngredientId, IngredientServiceDep  # noqa: TC001
from recipe_book.core.exceptions import ErrorResponse
from recipe_book.schemas.common import DataResponse, ListMeta, ListResponse
from recipe_book.schemas.ingredient import IngredientRead


router = APIRouter(prefix="/ingredients", tags=["Ingredients"])

_NOT_FOUND = {"model": ErrorResponse, "description": "Ingredient not found"}
_INVALID = {"model": ErrorResponse, "description": "Validation failed"}
_CONFLICT = {"model": ErrorResponse, "description": "Name taken or ingredient in use"}


@router.get(
    "",
    response_model=ListResponse[IngredientRead],
    summary="List or search ingredients",
)
async def list_ingredients(
    service: IngredientServiceDep,
    search: Annotated[str | None, Query(description="Substring of the name")] = None,
) -> ListResponse[IngredientRead]:
    """Alphabetical list; ``meta.search`` echoes a non-empty trimmed query."""
    term = search.strip() if search else ""
    ingredients = await service.list_ingredients(term)
    return ListResponse[IngredientRead](
        data=ingredients,
        meta=ListMeta(total=len(ingredients), search=term or None),
    )


@router.get(
    "/{ingredient_id}",
    response_model=DataResponse[IngredientRead],
    summary="Get an ingredient",
    responses={400: _INVALID, 404: _NOT_FOUND},
)
async def get_ingredient(
    ingredient_id: IngredientId,
    service: IngredientServiceDep,
) -> DataResponse[IngredientRead]:
    return DataResponse[IngredientRead](data=await service.get_ingredient(ingredient_id))


@router.post(
    "",
    response_model=DataResponse[IngredientRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create an ingredient",
    responses={400: _INVALID, 409: _CONFLICT},
)
async def create_ingredient(
    payload: Annotated[Any, Body()],
    service: IngredientServiceDep,
) -> DataResponse[IngredientRead]:
    """Create an ingredient; the unit defaults to ``piece``."""
    return DataResponse[IngredientRead](data=await service.create_ingredient(payload))


@router.put(
    "/{ingredient_id}",
    response_model=DataResponse[IngredientRead],
    summary="Update an ingredient",
    responses={400: _INVALID, 404: _NOT_FOUND, 409: _CONFLICT},
)
async def update_ingredient(
    ingredient_id: IngredientId,
    payload: Annotated[Any, Body()],
    service: IngredientServiceDep,
) -> DataResponse[IngredientRead]:
    return DataResponse[IngredientRead](
        data=await service.update_ingredient(ingredient_id, payload)
    )


@router.delete(
    "/{ingredient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an ingredient",
    responses={400: _INVALID, 404: _NOT_FOUND, 409: _CONFLICT},
)
async def delete_ingredient(
    ingredient_id: IngredientId,
    service: IngredientServiceDep,
) -> Response:
    """Delete an ingredient; 409 while any recipe uses it."""
    await service.delete_ingredient(ingredient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
