"""Recipe service.

Orchestrates the validation rules, the recipe repository and domain errors.
Each public method runs in its own session and commits at most once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_book.core.exceptions import NotFoundError, ValidationError
from recipe_book.database.repositories import IngredientRepository, RecipeRepository
from recipe_book.observability.logging import get_logger
from recipe_book.schemas.errors import FieldError
from recipe_book.services.validation import (
    normalize_recipe_create,
    normalize_recipe_update,
    validate_recipe,
)
from recipe_book.services.validation.constants import INGREDIENTS_NONE_VALID


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from recipe_book.database import Database
    from recipe_book.schemas.recipe import (
        RecipeDetail,
        RecipeIngredientInput,
        RecipeSummary,
    )


logger = get_logger(__name__)

RESOURCE = "Recipe"


class RecipeService:
    """Recipe CRUD on top of an injected ``Database``.

    Example:
        ```python
        service = RecipeService(database)
        recipe = await service.create_recipe({"name": "Toast", "instructions": "Toast it"})
        ```
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def list_recipes(self) -> list[RecipeSummary]:
        """All recipes, newest first, with ingredient counts."""
        async with self._database.session() as session:
            return await RecipeRepository(session).list_with_counts()

    async def get_recipe(self, recipe_id: int) -> RecipeDetail:
        """Fetch one recipe with its ingredients.

        Raises:
            NotFoundError: If no recipe has this id.
        """
        async with self._database.session() as session:
            detail = await RecipeRepository(session).get_detail(recipe_id)
        if detail is None:
            raise NotFoundError(RESOURCE, recipe_id)
        return detail

    async def create_recipe(self, payload: Any) -> RecipeDetail:
        """Validate and store a new recipe.

        Ingredient rows referencing unknown ingredients are dropped.

        Raises:
            ValidationError: If the payload breaks a field rule.
        """
        errors = validate_recipe(payload)
        if errors:
            raise ValidationError("Validation failed", errors)
        data = normalize_recipe_create(payload)

        async with self._database.session() as session:
            recipes = RecipeRepository(session)
            rows = await self._resolve_rows(
                session, data.ingredients or [], supplied=data.ingredient_rows_supplied
            )
            recipe = await recipes.create(data)
            if rows:
                await recipes.replace_ingredients(recipe.id, rows)
            await session.commit()
            detail = await recipes.get_detail(recipe.id)

        assert detail is not None
        logger.info(
            "Recipe created",
            recipe_id=detail.id,
            recipe_name=detail.name,
            ingredient_count=len(detail.ingredients),
        )
        return detail

    async def update_recipe(self, recipe_id: int, payload: Any) -> RecipeDetail:
        """Apply a partial update; ``ingredients`` replaces the whole set.

        Raises:
            NotFoundError: If no recipe has this id.
            ValidationError: If a supplied field breaks a rule.
        """
        async with self._database.session() as session:
            recipes = RecipeRepository(session)
            recipe = await recipes.get(recipe_id)
            if recipe is None:
                raise NotFoundError(RESOURCE, recipe_id)

            errors = validate_recipe(payload, partial=True)
            if errors:
                raise ValidationError("Validation failed", errors)
            data = normalize_recipe_update(payload)

            rows: list[RecipeIngredientInput] | None = None
            if data.ingredients is not None:
                rows = await self._resolve_rows(
                    session, data.ingredients, supplied=data.ingredient_rows_supplied
                )

            fields = data.model_dump(exclude_unset=True, exclude={"ingredients"})
            await recipes.update(recipe, fields)
            if rows is not None:
                await recipes.replace_ingredients(recipe_id, rows)
            await session.commit()
            detail = await recipes.get_detail(recipe_id)

        assert detail is not None
        logger.info(
            "Recipe updated",
            recipe_id=recipe_id,
            fields=sorted(fields),
            ingredients_replaced=rows is not None,
        )
        return detail

    async def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe and its ingredient links.

        Raises:
            NotFoundError: If no recipe has this id.
        """
        async with self._database.session() as session:
            deleted = await RecipeRepository(session).delete(recipe_id)
            if not deleted:
                raise NotFoundError(RESOURCE, recipe_id)
            await session.commit()
        logger.info("Recipe deleted", recipe_id=recipe_id)

    @staticmethod
    async def _resolve_rows(
        session: AsyncSession,
        rows: list[RecipeIngredientInput],
        *,
        supplied: bool,
    ) -> list[RecipeIngredientInput]:
        existing = await IngredientRepository(session).existing_ids(
            row.ingredient_id for row in rows
        )
        kept = [row for row in rows if row.ingredient_id in existing]
        if len(kept) < len(rows):
            logger.debug(
                "Dropped rows for unknown ingredients",
                dropped=[row.ingredient_id for row in rows if row.ingredient_id not in existing],
            )
        if supplied and not kept:
            raise ValidationError(
                "Validation failed",
                [FieldError(field="ingredients", message=INGREDIENTS_NONE_VALID)],
            )
        return kept
