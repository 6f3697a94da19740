"""Recipe data repository.

Queries over ``recipes`` and the ``recipe_ingredients`` junction. The
repository never commits; the calling service owns the transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, select

from recipe_book.database.models import Ingredient, Recipe, RecipeIngredient
from recipe_book.database.models.base import utcnow
from recipe_book.schemas.recipe import (
    RecipeDetail,
    RecipeIngredientRead,
    RecipeSummary,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from recipe_book.schemas.recipe import RecipeCreate, RecipeIngredientInput


class RecipeRepository:
    """Repository for recipes and their ingredient links."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_with_counts(self) -> list[RecipeSummary]:
        """All recipes, newest first, each with its ingredient count."""
        count = func.count(RecipeIngredient.id).label("ingredient_count")
        stmt = (
            select(Recipe, count)
            .outerjoin(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id)
            .group_by(Recipe.id)
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        )
        result = await self._session.execute(stmt)
        return [
            RecipeSummary.model_validate(
                {**_columns(recipe), "ingredient_count": ingredient_count}
            )
            for recipe, ingredient_count in result.all()
        ]

    async def get(self, recipe_id: int) -> Recipe | None:
        return await self._session.get(Recipe, recipe_id)

    async def list_ingredients(self, recipe_id: int) -> list[RecipeIngredientRead]:
        """Ingredients of a recipe in the order they were added."""
        stmt = (
            select(
                Ingredient.id,
                Ingredient.name,
                Ingredient.unit,
                RecipeIngredient.quantity,
            )
            .join(RecipeIngredient, RecipeIngredient.ingredient_id == Ingredient.id)
            .where(RecipeIngredient.recipe_id == recipe_id)
            .order_by(RecipeIngredient.id)
        )
        result = await self._session.execute(stmt)
        return [
            RecipeIngredientRead(id=row.id, name=row.name, unit=row.unit, quantity=row.quantity)
            for row in result.all()
        ]

    async def get_detail(self, recipe_id: int) -> RecipeDetail | None:
        """Recipe with resolved ingredient details, ``None`` when absent."""
        recipe = await self.get(recipe_id)
        if recipe is None:
            return None
        ingredients = await self.list_ingredients(recipe_id)
        return RecipeDetail.model_validate(
            {**_columns(recipe), "ingredients": ingredients}
        )

    async def create(self, data: RecipeCreate) -> Recipe:
        recipe = Recipe(
            name=data.name,
            description=data.description,
            instructions=data.instructions,
            prep_time=data.prep_time,
            cook_time=data.cook_time,
            servings=data.servings,
        )
        self._session.add(recipe)
        await self._session.flush()
        return recipe

    async def update(self, recipe: Recipe, fields: dict[str, Any]) -> Recipe:
        """Apply column values and bump ``updated_at``."""
        for key, value in fields.items():
            setattr(recipe, key, value)
        recipe.updated_at = utcnow()
        await self._session.flush()
        return recipe

    async def replace_ingredients(
        self,
        recipe_id: int,
        rows: Sequence[RecipeIngredientInput],
    ) -> None:
        """Swap the recipe's ingredient set for ``rows``."""
        await self._session.execute(
            delete(RecipeIngredient).where(RecipeIngredient.recipe_id == recipe_id)
        )
        self._session.add_all(
            RecipeIngredient(
                recipe_id=recipe_id,
                ingredient_id=row.ingredient_id,
                quantity=row.quantity,
            )
            for row in rows
        )
        await self._session.flush()

    async def delete(self, recipe_id: int) -> bool:
        """Delete a recipe; its links go with it. False when nothing matched."""
        result = await self._session.execute(delete(Recipe).where(Recipe.id == recipe_id))
        return bool(result.rowcount)

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(Recipe.id)))
        return int(result.scalar_one())


def _columns(recipe: Recipe) -> dict[str, Any]:
    return {column.key: getattr(recipe, column.key) for column in Recipe.__table__.columns}
