"""Ingredient data repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, select

from recipe_book.database.models import Ingredient, RecipeIngredient


if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from recipe_book.schemas.ingredient import IngredientCreate


class IngredientRepository:
    """Repository for the ingredient catalogue."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(self, term: str | None = None) -> list[Ingredient]:
        """Ingredients in alphabetical order, optionally filtered by a
        case-insensitive substring of the name.
        """
        stmt = select(Ingredient).order_by(Ingredient.name)
        if term:
            stmt = stmt.where(
                func.lower(Ingredient.name).contains(term.lower(), autoescape=True)
            )
        result = await self._session.scalars(stmt)
        return list(result.all())

    async def get(self, ingredient_id: int) -> Ingredient | None:
        return await self._session.get(Ingredient, ingredient_id)

    async def find_by_name(
        self,
        name: str,
        *,
        exclude_id: int | None = None,
    ) -> Ingredient | None:
        """Case-insensitive name lookup, optionally ignoring one record."""
        stmt = select(Ingredient).where(func.lower(Ingredient.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(Ingredient.id != exclude_id)
        result = await self._session.scalars(stmt.limit(1))
        return result.first()

    async def existing_ids(self, ingredient_ids: Iterable[int]) -> set[int]:
        """Subset of ``ingredient_ids`` that refer to stored ingredients."""
        ids = set(ingredient_ids)
        if not ids:
            return set()
        result = await self._session.scalars(
            select(Ingredient.id).where(Ingredient.id.in_(ids))
        )
        return set(result.all())

    async def create(self, data: IngredientCreate) -> Ingredient:
        ingredient = Ingredient(name=data.name, unit=data.unit)
        self._session.add(ingredient)
        await self._session.flush()
        return ingredient

    async def update(self, ingredient: Ingredient, fields: dict[str, Any]) -> Ingredient:
        for key, value in fields.items():
            setattr(ingredient, key, value)
        await self._session.flush()
        return ingredient

    async def usage_count(self, ingredient_id: int) -> int:
        """Number of recipes that use the ingredient."""
        result = await self._session.execute(
            select(func.count(RecipeIngredient.id)).where(
                RecipeIngredient.ingredient_id == ingredient_id
            )
        )
        return int(result.scalar_one())

    async def delete(self, ingredient_id: int) -> bool:
        result = await self._session.execute(
            delete(Ingredient).where(Ingredient.id == ingredient_id)
        )
        return bool(result.rowcount)
