"""Ingredient service.

Handles the ingredient catalogue: case-insensitive name uniqueness and the
guard against deleting an ingredient that recipes still use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError

from recipe_book.core.exceptions import ConflictError, NotFoundError, ValidationError
from recipe_book.database.repositories import IngredientRepository
from recipe_book.observability.logging import get_logger
from recipe_book.schemas.ingredient import IngredientRead
from recipe_book.services.ingredients.constants import (
    DUPLICATE_NAME,
    IN_USE,
    RESOURCE,
)
from recipe_book.services.validation import (
    normalize_ingredient_create,
    normalize_ingredient_update,
    validate_ingredient,
)


if TYPE_CHECKING:
    from recipe_book.database import Database


logger = get_logger(__name__)


class IngredientService:
    """Ingredient CRUD on top of an injected ``Database``."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def list_ingredients(self, search: str | None = None) -> list[IngredientRead]:
        """Alphabetical list, filtered by a trimmed case-insensitive substring."""
        term = search.strip() if search else None
        async with self._database.session() as session:
            ingredients = await IngredientRepository(session).search(term or None)
            return [IngredientRead.model_validate(item) for item in ingredients]

    async def get_ingredient(self, ingredient_id: int) -> IngredientRead:
        """Fetch one ingredient.

        Raises:
            NotFoundError: If no ingredient has this id.
        """
        async with self._database.session() as session:
            ingredient = await IngredientRepository(session).get(ingredient_id)
            if ingredient is None:
                raise NotFoundError(RESOURCE, ingredient_id)
            return IngredientRead.model_validate(ingredient)

    async def create_ingredient(self, payload: Any) -> IngredientRead:
        """Validate and store a new ingredient.

        Raises:
            ValidationError: If the payload breaks a field rule.
            ConflictError: If the name is taken, ignoring case.
        """
        errors = validate_ingredient(payload)
        if errors:
            raise ValidationError("Validation failed", errors)
        data = normalize_ingredient_create(payload)

        async with self._database.session() as session:
            repository = IngredientRepository(session)
            if await repository.find_by_name(data.name) is not None:
                raise ConflictError(DUPLICATE_NAME.format(name=data.name))
            try:
                ingredient = await repository.create(data)
                await session.commit()
            except IntegrityError as e:
                # Lost a race with a concurrent insert of the same name
                raise ConflictError(DUPLICATE_NAME.format(name=data.name)) from e
            result = IngredientRead.model_validate(ingredient)

        logger.info("Ingredient created", ingredient_id=result.id, ingredient_name=result.name)
        return result

    async def update_ingredient(self, ingredient_id: int, payload: Any) -> IngredientRead:
        """Apply a partial update.

        Raises:
            NotFoundError: If no ingredient has this id.
            ValidationError: If a supplied field breaks a rule.
            ConflictError: If the new name belongs to another ingredient.
        """
        async with self._database.session() as session:
            repository = IngredientRepository(session)
            ingredient = await repository.get(ingredient_id)
            if ingredient is None:
                raise NotFoundError(RESOURCE, ingredient_id)

            errors = validate_ingredient(payload, partial=True)
            if errors:
                raise ValidationError("Validation failed", errors)
            data = normalize_ingredient_update(payload)

            if data.name is not None:
                clash = await repository.find_by_name(data.name, exclude_id=ingredient_id)
                if clash is not None:
                    raise ConflictError(DUPLICATE_NAME.format(name=data.name))

            fields = data.model_dump(exclude_unset=True)
            try:
                await repository.update(ingredient, fields)
                await session.commit()
            except IntegrityError as e:
                raise ConflictError(DUPLICATE_NAME.format(name=data.name)) from e
            result = IngredientRead.model_validate(ingredient)

        logger.info("Ingredient updated", ingredient_id=ingredient_id, fields=sorted(fields))
        return result

    async def delete_ingredient(self, ingredient_id: int) -> None:
        """Delete an ingredient no recipe uses.

        Raises:
            NotFoundError: If no ingredient has this id.
            ConflictError: If any recipe references the ingredient.
        """
        async with self._database.session() as session:
            repository = IngredientRepository(session)
            if await repository.get(ingredient_id) is None:
                raise NotFoundError(RESOURCE, ingredient_id)
            usage = await repository.usage_count(ingredient_id)
            if usage > 0:
                raise ConflictError(IN_USE.format(count=usage))
            await repository.delete(ingredient_id)
            await session.commit()
        logger.info("Ingredient deleted", ingredient_id=ingredient_id)
