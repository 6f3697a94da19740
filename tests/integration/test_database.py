"""Integration tests for the store handle, repositories and seed data."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from recipe_book.database import Database
from recipe_book.database.models import RecipeIngredient
from recipe_book.database.repositories import IngredientRepository, RecipeRepository
from recipe_book.database.seed import SEED_INGREDIENTS, SEED_RECIPES, seed_database
from recipe_book.schemas.ingredient import IngredientCreate
from recipe_book.schemas.recipe import RecipeCreate, RecipeIngredientInput


pytestmark = pytest.mark.integration


class TestDatabaseLifecycle:
    """Tests for the explicit open/close lifecycle."""

    async def test_unopened_handle(self) -> None:
        """Should refuse to hand out sessions before open."""
        database = Database("sqlite+aiosqlite:///:memory:")

        assert database.is_open is False
        assert await database.check_health() == {"database": "not_initialized"}
        with pytest.raises(RuntimeError, match="not opened"):
            _ = database.engine
        with pytest.raises(RuntimeError, match="not opened"):
            async with database.session():
                pass

    async def test_close_is_idempotent(self, database: Database) -> None:
        """Should allow closing twice."""
        await database.close()
        await database.close()

        assert database.is_open is False

    async def test_health(self, database: Database) -> None:
        """Should report an open store as healthy."""
        assert await database.check_health() == {"database": "healthy"}


class TestRepositories:
    """Tests for the repositories against a real SQLite file."""

    async def test_cascade_removes_links(self, database: Database) -> None:
        """Should remove junction rows when their recipe is deleted."""
        async with database.session() as session:
            flour = await IngredientRepository(session).create(
                IngredientCreate(name="Flour", unit="g")
            )
            recipes = RecipeRepository(session)
            recipe = await recipes.create(RecipeCreate(name="Bread", instructions="Bake"))
            await recipes.replace_ingredients(
                recipe.id, [RecipeIngredientInput(ingredient_id=flour.id, quantity=500)]
            )
            await session.commit()
            recipe_id, flour_id = recipe.id, flour.id

        async with database.session() as session:
            assert await IngredientRepository(session).usage_count(flour_id) == 1
            assert await RecipeRepository(session).delete(recipe_id) is True
            await session.commit()

        async with database.session() as session:
            links = await session.scalars(select(RecipeIngredient))
            assert links.all() == []
            assert await IngredientRepository(session).usage_count(flour_id) == 0

    async def test_existing_ids(self, database: Database) -> None:
        """Should return only ids that are stored."""
        async with database.session() as session:
            repository = IngredientRepository(session)
            salt = await repository.create(IngredientCreate(name="Salt", unit="pinch"))
            await session.commit()

            assert await repository.existing_ids([salt.id, 999]) == {salt.id}
            assert await repository.existing_ids([]) == set()

    async def test_find_by_name_ignores_case(self, database: Database) -> None:
        """Should find names regardless of case, optionally excluding one id."""
        async with database.session() as session:
            repository = IngredientRepository(session)
            milk = await repository.create(IngredientCreate(name="Milk", unit="ml"))
            await session.commit()

            assert (await repository.find_by_name("MILK")) is milk
            assert await repository.find_by_name("milk", exclude_id=milk.id) is None

    async def test_delete_missing(self, database: Database) -> None:
        """Should report that nothing was deleted."""
        async with database.session() as session:
            assert await RecipeRepository(session).delete(404) is False
            assert await IngredientRepository(session).delete(404) is False


class TestSeed:
    """Tests for the sample data."""

    async def test_seed_empty_store(self, database: Database) -> None:
        """Should insert the sample catalogue and recipes once."""
        async with database.session() as session:
            assert await seed_database(session) is True

        async with database.session() as session:
            assert await seed_database(session) is False
            assert await RecipeRepository(session).count() == len(SEED_RECIPES)
            assert len(await IngredientRepository(session).search()) == len(SEED_INGREDIENTS)

    async def test_seed_recipes_have_ingredients(self, database: Database) -> None:
        """Should link every sample recipe to its ingredients."""
        async with database.session() as session:
            await seed_database(session)

        async with database.session() as session:
            summaries = await RecipeRepository(session).list_with_counts()

        expected = {entry["name"]: len(entry["ingredients"]) for entry in SEED_RECIPES}  # type: ignore[arg-type]
        assert {s.name: s.ingredient_count for s in summaries} == expected
