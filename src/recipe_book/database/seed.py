"""Sample data loaded into an empty store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from recipe_book.database.models import Ingredient, Recipe, RecipeIngredient
from recipe_book.database.repositories import IngredientRepository, RecipeRepository
from recipe_book.observability.logging import get_logger


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


logger = get_logger(__name__)


SEED_INGREDIENTS: Final[list[tuple[str, str]]] = [
    ("Flour", "g"),
    ("Sugar", "g"),
    ("Eggs", "piece"),
    ("Milk", "ml"),
    ("Butter", "g"),
    ("Salt", "pinch"),
    ("Tomato", "piece"),
    ("Onion", "piece"),
    ("Garlic", "piece"),
    ("Olive Oil", "ml"),
    ("Pasta", "g"),
    ("Chicken Breast", "g"),
    ("Rice", "g"),
    ("Lemon", "piece"),
    ("Parsley", "g"),
]

SEED_RECIPES: Final[list[dict[str, object]]] = [
    {
        "name": "Classic Pancakes",
        "description": "Fluffy homemade pancakes perfect for breakfast",
        "instructions": (
            "1. Mix flour, sugar, and salt in a large bowl.\n"
            "2. In another bowl, whisk eggs and milk.\n"
            "3. Combine wet and dry ingredients, add melted butter.\n"
            "4. Cook on medium heat for 2-3 minutes per side."
        ),
        "prep_time": 10,
        "cook_time": 15,
        "servings": 4,
        "ingredients": [
            ("Flour", 200),
            ("Sugar", 30),
            ("Eggs", 2),
            ("Milk", 250),
            ("Butter", 50),
            ("Salt", 1),
        ],
    },
    {
        "name": "Simple Tomato Pasta",
        "description": "Quick and delicious pasta with fresh tomato sauce",
        "instructions": (
            "1. Boil pasta according to package instructions.\n"
            "2. Sauté chopped onion and garlic in olive oil.\n"
            "3. Add diced tomatoes and simmer for 15 minutes.\n"
            "4. Toss pasta with sauce and garnish with parsley."
        ),
        "prep_time": 5,
        "cook_time": 20,
        "servings": 2,
        "ingredients": [
            ("Tomato", 4),
            ("Onion", 1),
            ("Garlic", 3),
            ("Olive Oil", 30),
            ("Pasta", 300),
            ("Parsley", 10),
        ],
    },
    {
        "name": "Lemon Chicken Rice",
        "description": "Aromatic one-pot chicken and rice dish",
        "instructions": (
            "1. Season chicken breast with salt.\n"
            "2. Sear chicken in olive oil until golden.\n"
            "3. Add rice, water, and lemon juice.\n"
            "4. Simmer covered for 20 minutes until rice is tender.\n"
            "5. Garnish with fresh parsley."
        ),
        "prep_time": 10,
        "cook_time": 25,
        "servings": 3,
        "ingredients": [
            ("Chicken Breast", 400),
            ("Rice", 200),
            ("Lemon", 1),
            ("Olive Oil", 20),
            ("Salt", 2),
            ("Parsley", 15),
        ],
    },
]


async def seed_database(session: AsyncSession) -> bool:
    """Insert the sample catalogue when there are no recipes yet.

    Returns:
        True if data was inserted.
    """
    if await RecipeRepository(session).count() > 0:
        return False

    catalogue = IngredientRepository(session)
    ingredients: dict[str, Ingredient] = {}
    for name, unit in SEED_INGREDIENTS:
        existing = await catalogue.find_by_name(name)
        if existing is None:
            existing = Ingredient(name=name, unit=unit)
            session.add(existing)
        ingredients[name] = existing
    await session.flush()

    for entry in SEED_RECIPES:
        rows = entry["ingredients"]
        recipe = Recipe(**{key: value for key, value in entry.items() if key != "ingredients"})
        session.add(recipe)
        await session.flush()
        session.add_all(
            RecipeIngredient(
                recipe_id=recipe.id,
                ingredient_id=ingredients[name].id,
                quantity=quantity,
            )
            for name, quantity in rows  # type: ignore[attr-defined]
        )

    await session.commit()
    logger.info(
        "Seeded sample data",
        recipes=len(SEED_RECIPES),
        ingredients=len(SEED_INGREDIENTS),
    )
    return True
