"""Data access layer for recipes and ingredients."""

from recipe_book.database.repositories.ingredient import IngredientRepository
from recipe_book.database.repositories.recipe import RecipeRepository


__all__ = ["IngredientRepository", "RecipeRepository"]
