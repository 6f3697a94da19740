"""Recipe service."""

from recipe_book.services.recipes.service import RecipeService


__all__ = ["RecipeService"]
