"""Ingredient service."""

from recipe_book.services.ingredients.service import IngredientService


__all__ = ["IngredientService"]
