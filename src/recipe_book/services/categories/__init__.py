"""Ingredient category guessing and grouping."""

from recipe_book.services.categories.grouping import (
    CategoryGroup,
    group_by_category,
    guess_category,
)


__all__ = [
    "CategoryGroup",
    "group_by_category",
    "guess_category",
]
