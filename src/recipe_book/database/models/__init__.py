"""ORM models. Importing this package registers every table on ``Base.metadata``."""

from recipe_book.database.models.base import Base
from recipe_book.database.models.ingredient import Ingredient
from recipe_book.database.models.recipe import Recipe
from recipe_book.database.models.recipe_ingredient import RecipeIngredient


__all__ = ["Base", "Ingredient", "Recipe", "RecipeIngredient"]
