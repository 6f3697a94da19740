"""Recipe and ingredient validation rules."""

from recipe_book.services.validation.rules import (
    filter_ingredient_rows,
    id_errors,
    is_number,
    is_storable_id,
    is_valid_ingredient_row,
    normalize_ingredient_create,
    normalize_ingredient_update,
    normalize_recipe_create,
    normalize_recipe_update,
    parse_id,
    validate_ingredient,
    validate_recipe,
)


__all__ = [
    "filter_ingredient_rows",
    "id_errors",
    "is_number",
    "is_storable_id",
    "is_valid_ingredient_row",
    "normalize_ingredient_create",
    "normalize_ingredient_update",
    "normalize_recipe_create",
    "normalize_recipe_update",
    "parse_id",
    "validate_ingredient",
    "validate_recipe",
]
