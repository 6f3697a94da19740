"""Portion scaling engine."""

from recipe_book.services.scaling.calculator import (
    PortionCalculator,
    ScaledIngredient,
    format_quantity,
    format_unit,
    parse_servings,
    round_quantity,
    scale_ingredients,
    scale_quantity,
    scaling_ratio,
)


__all__ = [
    "PortionCalculator",
    "ScaledIngredient",
    "format_quantity",
    "format_unit",
    "parse_servings",
    "round_quantity",
    "scale_ingredients",
    "scale_quantity",
    "scaling_ratio",
]
