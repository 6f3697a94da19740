"""Proportional ingredient scaling.

Quantities scale linearly with the servings ratio::

    adjusted = quantity * (current_servings / original_servings)

Rounding only happens when a quantity is formatted for display, so scaling
up and back down reproduces the original amount.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from recipe_book.services.scaling.constants import (
    INFINITE_QUANTITY,
    MIN_SERVINGS,
    QUANTITY_PRECISION,
    UNIT_LABELS,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_book.schemas.recipe import RecipeIngredientRead


def scaling_ratio(original_servings: int, current_servings: int) -> float:
    """Ratio of target to original servings, unrounded.

    Ratios past the float range come back as ``inf``.
    """
    if original_servings < MIN_SERVINGS:
        msg = f"original_servings must be at least {MIN_SERVINGS}"
        raise ValueError(msg)
    try:
        return current_servings / original_servings
    except OverflowError:
        return math.inf


def scale_quantity(quantity: float, ratio: float) -> float:
    """Scale a single quantity by ``ratio``."""
    if quantity == 0:
        return 0.0
    return quantity * ratio


def round_quantity(quantity: float) -> Decimal:
    """Round to two decimals, halves away from zero."""
    value = Decimal(repr(quantity))
    # Already at most two decimals; quantizing large values would overflow
    if not value.is_finite() or value.as_tuple().exponent >= -2:
        return value
    return value.quantize(QUANTITY_PRECISION, rounding=ROUND_HALF_UP)


def format_quantity(quantity: float) -> str:
    """Render a quantity without floating point noise or trailing zeros.

    Examples:
        >>> format_quantity(4.0)
        '4'
        >>> format_quantity(2.5)
        '2.5'
        >>> format_quantity(0.1 + 0.2)
        '0.3'
    """
    if math.isinf(quantity):
        return INFINITE_QUANTITY
    rounded = round_quantity(quantity)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return format(rounded, "f").rstrip("0").rstrip(".")


def format_unit(unit: str) -> str:
    """Short display label for a unit; unknown units pass through."""
    return UNIT_LABELS.get(unit, unit)


@dataclass(frozen=True, slots=True)
class ScaledIngredient:
    """An ingredient line with its original and adjusted quantity."""

    id: int
    name: str
    unit: str
    quantity: float
    adjusted_quantity: float

    @property
    def unit_label(self) -> str:
        return format_unit(self.unit)

    @property
    def original_display(self) -> str:
        return format_quantity(self.quantity)

    @property
    def adjusted_display(self) -> str:
        return format_quantity(self.adjusted_quantity)


def scale_ingredients(
    ingredients: Sequence[RecipeIngredientRead],
    original_servings: int,
    current_servings: int,
) -> list[ScaledIngredient]:
    """Scale every ingredient of a recipe; an empty list yields an empty list."""
    ratio = scaling_ratio(original_servings, current_servings)
    return [
        ScaledIngredient(
            id=ingredient.id,
            name=ingredient.name,
            unit=str(ingredient.unit),
            quantity=ingredient.quantity,
            adjusted_quantity=scale_quantity(ingredient.quantity, ratio),
        )
        for ingredient in ingredients
    ]


def parse_servings(value: Any) -> int | None:
    """Parse direct servings input, ``None`` when unusable.

    Accepts ints and strings with a leading integer ("3", "3 people");
    rejects anything non-numeric, zero or negative.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        digits = ""
        for char in value.strip():
            if not char.isdigit() or not char.isascii():
                break
            digits += char
        if not digits:
            return None
        try:
            parsed = int(digits)
        except ValueError:
            # Past the interpreter's digit limit for int()
            return None
    else:
        return None
    return parsed if parsed >= MIN_SERVINGS else None


@dataclass(frozen=True, slots=True)
class PortionCalculator:
    """Servings state for one recipe.

    Every operation returns a new calculator; ``current_servings`` never drops
    below one and has no upper bound.
    """

    original_servings: int
    current_servings: int

    @classmethod
    def for_recipe(cls, original_servings: int) -> PortionCalculator:
        """Start at the recipe's own servings."""
        servings = max(MIN_SERVINGS, original_servings)
        return cls(original_servings=servings, current_servings=servings)

    def __post_init__(self) -> None:
        if self.original_servings < MIN_SERVINGS:
            msg = f"original_servings must be at least {MIN_SERVINGS}"
            raise ValueError(msg)
        if self.current_servings < MIN_SERVINGS:
            object.__setattr__(self, "current_servings", MIN_SERVINGS)

    @property
    def ratio(self) -> float:
        return scaling_ratio(self.original_servings, self.current_servings)

    @property
    def is_modified(self) -> bool:
        return self.current_servings != self.original_servings

    @property
    def can_decrease(self) -> bool:
        return self.current_servings > MIN_SERVINGS

    @property
    def percent_of_original(self) -> str:
        """Ratio as a percentage, e.g. ``"150"``."""
        return format_quantity(self.ratio * 100)

    @property
    def summary(self) -> str:
        return (
            f"Cooking for {self.current_servings} people "
            f"({self.percent_of_original}% of original recipe)"
        )

    def increase(self) -> PortionCalculator:
        return replace(self, current_servings=self.current_servings + 1)

    def decrease(self) -> PortionCalculator:
        return replace(
            self, current_servings=max(MIN_SERVINGS, self.current_servings - 1)
        )

    def set_servings(self, value: Any) -> PortionCalculator:
        """Apply direct input; invalid input keeps the current value."""
        parsed = parse_servings(value)
        if parsed is None:
            return self
        return replace(self, current_servings=parsed)

    def reset(self) -> PortionCalculator:
        return replace(self, current_servings=self.original_servings)

    def scale(self, ingredients: Sequence[RecipeIngredientRead]) -> list[ScaledIngredient]:
        """Scale ``ingredients`` to the current servings."""
        return scale_ingredients(ingredients, self.original_servings, self.current_servings)
