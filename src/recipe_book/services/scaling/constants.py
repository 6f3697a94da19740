"""Display constants for scaled quantities."""

from __future__ import annotations

from decimal import Decimal
from typing import Final

from recipe_book.schemas.enums import IngredientUnit


# Quantities are shown with at most two decimals
QUANTITY_PRECISION: Final[Decimal] = Decimal("0.01")

MIN_SERVINGS: Final[int] = 1

# Shown when a scaled quantity leaves the float range
INFINITE_QUANTITY: Final[str] = "∞"

UNIT_LABELS: Final[dict[str, str]] = {
    IngredientUnit.G: "g",
    IngredientUnit.ML: "ml",
    IngredientUnit.PIECE: "pc",
    IngredientUnit.TBSP: "tbsp",
    IngredientUnit.TSP: "tsp",
    IngredientUnit.CUP: "cup",
    IngredientUnit.PINCH: "pinch",
}
