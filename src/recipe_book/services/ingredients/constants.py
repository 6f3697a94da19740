"""Messages raised by the ingredient service."""

from __future__ import annotations

from typing import Final


RESOURCE: Final[str] = "Ingredient"

DUPLICATE_NAME: Final[str] = 'Ingredient with name "{name}" already exists'
IN_USE: Final[str] = "Cannot delete ingredient: it is used in {count} recipe(s)"
