"""Recipe form handling for the web front end.

Form fields arrive as strings. ``RecipeForm`` keeps them as typed so the page
can be re-rendered unchanged, converts them into an API payload, and checks
that payload with the same rules the API applies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from recipe_book.services.validation import validate_recipe


if TYPE_CHECKING:
    from recipe_book.schemas.recipe import RecipeDetail


@dataclass(slots=True)
class IngredientRowInput:
    """One ingredient row as typed into the form."""

    ingredient_id: str = ""
    quantity: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.ingredient_id.strip() and not self.quantity.strip()


def _parse_number(text: str) -> Any:
    """Number typed into a field, or the raw text when it is not one."""
    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        value = float(stripped)
    except ValueError:
        return stripped
    return value if math.isfinite(value) else stripped


def _format_number(value: float) -> str:
    """Exact text for a stored number, so saving an edit form keeps it."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass(slots=True)
class RecipeForm:
    """State of the create/edit recipe form."""

    name: str = ""
    description: str = ""
    instructions: str = ""
    prep_time: str = ""
    cook_time: str = ""
    servings: str = ""
    rows: list[IngredientRowInput] = field(default_factory=list)

    @classmethod
    def from_fields(
        cls,
        *,
        name: str = "",
        description: str = "",
        instructions: str = "",
        prep_time: str = "",
        cook_time: str = "",
        servings: str = "",
        ingredient_ids: list[str] | None = None,
        quantities: list[str] | None = None,
    ) -> RecipeForm:
        """Build from submitted fields; row lists are paired by position."""
        ids = ingredient_ids or []
        amounts = quantities or []
        width = max(len(ids), len(amounts))
        rows = [
            IngredientRowInput(
                ingredient_id=ids[i] if i < len(ids) else "",
                quantity=amounts[i] if i < len(amounts) else "",
            )
            for i in range(width)
        ]
        return cls(
            name=name,
            description=description,
            instructions=instructions,
            prep_time=prep_time,
            cook_time=cook_time,
            servings=servings,
            rows=rows,
        )

    @classmethod
    def from_recipe(cls, recipe: RecipeDetail) -> RecipeForm:
        """Prefill from a stored recipe for editing."""
        return cls(
            name=recipe.name,
            description=recipe.description or "",
            instructions=recipe.instructions,
            prep_time=str(recipe.prep_time),
            cook_time=str(recipe.cook_time),
            servings=str(recipe.servings),
            rows=[
                IngredientRowInput(
                    ingredient_id=str(ingredient.id),
                    quantity=_format_number(ingredient.quantity),
                )
                for ingredient in recipe.ingredients
            ],
        )

    def with_blank_row(self) -> RecipeForm:
        """Copy of the form with one more empty ingredient row."""
        return RecipeForm(
            name=self.name,
            description=self.description,
            instructions=self.instructions,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            servings=self.servings,
            rows=[*self.rows, IngredientRowInput()],
        )

    @property
    def filled_rows(self) -> list[IngredientRowInput]:
        """Rows the user actually typed something into."""
        return [row for row in self.rows if not row.is_blank]

    def to_payload(self) -> dict[str, Any]:
        """API payload; empty numeric fields fall back to the API defaults."""
        payload: dict[str, Any] = {
            "name": self.name.strip(),
            "description": self.description.strip() or None,
            "instructions": self.instructions.strip(),
            "ingredients": [
                {
                    "ingredient_id": _parse_number(row.ingredient_id),
                    "quantity": _parse_number(row.quantity),
                }
                for row in self.filled_rows
            ],
        }
        for key in ("prep_time", "cook_time", "servings"):
            raw = getattr(self, key)
            if raw.strip():
                payload[key] = _parse_number(raw)
        return payload

    def validate(self) -> dict[str, str]:
        """Field errors keyed by field name; empty when the form is valid."""
        errors: dict[str, str] = {}
        for error in validate_recipe(self.to_payload()):
            errors.setdefault(error.field, error.message)
        return errors
