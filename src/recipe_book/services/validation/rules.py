"""Field rules for recipe and ingredient payloads.

Each ``validate_*`` function inspects a decoded JSON payload and returns the
list of field violations, empty when the payload is acceptable. The
``normalize_*`` functions turn an accepted payload into the typed request
schema (trimmed strings, defaults filled in, ingredient rows filtered).

Nothing here touches storage or HTTP, so the web form reuses the same rules
before it ever calls the API.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from recipe_book.schemas.errors import FieldError
from recipe_book.schemas.ingredient import IngredientCreate, IngredientUpdate
from recipe_book.schemas.recipe import (
    RecipeCreate,
    RecipeIngredientInput,
    RecipeUpdate,
)
from recipe_book.services.validation import constants as c


def is_number(value: Any) -> bool:
    """True for finite ints and floats; bools do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_non_negative(value: Any) -> bool:
    return is_number(value) and value >= 0


def _is_servings(value: Any) -> bool:
    if not is_number(value) or value < c.MIN_SERVINGS:
        return False
    return float(value).is_integer()


def _fits_stored_int(value: Any) -> bool:
    """True when ``value`` truncated to an int fits an INTEGER column."""
    return int(value) <= c.MAX_STORED_INT


def is_storable_id(value: int) -> bool:
    """True for ids an INTEGER column can hold; larger ids never exist."""
    return -c.MAX_STORED_INT - 1 <= value <= c.MAX_STORED_INT


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def is_valid_ingredient_row(row: Any) -> bool:
    """A row needs a positive integer ``ingredient_id`` and a quantity >= 0."""
    if not isinstance(row, Mapping):
        return False
    ingredient_id = row.get("ingredient_id")
    if isinstance(ingredient_id, bool) or not isinstance(ingredient_id, int):
        return False
    if not 0 < ingredient_id <= c.MAX_STORED_INT:
        return False
    return _is_non_negative(row.get("quantity"))


def filter_ingredient_rows(rows: Iterable[Any]) -> list[RecipeIngredientInput]:
    """Keep well-formed rows, first occurrence of each ingredient id wins."""
    kept: dict[int, RecipeIngredientInput] = {}
    for row in rows:
        if not is_valid_ingredient_row(row):
            continue
        ingredient_id = row["ingredient_id"]
        if ingredient_id not in kept:
            kept[ingredient_id] = RecipeIngredientInput(
                ingredient_id=ingredient_id,
                quantity=float(row["quantity"]),
            )
    return list(kept.values())


def _check_ingredients(payload: Mapping[str, Any], errors: list[FieldError]) -> None:
    rows = payload.get("ingredients")
    if rows is None:
        return
    if not isinstance(rows, list):
        errors.append(FieldError(field="ingredients", message=c.INGREDIENTS_NOT_LIST))
    elif rows and not filter_ingredient_rows(rows):
        errors.append(
            FieldError(field="ingredients", message=c.INGREDIENTS_NONE_VALID)
        )


def validate_recipe(
    payload: Any,
    *,
    partial: bool = False,
) -> list[FieldError]:
    """Check a recipe create (or, with ``partial``, update) payload.

    On create ``name`` and ``instructions`` are required; on update they are
    only checked when present. Numeric fields are checked when present.
    """
    if not isinstance(payload, Mapping):
        return [FieldError(field="body", message=c.BODY_NOT_OBJECT)]

    errors: list[FieldError] = []

    if partial:
        if "name" in payload and _is_blank(payload["name"]):
            errors.append(FieldError(field="name", message=c.NAME_EMPTY))
        if "instructions" in payload and _is_blank(payload["instructions"]):
            errors.append(
                FieldError(field="instructions", message=c.INSTRUCTIONS_EMPTY)
            )
    else:
        if _is_blank(payload.get("name")):
            errors.append(FieldError(field="name", message=c.NAME_REQUIRED))
        if _is_blank(payload.get("instructions")):
            errors.append(
                FieldError(field="instructions", message=c.INSTRUCTIONS_REQUIRED)
            )

    description = payload.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(FieldError(field="description", message=c.DESCRIPTION_INVALID))

    for key, invalid, too_large in (
        ("prep_time", c.PREP_TIME_INVALID, c.PREP_TIME_TOO_LARGE),
        ("cook_time", c.COOK_TIME_INVALID, c.COOK_TIME_TOO_LARGE),
        ("servings", c.SERVINGS_INVALID, c.SERVINGS_TOO_LARGE),
    ):
        if key not in payload:
            continue
        value = payload[key]
        valid = _is_servings(value) if key == "servings" else _is_non_negative(value)
        if not valid:
            errors.append(FieldError(field=key, message=invalid))
        elif not _fits_stored_int(value):
            errors.append(FieldError(field=key, message=too_large))

    _check_ingredients(payload, errors)
    return errors


def validate_ingredient(
    payload: Any,
    *,
    partial: bool = False,
) -> list[FieldError]:
    """Check an ingredient create (or, with ``partial``, update) payload.

    Name uniqueness needs the store and is checked by the service.
    """
    if not isinstance(payload, Mapping):
        return [FieldError(field="body", message=c.BODY_NOT_OBJECT)]

    errors: list[FieldError] = []

    if not partial or "name" in payload:
        name = payload.get("name")
        if _is_blank(name):
            message = c.NAME_EMPTY if partial else c.NAME_REQUIRED
            errors.append(FieldError(field="name", message=message))
        elif len(name.strip()) > c.MAX_INGREDIENT_NAME_LENGTH:
            errors.append(FieldError(field="name", message=c.NAME_TOO_LONG))

    if "unit" in payload and payload["unit"] not in c.VALID_UNITS:
        errors.append(FieldError(field="unit", message=c.UNIT_INVALID))

    return errors


def _clean_description(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _rows_supplied(payload: Mapping[str, Any]) -> bool:
    rows = payload.get("ingredients")
    return isinstance(rows, list) and len(rows) > 0


def normalize_recipe_create(payload: Mapping[str, Any]) -> RecipeCreate:
    """Build a ``RecipeCreate`` from a payload that passed ``validate_recipe``."""
    rows = payload.get("ingredients")
    return RecipeCreate(
        name=payload["name"].strip(),
        description=_clean_description(payload.get("description")),
        instructions=payload["instructions"].strip(),
        prep_time=int(payload.get("prep_time", c.DEFAULT_PREP_TIME)),
        cook_time=int(payload.get("cook_time", c.DEFAULT_COOK_TIME)),
        servings=int(payload.get("servings", c.DEFAULT_SERVINGS)),
        ingredients=filter_ingredient_rows(rows) if isinstance(rows, list) else None,
        ingredient_rows_supplied=_rows_supplied(payload),
    )


def normalize_recipe_update(payload: Mapping[str, Any]) -> RecipeUpdate:
    """Build a ``RecipeUpdate`` holding only the fields present in ``payload``.

    ``ingredients: null`` counts as absent; ``description: null`` clears it.
    """
    fields: dict[str, Any] = {}
    if "name" in payload:
        fields["name"] = payload["name"].strip()
    if "description" in payload:
        fields["description"] = _clean_description(payload["description"])
    if "instructions" in payload:
        fields["instructions"] = payload["instructions"].strip()
    for key in ("prep_time", "cook_time", "servings"):
        if key in payload:
            fields[key] = int(payload[key])
    rows = payload.get("ingredients")
    if isinstance(rows, list):
        fields["ingredients"] = filter_ingredient_rows(rows)
    return RecipeUpdate(**fields, ingredient_rows_supplied=_rows_supplied(payload))


def normalize_ingredient_create(payload: Mapping[str, Any]) -> IngredientCreate:
    """Build an ``IngredientCreate`` from an accepted payload."""
    return IngredientCreate(
        name=payload["name"].strip(),
        unit=payload.get("unit", c.DEFAULT_UNIT),
    )


def normalize_ingredient_update(payload: Mapping[str, Any]) -> IngredientUpdate:
    """Build an ``IngredientUpdate`` holding only the fields present."""
    fields: dict[str, Any] = {}
    if "name" in payload:
        fields["name"] = payload["name"].strip()
    if "unit" in payload:
        fields["unit"] = payload["unit"]
    return IngredientUpdate(**fields)


def parse_id(raw: Any) -> int | None:
    """Parse a path identifier, ``None`` when it is not a plain integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text.lstrip("-").isdigit() and text.isascii():
            try:
                return int(text)
            except ValueError:
                # Past the interpreter's digit limit for int()
                return None
    return None


def id_errors() -> list[FieldError]:
    """Details attached when a path identifier is not a number."""
    return [FieldError(field="id", message=c.ID_NOT_NUMBER)]
