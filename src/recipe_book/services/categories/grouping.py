"""Grouping of recipe ingredients by shopping category."""

from __future__ import annotations

from dataclasses import dataclass, field
from operator import attrgetter
from typing import TYPE_CHECKING, Generic, TypeVar

from recipe_book.schemas.enums import IngredientCategory
from recipe_book.services.categories.constants import CATEGORY_PATTERNS


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


T = TypeVar("T")


def guess_category(name: str) -> IngredientCategory:
    """Category for an ingredient name; ``OTHER`` when no keyword matches."""
    lower = name.lower()
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(lower):
            return category
    return IngredientCategory.OTHER


@dataclass(slots=True)
class CategoryGroup(Generic[T]):
    """Items of one category, in their original order."""

    category: IngredientCategory
    items: list[T] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.category.value.capitalize()


def group_by_category(
    items: Iterable[T],
    name: Callable[[T], str] = attrgetter("name"),
) -> list[CategoryGroup[T]]:
    """Group ``items`` by guessed category.

    Groups follow the ``IngredientCategory`` order and empty groups are left
    out; items keep their relative order within a group.
    """
    groups = {category: CategoryGroup[T](category) for category in IngredientCategory}
    for item in items:
        groups[guess_category(name(item))].items.append(item)
    return [group for group in groups.values() if group.items]
