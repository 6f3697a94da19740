"""Unit tests for ingredient category grouping."""

from __future__ import annotations

import pytest

from recipe_book.schemas.enums import IngredientCategory
from recipe_book.schemas.recipe import RecipeIngredientRead
from recipe_book.services.categories import group_by_category, guess_category


pytestmark = pytest.mark.unit


def _item(ingredient_id: int, name: str) -> RecipeIngredientRead:
    return RecipeIngredientRead(id=ingredient_id, name=name, unit="g", quantity=1)


class TestGuessCategory:
    """Tests for guess_category."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("Tomato", IngredientCategory.PRODUCE),
            ("Tomatoes", IngredientCategory.PRODUCE),
            ("Eggs", IngredientCategory.DAIRY),
            ("Chicken Breast", IngredientCategory.MEAT),
            ("Salmon fillet", IngredientCategory.SEAFOOD),
            ("Sea Salt", IngredientCategory.SPICES),
            ("All-purpose Flour", IngredientCategory.BAKING),
            ("Basmati Rice", IngredientCategory.PANTRY),
            ("Water", IngredientCategory.OTHER),
        ],
    )
    def test_keywords(self, name: str, category: IngredientCategory) -> None:
        """Should match whole keywords case-insensitively."""
        assert guess_category(name) is category

    def test_first_category_wins(self) -> None:
        """Should prefer the earlier category when several match."""
        assert guess_category("Black pepper") is IngredientCategory.PRODUCE
        assert guess_category("Olive oil") is IngredientCategory.BAKING

    def test_partial_words_do_not_match(self) -> None:
        """Should not match a keyword inside a longer word."""
        assert guess_category("Hamburger bun") is IngredientCategory.OTHER


class TestGroupByCategory:
    """Tests for group_by_category."""

    def test_groups_in_display_order(self) -> None:
        """Should order groups by category and keep item order inside them."""
        items = [
            _item(1, "Flour"),
            _item(2, "Eggs"),
            _item(3, "Sugar"),
            _item(4, "Water"),
            _item(5, "Milk"),
        ]

        groups = group_by_category(items)

        assert [group.label for group in groups] == ["Dairy", "Baking", "Other"]
        assert [[item.id for item in group.items] for group in groups] == [
            [2, 5],
            [1, 3],
            [4],
        ]

    def test_empty(self) -> None:
        """Should return no groups for no items."""
        assert group_by_category([]) == []

    def test_custom_name_getter(self) -> None:
        """Should read names through the given callable."""
        groups = group_by_category(["lemon", "butter"], name=str)

        assert [(group.category, group.items) for group in groups] == [
            (IngredientCategory.PRODUCE, ["lemon"]),
            (IngredientCategory.DAIRY, ["butter"]),
        ]
