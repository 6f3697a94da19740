"""Keyword tables for guessing an ingredient's category from its name.

Categories are tried in the order listed; the first keyword match wins, so
"pepper" is produce and "olive oil" is baking.
"""

from __future__ import annotations

import re
from typing import Final

from recipe_book.schemas.enums import IngredientCategory


KeywordTable = tuple[tuple[IngredientCategory, tuple[str, ...]], ...]
PatternTable = tuple[tuple[IngredientCategory, re.Pattern[str]], ...]

# fmt: off
CATEGORY_KEYWORDS: Final[KeywordTable] = (
    (
        IngredientCategory.PRODUCE,
        (
            "apple", "banana", "orange", "tomato", "onion", "garlic", "potato",
            "carrot", "lettuce", "spinach", "pepper", "lemon", "lime", "herb",
            "parsley", "basil", "mint", "cilantro", "ginger", "mushroom",
            "zucchini", "cucumber", "celery", "broccoli", "cauliflower",
            "avocado", "berry", "fruit", "vegetable",
        ),
    ),
    (
        IngredientCategory.DAIRY,
        (
            "milk", "cheese", "butter", "cream", "yogurt", "egg", "mozzarella",
            "cheddar", "parmesan", "feta", "ricotta",
        ),
    ),
    (
        IngredientCategory.MEAT,
        (
            "chicken", "beef", "pork", "lamb", "turkey", "bacon", "sausage",
            "ham", "meat", "steak", "ground",
        ),
    ),
    (
        IngredientCategory.SEAFOOD,
        (
            "fish", "salmon", "tuna", "shrimp", "prawn", "crab", "lobster",
            "scallop", "cod", "seafood",
        ),
    ),
    (
        IngredientCategory.SPICES,
        (
            "salt", "pepper", "cumin", "paprika", "cinnamon", "nutmeg",
            "oregano", "thyme", "rosemary", "spice", "seasoning", "powder",
            "flakes",
        ),
    ),
    (
        IngredientCategory.BAKING,
        (
            "flour", "sugar", "baking", "yeast", "vanilla", "chocolate", "honey",
            "syrup", "oil", "vinegar",
        ),
    ),
    (
        IngredientCategory.PANTRY,
        (
            "rice", "pasta", "noodle", "bean", "lentil", "can", "sauce", "broth",
            "stock", "cereal", "grain", "bread",
        ),
    ),
)
# fmt: on

# Whole words, with an optional plural ending ("eggs", "tomatoes")
CATEGORY_PATTERNS: Final[PatternTable] = tuple(
    (
        category,
        re.compile(r"\b(?:" + "|".join(keywords) + r")(?:e?s)?\b"),
    )
    for category, keywords in CATEGORY_KEYWORDS
)
