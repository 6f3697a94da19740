"""API router aggregating all endpoint routers.

All endpoints are mounted under ``api.prefix`` (``/api`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_book.api.v1.endpoints import health, ingredients, recipes


router = APIRouter()

router.include_router(health.router)
router.include_router(recipes.router)
router.include_router(ingredients.router)
