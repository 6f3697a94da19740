"""Ingredient model definition."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_book.database.models.base import Base, utcnow


if TYPE_CHECKING:
    from recipe_book.database.models.recipe_ingredient import RecipeIngredient


class Ingredient(Base):
    """ORM model for the ``ingredients`` table.

    Names are unique regardless of case; the functional index enforces it at
    the storage level as well.
    """

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    unit: Mapped[str] = mapped_column(
        String(16), nullable=False, default="piece", server_default="piece"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    recipe_links: Mapped[list[RecipeIngredient]] = relationship(
        back_populates="ingredient",
        passive_deletes=True,
    )


Index("uq_ingredients_name_lower", func.lower(Ingredient.name), unique=True)
