"""Recipe model definition."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_book.database.models.base import Base, utcnow


if TYPE_CHECKING:
    from recipe_book.database.models.recipe_ingredient import RecipeIngredient


class Recipe(Base):
    """ORM model for the ``recipes`` table."""

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    prep_time: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    cook_time: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    servings: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default="1"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Links are removed by the ON DELETE CASCADE foreign key
    ingredient_links: Mapped[list[RecipeIngredient]] = relationship(
        back_populates="recipe",
        passive_deletes=True,
        order_by="RecipeIngredient.id",
    )
