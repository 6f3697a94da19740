"""Relational persistence: store handle, ORM models, repositories."""

from recipe_book.database.connection import Database


__all__ = ["Database"]
