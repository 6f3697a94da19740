"""Application lifecycle events."""

from recipe_book.core.events.lifespan import lifespan, open_database


__all__ = ["lifespan", "open_database"]
