"""Async client for the Recipe Book REST API."""

from recipe_book.clients.recipe_book.client import RecipeBookClient
from recipe_book.clients.recipe_book.exceptions import ClientError
from recipe_book.clients.recipe_book.messages import user_friendly_message


__all__ = ["ClientError", "RecipeBookClient", "user_friendly_message"]
