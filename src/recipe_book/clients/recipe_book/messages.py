"""User-facing wording for client errors."""

from __future__ import annotations

from typing import Final

from recipe_book.clients.recipe_book.exceptions import ClientError
from recipe_book.schemas.enums import ErrorKind


GENERIC_MESSAGE: Final[str] = "An unexpected error occurred."
SERVER_ERROR_MESSAGE: Final[str] = "Server error. Please try again later."


def _for_status(status_code: int | None, message: str) -> str:
    match status_code:
        case 400:
            return message or "Invalid request. Please check your input."
        case 401:
            return "You are not authorized. Please log in."
        case 403:
            return "You do not have permission to perform this action."
        case 404:
            return message or "The requested resource was not found."
        case 409:
            return message or "This resource already exists."
        case 422:
            return message or "Validation failed. Please check your input."
        case 429:
            return "Too many requests. Please wait a moment."
        case int() as code if code >= 500:
            return SERVER_ERROR_MESSAGE
        case _:
            return message or GENERIC_MESSAGE


def user_friendly_message(error: BaseException | None) -> str:
    """Message to show a person for ``error``.

    API errors are keyed by HTTP status; transport errors keep their own
    message; anything else falls back to its text or a generic sentence.
    """
    if isinstance(error, ClientError):
        match error.kind:
            case ErrorKind.NETWORK | ErrorKind.TIMEOUT:
                return error.message
            case _:
                return _for_status(error.status_code, error.message)
    if error is not None and str(error):
        return str(error)
    return GENERIC_MESSAGE
