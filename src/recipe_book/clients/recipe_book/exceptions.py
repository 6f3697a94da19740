"""Recipe Book API client errors.

Every failure surfaces as a single ``ClientError`` tagged with an
``ErrorKind``; callers dispatch with ``match error.kind``.
"""

from __future__ import annotations

from typing import Any, Final

from recipe_book.schemas.enums import ErrorKind
from recipe_book.schemas.errors import FieldError


NETWORK_ERROR_MESSAGE: Final[str] = "Network error. Please check your connection."
TIMEOUT_ERROR_MESSAGE: Final[str] = "Request timed out. Please try again."

# Rate limiting is the only client error worth retrying
RETRYABLE_CLIENT_STATUS: Final[int] = 429


class ClientError(Exception):
    """Classified outcome of a failed API call.

    Attributes:
        kind: Discriminant. Transport failures are ``NETWORK`` or ``TIMEOUT``;
            API failures carry the kind named by the response ``code``.
        message: Human-readable message (from the API when it sent one).
        status_code: HTTP status, ``None`` for transport failures.
        code: Machine-readable code from the error envelope.
        details: Field-level violations, empty when none were sent.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        details: list[FieldError] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or []
        super().__init__(message)

    @classmethod
    def api(
        cls,
        status_code: int,
        message: str,
        code: str,
        details: list[FieldError] | None = None,
    ) -> ClientError:
        return cls(
            ErrorKind.from_code(code),
            message,
            status_code=status_code,
            code=code,
            details=details,
        )

    @classmethod
    def network(cls, message: str = NETWORK_ERROR_MESSAGE) -> ClientError:
        return cls(ErrorKind.NETWORK, message, code=ErrorKind.NETWORK.value)

    @classmethod
    def timeout(cls, message: str = TIMEOUT_ERROR_MESSAGE) -> ClientError:
        return cls(ErrorKind.TIMEOUT, message, code=ErrorKind.TIMEOUT.value)

    @property
    def is_retryable(self) -> bool:
        """Transport failures, 429 and 5xx are retried; other 4xx are final."""
        if self.kind.is_transport:
            return True
        if self.status_code is None:
            return False
        return self.status_code == RETRYABLE_CLIENT_STATUS or self.status_code >= 500

    def field_errors(self) -> dict[str, str]:
        """Details keyed by field; the first message per field wins."""
        errors: dict[str, str] = {}
        for detail in self.details:
            errors.setdefault(detail.field, detail.message)
        return errors

    def __repr__(self) -> str:
        return (
            f"ClientError(kind={self.kind.value!r}, status_code={self.status_code!r}, "
            f"message={self.message!r})"
        )


def parse_error_body(status_code: int, body: Any) -> ClientError:
    """Build an API error from a decoded ``{"error": {...}}`` envelope.

    Missing pieces fall back to ``HTTP <status>`` and ``HTTP_ERROR``.
    """
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        error = {}

    message = error.get("message")
    code = error.get("code")
    details: list[FieldError] = []
    raw_details = error.get("details")
    if isinstance(raw_details, list):
        for item in raw_details:
            if isinstance(item, dict) and "field" in item and "message" in item:
                details.append(
                    FieldError(field=str(item["field"]), message=str(item["message"]))
                )

    return ClientError.api(
        status_code,
        message if isinstance(message, str) and message else f"HTTP {status_code}",
        code if isinstance(code, str) and code else ErrorKind.HTTP.value,
        details,
    )
