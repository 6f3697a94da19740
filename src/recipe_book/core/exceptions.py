"""Domain exceptions and FastAPI exception handlers.

Every domain failure is an ``AppException`` tagged with an ``ErrorKind``.
Handlers dispatch on that discriminant to pick the HTTP status and always
answer with the same envelope::

    {"error": {"code": "...", "message": "...", "details": [{"field", "message"}]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_book.observability.logging import get_logger
from recipe_book.schemas.enums import ErrorKind
from recipe_book.schemas.errors import FieldError


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)


class ErrorBody(BaseModel):
    """Inner object of the error envelope."""

    code: str
    message: str
    details: list[FieldError] | None = None


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    error: ErrorBody


def status_for_kind(kind: ErrorKind) -> int:
    """HTTP status code a server-side error kind is reported with."""
    match kind:
        case ErrorKind.VALIDATION:
            return status.HTTP_400_BAD_REQUEST
        case ErrorKind.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        case ErrorKind.CONFLICT:
            return status.HTTP_409_CONFLICT
        case _:
            return status.HTTP_500_INTERNAL_SERVER_ERROR


class AppException(Exception):
    """Base application exception carrying an error kind and optional details."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: list[FieldError] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def status_code(self) -> int:
        """HTTP status derived from the kind."""
        return status_for_kind(self.kind)

    def to_response(self) -> ErrorResponse:
        """Build the error envelope for this exception."""
        return ErrorResponse(
            error=ErrorBody(
                code=self.kind.value,
                message=self.message,
                details=self.details or None,
            )
        )


class ValidationError(AppException):
    """Client input failed one or more field rules."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: list[FieldError] | None = None,
    ) -> None:
        super().__init__(ErrorKind.VALIDATION, message, details)


class NotFoundError(AppException):
    """Referenced entity does not exist."""

    def __init__(self, resource: str, identifier: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            ErrorKind.NOT_FOUND,
            f"{resource} with id {identifier} not found",
        )


class ConflictError(AppException):
    """Uniqueness or referential-integrity violation."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.CONFLICT, message)


def _render(exc: AppException) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


def _field_from_location(location: tuple[Any, ...]) -> str:
    # ("body", "name") -> "name"; ("body",) -> "body"
    parts = [str(part) for part in location if part not in ("body", "query", "path")]
    if parts:
        return ".".join(parts)
    return str(location[0]) if location else "body"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle domain exceptions."""
        match exc.kind:
            case ErrorKind.VALIDATION:
                logger.debug(
                    "Request rejected by validation",
                    path=request.url.path,
                    details=[d.model_dump() for d in exc.details or []],
                )
            case ErrorKind.CONFLICT:
                logger.warning("Conflict", path=request.url.path, reason=exc.message)
            case _:
                logger.info(exc.message, path=request.url.path, kind=exc.kind.value)
        return _render(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle routing errors (unknown path, wrong method)."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            error = AppException(
                ErrorKind.NOT_FOUND,
                f"Route {request.method} {request.url.path} not found",
            )
            return _render(error)
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=ErrorBody(code=ErrorKind.HTTP.value, message=str(exc.detail))
            ).model_dump(exclude_none=True),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Report malformed request bodies and parameters as VALIDATION_ERROR."""
        details = [
            FieldError(field=_field_from_location(tuple(error["loc"])), message=error["msg"])
            for error in exc.errors()
        ]
        return _render(ValidationError("Validation failed", details))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Downgrade anything unexpected to a generic 500."""
        logger.opt(exception=exc).error(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
        )
        return _render(AppException(ErrorKind.INTERNAL, "An unexpected error occurred"))
