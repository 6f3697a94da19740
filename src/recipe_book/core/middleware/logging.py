"""Request logging middleware.

Emits one structured line per request once the response status is known.
Server errors log at ERROR, client errors at WARNING, everything else at INFO.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_book.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from collections.abc import Iterable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp


logger = get_logger(__name__)


def client_address(request: Request) -> str:
    """Best guess at the caller's address, honouring proxy headers."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self.exclude_paths = frozenset(exclude_paths)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=client_address(request),
        )

        response = await call_next(request)

        status_code = response.status_code
        if status_code >= 500:
            level = "ERROR"
        elif status_code >= 400:
            level = "WARNING"
        else:
            level = "INFO"
        logger.log(
            level,
            "Request completed",
            status_code=status_code,
            query=str(request.query_params) or None,
        )
        return response
