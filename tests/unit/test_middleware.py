"""Unit tests for the HTTP middleware stack."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from recipe_book.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)
from recipe_book.core.middleware.logging import client_address
from recipe_book.core.middleware.request_id import MAX_REQUEST_ID_LENGTH
from recipe_book.observability.logging import get_context


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


pytestmark = pytest.mark.unit


@pytest.fixture
def app() -> FastAPI:
    """App with the full middleware stack and a few probe routes."""
    app = FastAPI()

    @app.get("/api/echo")
    async def echo(request: Request) -> dict[str, object]:
        return {"request_id": request.state.request_id, "context": get_context()}

    @app.get("/page")
    async def page() -> dict[str, str]:
        return {"ok": "yes"}

    app.add_middleware(LoggingMiddleware, exclude_paths={"/page"})
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, no_store_prefix="/api")
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestRequestIDMiddleware:
    """Tests for request id propagation."""

    async def test_generates_id(self, client: AsyncClient) -> None:
        """Should mint an id when the caller sends none."""
        response = await client.get("/api/echo")

        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 32
        assert response.json()["request_id"] == request_id

    async def test_propagates_caller_id(self, client: AsyncClient) -> None:
        """Should echo a caller-supplied id and bind it for logging."""
        response = await client.get("/api/echo", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["context"]["request_id"] == "trace-123"

    async def test_replaces_oversized_id(self, client: AsyncClient) -> None:
        """Should not echo ids longer than the limit."""
        oversized = "x" * (MAX_REQUEST_ID_LENGTH + 1)

        response = await client.get("/api/echo", headers={"X-Request-ID": oversized})

        assert response.headers["X-Request-ID"] != oversized


class TestLoggingMiddleware:
    """Tests for access-log context."""

    async def test_binds_request_context(self, client: AsyncClient) -> None:
        """Should bind method and path for the rest of the request."""
        context = (await client.get("/api/echo")).json()["context"]

        assert context["method"] == "GET"
        assert context["path"] == "/api/echo"

    async def test_excluded_paths_not_bound(self, client: AsyncClient) -> None:
        """Should pass excluded paths straight through."""
        response = await client.get("/page")

        assert response.status_code == 200

    def test_client_address_prefers_forwarded_for(self) -> None:
        """Should use the first X-Forwarded-For hop."""
        request = Request(
            {
                "type": "http",
                "headers": [(b"x-forwarded-for", b"203.0.113.9, 10.0.0.1")],
                "client": ("127.0.0.1", 5000),
            }
        )

        assert client_address(request) == "203.0.113.9"


class TestTimingAndSecurityHeaders:
    """Tests for response headers."""

    async def test_process_time_header(self, client: AsyncClient) -> None:
        """Should report processing time in milliseconds."""
        response = await client.get("/page")

        assert response.headers["X-Process-Time"].endswith("ms")

    async def test_security_headers(self, client: AsyncClient) -> None:
        """Should harden every response."""
        response = await client.get("/page")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'self'" in response.headers["Content-Security-Policy"]
        assert "Cache-Control" not in response.headers

    async def test_api_responses_not_cached(self, client: AsyncClient) -> None:
        """Should mark responses under the API prefix uncacheable."""
        response = await client.get("/api/echo")

        assert response.headers["Cache-Control"] == "no-store"
