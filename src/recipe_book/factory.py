"""Application factory for the REST API.

``create_app`` wires settings, exception handlers, the middleware stack and
the API router into a FastAPI instance. The store handle itself is opened by
the lifespan and lives on ``app.state.database``.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from recipe_book.api.v1.router import router as api_router
from recipe_book.core.config import Settings, get_settings
from recipe_book.core.events import lifespan
from recipe_book.core.exceptions import setup_exception_handlers
from recipe_book.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the API application.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    prefix = settings.api.prefix
    app = FastAPI(
        title=f"{settings.app.name} API",
        version=settings.app.version,
        description="Recipes, ingredients and their quantities.",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url=f"{prefix}/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url=f"{prefix}/openapi.json" if settings.is_development else None,
        debug=settings.app.debug,
    )
    app.state.settings = settings
    app.state.database = None

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    app.include_router(api_router, prefix=prefix)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure the middleware stack.

    The last middleware added runs first on the request, so from the
    request's point of view the order is: security headers, request id,
    timing, logging, gzip, CORS.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=False,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={f"{settings.api.prefix}/health", f"{settings.api.prefix}/ready"},
    )
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, no_store_prefix=settings.api.prefix)
