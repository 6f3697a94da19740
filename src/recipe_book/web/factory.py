"""Application factory for the web front end.

The front end never touches the store; every page goes through a
``RecipeBookClient`` kept on ``app.state.client``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_book.clients.recipe_book import RecipeBookClient
from recipe_book.core.config import Settings, get_settings
from recipe_book.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)
from recipe_book.observability.logging import get_logger, setup_logging
from recipe_book.services.scaling import format_quantity, format_unit
from recipe_book.web.views import router


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


logger = get_logger(__name__)

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"


def create_templates(settings: Settings) -> Jinja2Templates:
    """Build the template environment with the quantity filters registered."""
    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.filters["quantity"] = format_quantity
    templates.env.filters["unit_label"] = format_unit
    templates.env.globals["page_title"] = settings.web.page_title
    return templates


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Own the API client unless one was injected."""
    settings: Settings = app.state.settings

    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    owned = app.state.client is None
    if owned:
        client = RecipeBookClient(settings=settings.client)
        await client.initialize()
        app.state.client = client
    logger.info("Web front end started", api_base_url=app.state.client.base_url)

    try:
        yield
    finally:
        if owned:
            await app.state.client.shutdown()
            app.state.client = None
        logger.info("Web front end stopped")


def create_web_app(
    settings: Settings | None = None,
    *,
    client: RecipeBookClient | None = None,
) -> FastAPI:
    """Create and configure the web front end.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().
        client: Pre-built API client; the lifespan creates one when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.web.page_title,
        version=settings.app.version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        debug=settings.app.debug,
    )
    app.state.settings = settings
    app.state.client = client
    app.state.templates = create_templates(settings)

    _setup_error_pages(app)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(LoggingMiddleware, exclude_paths={"/static/style.css"})
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(router)

    return app


def _setup_error_pages(app: FastAPI) -> None:
    """Render framework errors as HTML pages instead of JSON."""

    def error_page(request: Request, message: str, status_code: int) -> HTMLResponse:
        templates: Jinja2Templates = request.app.state.templates
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": message, "retry_url": None},
            status_code=status_code,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> HTMLResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Page not found."
        else:
            message = str(exc.detail)
        return error_page(request, message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> HTMLResponse:
        logger.warning("Invalid web request", path=request.url.path, errors=len(exc.errors()))
        return error_page(
            request, "The requested page does not exist.", status.HTTP_404_NOT_FOUND
        )
