"""ASGI entry point for the REST API.

Run with ``uvicorn recipe_book.main:app`` or the ``recipe-book-api`` script.
"""

from __future__ import annotations

import uvicorn

from recipe_book.core.config import get_settings
from recipe_book.factory import create_app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "recipe_book.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()
