"""ASGI entry point for the web front end.

Run with ``uvicorn recipe_book.web.main:app`` or the ``recipe-book-web`` script.
"""

from __future__ import annotations

import uvicorn

from recipe_book.core.config import get_settings
from recipe_book.web.factory import create_web_app


app = create_web_app()


def run() -> None:
    """Serve the front end with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "recipe_book.web.main:app",
        host=settings.web.host,
        port=settings.web.port,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()
