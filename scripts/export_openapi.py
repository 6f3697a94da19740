"""Write the REST API's OpenAPI document to ``docs/openapi.json``.

Usage:
    python scripts/export_openapi.py [output-path]
"""

from __future__ import annotations

import sys
from pathlib import Path

import orjson
from fastapi.openapi.utils import get_openapi

from recipe_book.factory import create_app


DEFAULT_OUTPUT = Path("docs/openapi.json")


def export_openapi(output: Path = DEFAULT_OUTPUT) -> Path:
    """Render the schema of a freshly built app to ``output``."""
    app = create_app()
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(orjson.dumps(schema, option=orjson.OPT_INDENT_2))
    return output


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_OUTPUT
    print(f"Wrote {export_openapi(target)}")
