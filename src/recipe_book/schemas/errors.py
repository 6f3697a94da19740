"""Field-level error descriptor shared by validation, the API and the client."""

from __future__ import annotations

from pydantic import BaseModel


class FieldError(BaseModel):
    """A single field-level violation."""

    field: str
    message: str
