"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: typed form of an incoming request body, built after the
      validation rules have accepted the raw payload
    - APIResponse: outgoing response bodies (also parsed back by the client)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        validate_default=True,
    )


class APIRequest(_BaseSchema):
    """Base class for typed request payloads.

    Extra fields are ignored - clients may send properties we don't use.
    """

    model_config = ConfigDict(extra="ignore")


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Extra fields are forbidden - only explicitly defined properties are returned.
    """

    model_config = ConfigDict(extra="forbid")
