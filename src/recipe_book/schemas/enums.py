"""Enumeration types shared by the API, the client and the web front end."""

from __future__ import annotations

from enum import StrEnum


class IngredientUnit(StrEnum):
    """Units of measurement an ingredient is counted in."""

    G = "g"
    ML = "ml"
    PIECE = "piece"
    TBSP = "tbsp"
    TSP = "tsp"
    CUP = "cup"
    PINCH = "pinch"


class ErrorKind(StrEnum):
    """Closed set of error discriminants.

    The value doubles as the machine-readable ``code`` of the error envelope.
    ``HTTP_ERROR`` covers API failures whose code is not one of ours,
    ``NETWORK_ERROR`` and ``TIMEOUT_ERROR`` are client-side transport outcomes
    that never travel over the wire.
    """

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL_ERROR"
    HTTP = "HTTP_ERROR"
    NETWORK = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT_ERROR"

    @classmethod
    def from_code(cls, code: str | None) -> ErrorKind:
        """Map an error envelope ``code`` to a kind, ``HTTP`` when unknown."""
        try:
            return cls(code) if code else cls.HTTP
        except ValueError:
            return cls.HTTP

    @property
    def is_transport(self) -> bool:
        """True for outcomes where no HTTP response was received."""
        return self in (ErrorKind.NETWORK, ErrorKind.TIMEOUT)


class IngredientCategory(StrEnum):
    """Shopping-aisle groups for the ingredient list, in display order."""

    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    SEAFOOD = "seafood"
    PANTRY = "pantry"
    BAKING = "baking"
    SPICES = "spices"
    OTHER = "other"
