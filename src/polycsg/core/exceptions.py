"""
Custom exceptions for polycsg.

All polycsg exceptions inherit from PolyCSGError for easy catching.
"""

from typing import Any


class PolyCSGError(Exception):
    """Base exception for all polycsg errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(PolyCSGError):
    """Raised when configuration is invalid or missing."""

    pass


class GeometryError(PolyCSGError):
    """Raised when geometry is malformed or a conversion fails."""

    pass


class DegeneratePolygonError(GeometryError):
    """Raised when a polygon is constructed from fewer than three vertices."""

    def __init__(
        self,
        message: str,
        vertex_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.vertex_count = vertex_count
