"""
Core module - Shared exceptions, logging and configuration.

``polycsg.core.config`` and ``polycsg.core.geometry`` are imported on demand;
both depend on the CSG packages, which in turn use the exceptions here.
"""

from polycsg.core.exceptions import (
    ConfigurationError,
    DegeneratePolygonError,
    GeometryError,
    PolyCSGError,
)
from polycsg.core.logging import configure_logging, get_logger, operation_context

__all__ = [
    # Exceptions
    "PolyCSGError",
    "ConfigurationError",
    "GeometryError",
    "DegeneratePolygonError",
    # Logging
    "configure_logging",
    "get_logger",
    "operation_context",
]
