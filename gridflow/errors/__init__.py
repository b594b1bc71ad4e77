"""
errors/ - Grid Error Taxonomy

Structured exceptions raised by the layout engine.
"""

from .taxonomy import (
    GridErrorCategory,
    GridErrorSeverity,
    GridError,
    LayoutInvariantError,
    ConfigurationError,
)

__all__ = [
    "GridErrorCategory",
    "GridErrorSeverity",
    "GridError",
    "LayoutInvariantError",
    "ConfigurationError",
]
