"""
errors/taxonomy.py - Grid error taxonomy

Structured exceptions for the few conditions the engine treats as failures.
Bad interaction input is never one of them: it is clamped or ignored.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from enum import Enum


class GridErrorCategory(Enum):
    """Categories of grid errors."""
    INVARIANT = "grid_invariant"          # Internal algorithm guarantee broken
    CONFIGURATION = "grid_configuration"  # Invalid configuration values


class GridErrorSeverity(Enum):
    """Severity levels for grid errors."""
    CRITICAL = "critical"  # Bug in the engine
    ERROR = "error"        # Operation cannot proceed


class GridError(Exception):
    """
    Base class for grid errors.

    Carries an error code, a category and a details dict for the host to
    log or display.
    """

    code: str = "GRID_000"
    category: GridErrorCategory = GridErrorCategory.INVARIANT
    severity: GridErrorSeverity = GridErrorSeverity.ERROR

    def __init__(
        self,
        message: str = "",
        *,
        group: str = "",
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Grid error"
        self.group = group
        self.details = details or {}
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "group": self.group,
            "details": self.details,
        }

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.group:
            parts.append(f"(group: {self.group})")
        return " ".join(parts)


class LayoutInvariantError(GridError):
    """Displacement cascade did not settle within its iteration cap."""

    code = "GRID_001"
    category = GridErrorCategory.INVARIANT
    severity = GridErrorSeverity.CRITICAL

    def __init__(self, item_id: str, iterations: int, **kwargs):
        message = f"Displacement of {item_id} did not settle after {iterations} steps"
        super().__init__(message, item_id=item_id, iterations=iterations, **kwargs)


class ConfigurationError(GridError):
    """Configuration value out of range or unparseable."""

    code = "GRID_002"
    category = GridErrorCategory.CONFIGURATION
    severity = GridErrorSeverity.ERROR

    def __init__(self, key: str, value: Any, reason: str = "", **kwargs):
        message = f"Invalid configuration value {key}={value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, key=key, value=value, **kwargs)
