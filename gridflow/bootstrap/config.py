"""
bootstrap/config.py - Grid configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple
from pathlib import Path
import json
import logging
import math
import os

from gridflow.core.constants import (
    DEFAULT_COLS,
    DEFAULT_CONTAINER_PADDING,
    DEFAULT_DROPPING_ITEM_H,
    DEFAULT_DROPPING_ITEM_ID,
    DEFAULT_DROPPING_ITEM_W,
    DEFAULT_GROUP,
    DEFAULT_ITEM_H,
    DEFAULT_ITEM_TYPE,
    DEFAULT_ITEM_W,
    DEFAULT_MARGIN,
    DEFAULT_MAX_ROWS,
    DEFAULT_ROW_HEIGHT,
)
from gridflow.core.models import CompactType, PositionParams
from gridflow.errors import ConfigurationError

logger = logging.getLogger("bootstrap.config")


def _env(name: str, default: Any, parse: Callable[[str], Any]) -> Any:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError as e:
        raise ConfigurationError(name, raw, str(e))


def _pair(raw: str) -> Tuple[float, float]:
    """Parse "10,10" or "10" into an (x, y) pair."""
    parts = [float(p) for p in raw.split(",") if p.strip()]
    if len(parts) == 1:
        return parts[0], parts[0]
    if len(parts) != 2:
        raise ValueError("expected one or two comma separated numbers")
    return parts[0], parts[1]


def _bool(raw: str) -> bool:
    return raw.lower() == "true"


# Numeric GridConfig fields and their parsers, for values read from files
_NUMERIC_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "cols": int,
    "row_height": float,
    "max_rows": float,
    "default_item_w": int,
    "default_item_h": int,
    "dropping_item_w": int,
    "dropping_item_h": int,
}


@dataclass
class GridConfig:
    """Geometry and interaction settings for one grid."""

    cols: int = DEFAULT_COLS
    margin: Tuple[float, float] = DEFAULT_MARGIN
    container_padding: Tuple[float, float] = DEFAULT_CONTAINER_PADDING
    row_height: float = DEFAULT_ROW_HEIGHT
    max_rows: float = DEFAULT_MAX_ROWS
    compact_type: CompactType = CompactType.VERTICAL
    prevent_collision: bool = False

    # Size for items whose width/height is missing
    default_item_w: int = DEFAULT_ITEM_W
    default_item_h: int = DEFAULT_ITEM_H

    # Cards dragged in from outside any grid
    card_item_type: str = DEFAULT_ITEM_TYPE
    dropping_item_id: str = DEFAULT_DROPPING_ITEM_ID
    dropping_item_w: int = DEFAULT_DROPPING_ITEM_W
    dropping_item_h: int = DEFAULT_DROPPING_ITEM_H

    default_group: str = DEFAULT_GROUP

    def __post_init__(self):
        self.compact_type = CompactType.coerce(self.compact_type)
        self.margin = tuple(self.margin)
        self.container_padding = tuple(self.container_padding)

    def validate(self) -> "GridConfig":
        """Raise ConfigurationError for values the engine cannot work with."""
        if self.cols < 1:
            raise ConfigurationError("cols", self.cols, "must be at least 1")
        if self.row_height < 0:
            raise ConfigurationError("row_height", self.row_height, "must not be negative")
        if self.max_rows < 1:
            raise ConfigurationError("max_rows", self.max_rows, "must be at least 1")
        if len(self.margin) != 2:
            raise ConfigurationError("margin", self.margin, "expected (x, y)")
        if len(self.container_padding) != 2:
            raise ConfigurationError("container_padding", self.container_padding, "expected (x, y)")
        for key in ("default_item_w", "default_item_h", "dropping_item_w", "dropping_item_h"):
            if getattr(self, key) < 1:
                raise ConfigurationError(key, getattr(self, key), "must be at least 1")
        return self

    def position_params(self, container_width: float = 0.0) -> PositionParams:
        """Geometry snapshot for a container of the given pixel width."""
        return PositionParams(
            cols=self.cols,
            margin=self.margin,
            container_padding=self.container_padding,
            row_height=self.row_height,
            max_rows=self.max_rows,
            container_width=container_width,
        )

    @classmethod
    def from_env(cls) -> "GridConfig":
        try:
            compact_type = CompactType.coerce(os.getenv("GRIDFLOW_COMPACT_TYPE", "vertical"))
        except ValueError:
            raise ConfigurationError("GRIDFLOW_COMPACT_TYPE", os.getenv("GRIDFLOW_COMPACT_TYPE"))

        return cls(
            cols=_env("GRIDFLOW_COLS", DEFAULT_COLS, int),
            margin=_env("GRIDFLOW_MARGIN", DEFAULT_MARGIN, _pair),
            container_padding=_env("GRIDFLOW_CONTAINER_PADDING", DEFAULT_CONTAINER_PADDING, _pair),
            row_height=_env("GRIDFLOW_ROW_HEIGHT", DEFAULT_ROW_HEIGHT, float),
            max_rows=_env("GRIDFLOW_MAX_ROWS", DEFAULT_MAX_ROWS, float),
            compact_type=compact_type,
            prevent_collision=_env("GRIDFLOW_PREVENT_COLLISION", False, _bool),
            default_item_w=_env("GRIDFLOW_DEFAULT_ITEM_W", DEFAULT_ITEM_W, int),
            default_item_h=_env("GRIDFLOW_DEFAULT_ITEM_H", DEFAULT_ITEM_H, int),
            card_item_type=os.getenv("GRIDFLOW_CARD_ITEM_TYPE", DEFAULT_ITEM_TYPE),
            dropping_item_id=os.getenv("GRIDFLOW_DROPPING_ITEM_ID", DEFAULT_DROPPING_ITEM_ID),
            dropping_item_w=_env("GRIDFLOW_DROPPING_ITEM_W", DEFAULT_DROPPING_ITEM_W, int),
            dropping_item_h=_env("GRIDFLOW_DROPPING_ITEM_H", DEFAULT_DROPPING_ITEM_H, int),
            default_group=os.getenv("GRIDFLOW_DEFAULT_GROUP", DEFAULT_GROUP),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cols": self.cols,
            "margin": list(self.margin),
            "container_padding": list(self.container_padding),
            "row_height": self.row_height,
            "max_rows": None if math.isinf(self.max_rows) else self.max_rows,
            "compact_type": self.compact_type.value,
            "prevent_collision": self.prevent_collision,
            "default_item_w": self.default_item_w,
            "default_item_h": self.default_item_h,
            "card_item_type": self.card_item_type,
            "dropping_item_id": self.dropping_item_id,
            "dropping_item_w": self.dropping_item_w,
            "dropping_item_h": self.dropping_item_h,
            "default_group": self.default_group,
        }


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("GRIDFLOW_LOG_LEVEL", "INFO"),
            format=os.getenv("GRIDFLOW_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("GRIDFLOW_LOG_FILE"),
            json_logs=os.getenv("GRIDFLOW_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class GridflowConfig:
    """Root configuration."""

    grid: GridConfig = field(default_factory=GridConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "GridflowConfig":
        """Create configuration from environment variables."""
        return cls(
            grid=GridConfig.from_env().validate(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "GridflowConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "GridflowConfig":
        """Create config from dictionary, on top of the environment."""
        config = cls.from_env()

        if "grid" in data:
            for key, value in data["grid"].items():
                if not hasattr(config.grid, key):
                    continue
                parse = _NUMERIC_FIELDS.get(key)
                if parse is not None and value is not None:
                    try:
                        value = parse(value)
                    except (TypeError, ValueError) as e:
                        raise ConfigurationError(key, value, str(e))
                setattr(config.grid, key, value)

            if data["grid"].get("max_rows", 0) is None:
                config.grid.max_rows = math.inf
            # Re-run coercion of enum and pair fields
            try:
                config.grid.__post_init__()
            except ValueError:
                raise ConfigurationError("compact_type", config.grid.compact_type)
            except TypeError as e:
                raise ConfigurationError("grid", data["grid"], str(e))
            try:
                config.grid.validate()
            except TypeError as e:
                raise ConfigurationError("grid", data["grid"], str(e))

        if "logging" in data:
            for key, value in data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "grid": self.grid.to_dict(),
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


def load_config(filepath: str = None) -> GridflowConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        GridflowConfig instance
    """
    if filepath:
        return GridflowConfig.from_file(filepath)
    return GridflowConfig.from_env()
