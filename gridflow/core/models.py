"""
GRIDFLOW Layout Models

Grid placement data structures shared by every layout algorithm.

Algorithms treat these as values: they copy what they change and return a
new list, so a caller holding the previous list always sees it unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
import math

from .constants import (
    DEFAULT_COLS,
    DEFAULT_CONTAINER_PADDING,
    DEFAULT_MARGIN,
    DEFAULT_MAX_ROWS,
    DEFAULT_ROW_HEIGHT,
)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class CompactType(Enum):
    """Direction in which a grid removes gaps."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    NONE = "none"

    @classmethod
    def coerce(cls, value: Union["CompactType", str, None]) -> "CompactType":
        """Accept the enum, its string value, or None (no compaction)."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        return cls(str(value).lower())


# =============================================================================
# LAYOUT ITEM
# =============================================================================

@dataclass
class LayoutItem:
    """
    One card's placement on the grid, in grid cells.

    `placeholder` marks an item whose position is provisional while it is
    being dragged. It is not part of equality.
    """
    item_id: str
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1

    # Resize bounds (None = unbounded)
    min_w: int = 1
    max_w: Optional[int] = None
    min_h: int = 1
    max_h: Optional[int] = None

    static: bool = False
    is_draggable: bool = True
    is_resizable: bool = True

    # Owning grid once the item has moved across grids
    group: Optional[str] = None

    # Host payload, carried through untouched
    data: Dict[str, Any] = field(default_factory=dict)

    placeholder: bool = field(default=False, compare=False)

    def __post_init__(self):
        if self.static:
            self.is_draggable = False
            self.is_resizable = False

    @property
    def right(self) -> int:
        """First column right of the item."""
        return self.x + self.w

    @property
    def bottom(self) -> int:
        """First row below the item."""
        return self.y + self.h

    def copy(self, **changes) -> "LayoutItem":
        """Shallow copy with an independent `data` dict."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["data"] = dict(self.data)
        values.update(changes)
        return LayoutItem(**values)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "item_id": self.item_id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "min_w": self.min_w,
            "max_w": self.max_w,
            "min_h": self.min_h,
            "max_h": self.max_h,
            "static": self.static,
            "is_draggable": self.is_draggable,
            "is_resizable": self.is_resizable,
            "group": self.group,
            "data": dict(self.data),
        }
        if self.placeholder:
            result["placeholder"] = True
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutItem":
        """Build from a dict produced by to_dict(). Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        values["data"] = dict(values.get("data") or {})
        return cls(**values)


@dataclass
class DragItem:
    """
    Card dragged in from outside any grid.

    Missing fields are filled from the grid's dropping item defaults.
    """
    item_id: Optional[str] = None
    w: Optional[int] = None
    h: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)


# =============================================================================
# GRID GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class PositionParams:
    """Pixel geometry of one grid, fixed for the duration of a computation."""
    cols: int = DEFAULT_COLS
    margin: Tuple[float, float] = DEFAULT_MARGIN
    container_padding: Tuple[float, float] = DEFAULT_CONTAINER_PADDING
    row_height: float = DEFAULT_ROW_HEIGHT
    max_rows: float = DEFAULT_MAX_ROWS
    container_width: float = 0.0

    @property
    def col_width(self) -> float:
        """Pixel width of one column; 0 for a degenerate grid."""
        if self.cols <= 0 or self.container_width <= 0:
            return 0.0
        margin_x = self.margin[0]
        padding_x = self.container_padding[0]
        width = (self.container_width - margin_x * (self.cols - 1) - 2 * padding_x) / self.cols
        return max(width, 0.0)


@dataclass
class GridPosition:
    """Pixel box of an item relative to the container origin."""
    left: float
    top: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }


# =============================================================================
# LAYOUT UTILITIES
# =============================================================================

Layout = List[LayoutItem]


def clone_layout(layout: Iterable[LayoutItem]) -> Layout:
    """Copy every item of a layout."""
    return [item.copy() for item in layout]


def get_layout_item(layout: Iterable[LayoutItem], item_id: str) -> Optional[LayoutItem]:
    """Find an item by id."""
    for item in layout:
        if item.item_id == item_id:
            return item
    return None


def index_of(layout: List[LayoutItem], item_id: str) -> int:
    """Position of an item in the layout, -1 if absent."""
    for index, item in enumerate(layout):
        if item.item_id == item_id:
            return index
    return -1


def layouts_equal(a: List[LayoutItem], b: List[LayoutItem]) -> bool:
    """Same length and item-wise equal, ignoring placeholder markers."""
    if len(a) != len(b):
        return False
    return all(left == right for left, right in zip(a, b))


def bottom(layout: Iterable[LayoutItem]) -> int:
    """Lowest occupied row + 1; 0 for an empty layout."""
    return max((item.bottom for item in layout), default=0)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from the floor."""
    return int(math.floor(value + 0.5))
