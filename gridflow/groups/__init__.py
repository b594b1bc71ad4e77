"""
groups/ - Interactive grids

GridLayout runs drag, drop and resize for one grid; GroupRegistry lets
several grids on a page exchange items.
"""

from .registry import (
    GridHandle,
    GroupRegistry,
)

from .grid import (
    GridLayout,
)

__all__ = [
    "GridHandle",
    "GroupRegistry",
    "GridLayout",
]
