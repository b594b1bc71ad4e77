"""
GRIDFLOW Core Module

Contains the foundation layer:
- Grid defaults
- Layout data model (LayoutItem, PositionParams, CompactType)
"""

from gridflow.core.models import (
    CompactType,
    LayoutItem,
    DragItem,
    PositionParams,
    GridPosition,
    Layout,
    clone_layout,
    get_layout_item,
    index_of,
    layouts_equal,
    bottom,
)

__all__ = [
    "CompactType",
    "LayoutItem",
    "DragItem",
    "PositionParams",
    "GridPosition",
    "Layout",
    "clone_layout",
    "get_layout_item",
    "index_of",
    "layouts_equal",
    "bottom",
]
