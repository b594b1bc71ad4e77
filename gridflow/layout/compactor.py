"""
layout/compactor.py - Gap removal

Slides non-static items toward the origin along one axis, producing a
canonical arrangement. Static items stay where they are and act as fixed
obstacles.

Compaction is idempotent: compacting an already compacted layout returns an
equal layout.
"""

from __future__ import annotations
from typing import List, Union
import logging

from gridflow.core.models import CompactType, LayoutItem, clamp
from .collision import get_first_collision

__all__ = [
    'compact',
    'sort_layout_items',
]

logger = logging.getLogger("layout.compactor")


def sort_layout_items(layout: List[LayoutItem], compact_type: CompactType) -> List[LayoutItem]:
    """
    Order in which items are compacted.

    Vertical compaction walks rows then columns, horizontal walks columns
    then rows. No compaction keeps the stored order. The sort is stable.
    """
    if compact_type is CompactType.VERTICAL:
        return sorted(layout, key=lambda item: (item.y, item.x))
    if compact_type is CompactType.HORIZONTAL:
        return sorted(layout, key=lambda item: (item.x, item.y))
    return list(layout)


def compact(
    layout: List[LayoutItem],
    compact_type: Union[CompactType, str, None],
    cols: int,
) -> List[LayoutItem]:
    """
    Remove gaps from a layout.

    Args:
        layout: Items to compact (not modified)
        compact_type: Direction of compaction
        cols: Column count of the grid

    Returns:
        New list of item copies in the same order as `layout`
    """
    compact_type = CompactType.coerce(compact_type)

    if compact_type is CompactType.NONE:
        return [item.copy() for item in layout]

    result: List[LayoutItem] = [item.copy() for item in layout]

    # Statics are obstacles from the start
    placed = [item for item in result if item.static]

    movable = [item for item in result if not item.static]
    for item in sort_layout_items(movable, compact_type):
        if compact_type is CompactType.VERTICAL:
            _compact_vertical(item, placed)
        else:
            _compact_horizontal(item, placed, cols)
        placed.append(item)

    logger.debug(f"Compacted {len(result)} items ({compact_type.value})")
    return result


def _compact_vertical(item: LayoutItem, placed: List[LayoutItem]) -> None:
    """Slide up while the row above is free, then settle below any overlap."""
    while item.y > 0:
        item.y -= 1
        if get_first_collision(placed, item) is not None:
            item.y += 1
            break

    collision = get_first_collision(placed, item)
    while collision is not None:
        item.y = collision.y + collision.h
        collision = get_first_collision(placed, item)


def _compact_horizontal(item: LayoutItem, placed: List[LayoutItem], cols: int) -> None:
    """Slide left while the column to the left is free, then settle right of any overlap."""
    item.x = int(clamp(item.x, 0, max(0, cols - item.w)))

    while item.x > 0:
        item.x -= 1
        if get_first_collision(placed, item) is not None:
            item.x += 1
            break

    collision = get_first_collision(placed, item)
    while collision is not None:
        item.x = collision.x + collision.w
        if item.x + item.w > cols:
            # No room left on this row
            item.x = 0
            item.y += 1
        collision = get_first_collision(placed, item)
