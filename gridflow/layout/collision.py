"""
layout/collision.py - Rectangle overlap detection

Grid rectangles are half-open: an item covers columns [x, x + w) and rows
[y, y + h). An item never collides with itself (same item_id).
"""

from __future__ import annotations
from typing import Iterable, List, Optional

from gridflow.core.models import LayoutItem

__all__ = [
    'collides',
    'get_first_collision',
    'get_all_collisions',
]


def collides(a: LayoutItem, b: LayoutItem) -> bool:
    """True if the two items overlap on both axes."""
    if a.item_id == b.item_id:
        return False
    if a.x + a.w <= b.x:
        return False  # a is left of b
    if a.x >= b.x + b.w:
        return False  # a is right of b
    if a.y + a.h <= b.y:
        return False  # a is above b
    if a.y >= b.y + b.h:
        return False  # a is below b
    return True


def get_first_collision(layout: Iterable[LayoutItem], item: LayoutItem) -> Optional[LayoutItem]:
    """First item of the layout, in stored order, that overlaps `item`."""
    for other in layout:
        if collides(other, item):
            return other
    return None


def get_all_collisions(layout: Iterable[LayoutItem], item: LayoutItem) -> List[LayoutItem]:
    """All items overlapping `item`, in stored order."""
    return [other for other in layout if collides(other, item)]
