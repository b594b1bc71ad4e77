"""
layout/mover.py - Moving and resizing items

Relocates or resizes one item and pushes the items it lands on out of the
way along the compaction axis. Displacement only ever moves an item down
(or right, for horizontal grids), so the cascade always settles.
"""

from __future__ import annotations
from collections import deque
from typing import Callable, Deque, List, Optional, Set, Tuple, Union
import logging

from gridflow.core.models import CompactType, LayoutItem, clamp, index_of
from gridflow.errors import LayoutInvariantError
from .collision import collides, get_all_collisions, get_first_collision

__all__ = [
    'move_element',
    'resize_element',
]

logger = logging.getLogger("layout.mover")

MovedCallback = Callable[[LayoutItem], None]


def move_element(
    layout: List[LayoutItem],
    item: LayoutItem,
    x: int,
    y: int,
    is_user_action: bool,
    prevent_collision: bool,
    compact_type: Union[CompactType, str, None],
    cols: int,
    on_moved: Optional[MovedCallback] = None,
) -> List[LayoutItem]:
    """
    Move an item to a target cell, displacing whatever it lands on.

    Args:
        layout: Current layout (not modified)
        item: Item to move, looked up in `layout` by id
        x, y: Target cell (clamped into the grid)
        is_user_action: Direct user move; only such moves notify `on_moved`
        prevent_collision: Reject the move instead of displacing others
        compact_type: Axis along which colliding items are pushed
        cols: Column count of the grid
        on_moved: Called with the moved item after a user move changed its cell

    Returns:
        New layout. Unchanged copy when the item is unknown, static, or the
        target cell is blocked.
    """
    compact_type = CompactType.coerce(compact_type)
    result = [other.copy() for other in layout]

    index = index_of(result, item.item_id)
    if index == -1:
        logger.debug(f"Move ignored, {item.item_id} not in layout")
        return result

    moving = result[index]
    if moving.static:
        return result

    x = int(clamp(x, 0, max(0, cols - moving.w)))
    y = max(0, int(y))
    target = moving.copy(x=x, y=y)

    collisions = get_all_collisions(result, target)
    if prevent_collision and collisions:
        logger.debug(f"Move of {item.item_id} to ({x}, {y}) rejected: {len(collisions)} collisions")
        return result
    if any(other.static for other in collisions):
        logger.debug(f"Move of {item.item_id} to ({x}, {y}) blocked by a static item")
        return result

    moved = (moving.x, moving.y) != (x, y)
    moving.x, moving.y = x, y

    _displace_colliders(result, moving, compact_type)

    if is_user_action and moved and on_moved is not None:
        on_moved(moving)

    return result


def resize_element(
    layout: List[LayoutItem],
    item_id: str,
    w: int,
    h: int,
    prevent_collision: bool,
    compact_type: Union[CompactType, str, None],
    cols: int,
) -> Tuple[List[LayoutItem], Optional[LayoutItem]]:
    """
    Resize an item.

    With `prevent_collision`, an item that would overlap others is instead
    grown up to the nearest obstacle on each axis independently: the width
    stops at the closest colliding item starting right of it, the height at
    the closest one starting below it. An axis with no such obstacle keeps
    its previous size.

    Returns:
        (new layout, resized item) or (unchanged copy, None) when the item is
        unknown or static
    """
    compact_type = CompactType.coerce(compact_type)
    result = [other.copy() for other in layout]

    index = index_of(result, item_id)
    if index == -1:
        logger.debug(f"Resize ignored, {item_id} not in layout")
        return result, None

    item = result[index]
    if item.static:
        return result, None

    w = _bounded(w, item.min_w, item.max_w)
    w = max(1, min(w, cols - item.x))
    h = _bounded(h, item.min_h, item.max_h)

    has_collisions = False
    if prevent_collision:
        collisions = get_all_collisions(result, item.copy(w=w, h=h))
        has_collisions = bool(collisions)

        if has_collisions:
            least_x = min((other.x for other in collisions if other.x > item.x), default=None)
            least_y = min((other.y for other in collisions if other.y > item.y), default=None)

            if least_x is not None:
                item.w = least_x - item.x
            if least_y is not None:
                item.h = least_y - item.y

    if not has_collisions:
        item.w = w
        item.h = h

    if compact_type is CompactType.NONE:
        # Nothing will compact the overlap away afterwards
        _displace_colliders(result, item, compact_type)

    return result, item


def _bounded(value: int, low: int, high: Optional[int]) -> int:
    value = max(int(value), low, 1)
    if high is not None:
        value = min(value, max(high, low))
    return value


def _push_past(item: LayoutItem, pusher: LayoutItem, horizontal: bool) -> None:
    if horizontal:
        item.x = pusher.x + pusher.w
    else:
        item.y = pusher.y + pusher.h


def _displace_colliders(
    layout: List[LayoutItem],
    anchor: LayoutItem,
    compact_type: CompactType,
) -> None:
    """
    Push every item overlapping `anchor` out of the way, in place.

    Worklist of (item, pusher) pairs, seeded with the items overlapping the
    anchor. The anchor and static items are fixed: an item pushed onto one of
    them jumps past it. Every push strictly increases the pushed item's
    coordinate along the axis.
    """
    horizontal = compact_type is CompactType.HORIZONTAL
    fixed_ids: Set[str] = {anchor.item_id}
    fixed_ids.update(other.item_id for other in layout if other.static)
    fixed = [other for other in layout if other.item_id in fixed_ids]

    limit = max(1, len(layout) * len(layout))
    steps = 0
    pushed: Set[str] = set()

    queue: Deque[Tuple[LayoutItem, LayoutItem]] = deque(
        (other, anchor) for other in get_all_collisions(layout, anchor)
        if other.item_id not in fixed_ids
    )

    while queue:
        item, pusher = queue.popleft()
        if not collides(item, pusher):
            continue  # Already pushed clear by an earlier entry

        steps += 1
        if steps > limit:
            raise LayoutInvariantError(item.item_id, steps)

        _push_past(item, pusher, horizontal)
        blocker = get_first_collision(fixed, item)
        while blocker is not None:
            _push_past(item, blocker, horizontal)
            blocker = get_first_collision(fixed, item)

        pushed.add(item.item_id)

        for other in get_all_collisions(layout, item):
            if other.item_id not in fixed_ids:
                queue.append((other, item))

    if pushed:
        logger.debug(f"Displaced {len(pushed)} items around {anchor.item_id} in {steps} steps")
