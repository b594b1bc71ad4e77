"""
groups/registry.py - Cross-grid coordination

Tracks the live grid instances and which of them the current drag is
hovering, so an item can move between independently compacting grids.

The host constructs one registry and passes it to every grid.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Protocol

from gridflow.core.constants import DEFAULT_GROUP, DEFAULT_ITEM_TYPE

__all__ = [
    'GridHandle',
    'GroupRegistry',
]


class GridHandle(Protocol):
    """What one grid may ask of another during a cross-grid drag."""

    def remove_item(self, item_id: str) -> bool:
        """Drop an item that another grid has taken over."""
        ...

    def discard_interaction(self) -> None:
        """Restore the pre-drag snapshot and forget the drag."""
        ...

    def commit_transfer(self) -> None:
        """Report the loss of an item that was dropped into another grid."""
        ...


class GroupRegistry:
    """Registry of grid instances and drag hover state."""

    def __init__(self, default_group: str = DEFAULT_GROUP, card_item_type: str = DEFAULT_ITEM_TYPE):
        """
        Initialize registry.

        Args:
            default_group: Prefix for anonymous grid names
            card_item_type: Drag type of cards not owned by any grid
        """
        self.default_group = default_group
        self.card_item_type = card_item_type

        self._grids: Dict[str, GridHandle] = {}
        self._hovered: List[str] = []
        self._visited: List[str] = []
        self._anonymous_count = 0

    # -------------------------------------------------------------------------
    # Grid lifecycle
    # -------------------------------------------------------------------------

    def next_group_name(self) -> str:
        """Unique name for a grid created without one."""
        name = f"{self.default_group}_{self._anonymous_count}"
        self._anonymous_count += 1
        return name

    def register(self, grid_id: str, handle: GridHandle) -> None:
        """Register a grid. A later registration under the same id replaces it."""
        self._grids[grid_id] = handle

    def unregister(self, grid_id: str) -> None:
        """Forget a grid. Hover marks for it are left to the end of the drag."""
        self._grids.pop(grid_id, None)

    def resolve(self, grid_id: str) -> Optional[GridHandle]:
        """Live grid registered under `grid_id`, if any."""
        return self._grids.get(grid_id)

    def is_registered(self, grid_id: str) -> bool:
        return grid_id in self._grids

    @property
    def grid_ids(self) -> List[str]:
        return list(self._grids)

    @property
    def accepted_types(self) -> List[str]:
        """Drag types a grid accepts: every grid plus external cards."""
        return list(self._grids) + [self.card_item_type]

    # -------------------------------------------------------------------------
    # Hover state
    # -------------------------------------------------------------------------

    def mark_hovered(self, grid_id: str) -> None:
        """Record that the current drag is over `grid_id`."""
        if grid_id not in self._hovered:
            self._hovered.append(grid_id)
        if grid_id not in self._visited:
            self._visited.append(grid_id)

    @property
    def hovered(self) -> List[str]:
        return list(self._hovered)

    @property
    def visited(self) -> List[str]:
        """Every grid hovered since the drag began, in order of first entry."""
        return list(self._visited)

    @property
    def is_dragging(self) -> bool:
        return bool(self._hovered)

    def release_others(self, keep_id: str) -> List[str]:
        """
        Keep only `keep_id` hovered.

        Returns:
            The other grid ids that were hovered
        """
        released = [grid_id for grid_id in self._hovered if grid_id != keep_id]
        self._hovered = [keep_id]
        if keep_id not in self._visited:
            self._visited.append(keep_id)
        return released

    def clear_hovered(self) -> None:
        """End of a drag: forget all hover state."""
        self._hovered = []
        self._visited = []
