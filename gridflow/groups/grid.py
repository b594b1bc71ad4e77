"""
groups/grid.py - One interactive grid

GridLayout owns the live layout of one independently compacting grid and
runs the drag / drop / resize state machine on top of the pure layout
algorithms. The host feeds it pointer positions and resize sizes and
renders from `layout` and `placeholder()`.

Every interaction works on a snapshot taken at drag (or resize) start:
cancelling restores that snapshot verbatim, committing reports a change
only if the result differs from it.
"""

from __future__ import annotations
from typing import List, Optional, Tuple, Union
import logging

from gridflow.bootstrap.config import GridConfig
from gridflow.core.models import (
    DragItem,
    GridPosition,
    LayoutItem,
    PositionParams,
    clone_layout,
    get_layout_item,
    index_of,
    layouts_equal,
)
from gridflow.layout import (
    ItemDefaults,
    calc_grid_item_position,
    calc_xy_from_pointer,
    compact,
    get_container_height,
    get_wh,
    move_element,
    re_layout,
    resize_element,
)
from gridflow.ui.events import EventBus, GridEvent, GridEventType
from .registry import GroupRegistry

__all__ = [
    'GridLayout',
]

logger = logging.getLogger("groups.grid")

Point = Tuple[float, float]


class GridLayout:
    """
    Engine side of one grid on screen.

    Registers itself with the shared GroupRegistry so items can be dragged
    between grids. Implements the GridHandle protocol.
    """

    def __init__(
        self,
        registry: GroupRegistry,
        layout: Optional[list] = None,
        group: Optional[str] = None,
        config: Optional[GridConfig] = None,
        container_width: float = 0.0,
        events: Optional[EventBus] = None,
    ):
        """
        Initialize the grid.

        Args:
            registry: Registry shared by all grids of the application
            layout: Declared layout (LayoutItems or raw dicts)
            group: Grid id; an anonymous name is generated when omitted
            config: Grid settings
            container_width: Current pixel width of the container
            events: Bus for notifications to the host
        """
        self.config = (config or GridConfig()).validate()
        self.group = group or registry.next_group_name()
        self.events = events or EventBus()

        self._registry = registry
        self._container_width = container_width
        self._layout = self._normalize(layout)

        # Interaction state
        self._old_layout: Optional[List[LayoutItem]] = None
        self._dragging_item_id: Optional[str] = None
        self._prev_position: Optional[Tuple[int, int]] = None
        self._resize_placeholder: Optional[LayoutItem] = None

        registry.register(self.group, self)
        logger.debug(f"Grid {self.group} created with {len(self._layout)} items")

        if not _matches_declared(layout, self._layout):
            logger.debug(f"Grid {self.group}: declared layout corrected on load")
            self.events.emit(GridEvent.layout_changed(self._layout, self.group))

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def layout(self) -> List[LayoutItem]:
        """Copy of the current layout."""
        return clone_layout(self._layout)

    @property
    def dragging_item(self) -> Optional[LayoutItem]:
        if self._dragging_item_id is None:
            return None
        item = get_layout_item(self._layout, self._dragging_item_id)
        return item.copy() if item else None

    @property
    def accept(self) -> List[str]:
        """Drag types this grid accepts."""
        return self._registry.accepted_types

    @property
    def position_params(self) -> PositionParams:
        return self.config.position_params(self._container_width)

    @property
    def container_height(self) -> float:
        return get_container_height(self._layout, self.position_params)

    def set_container_width(self, width: float) -> None:
        """Host measured a new container width."""
        self._container_width = max(0.0, float(width))

    def close(self) -> None:
        """Grid removed from the screen."""
        self._registry.unregister(self.group)
        logger.debug(f"Grid {self.group} closed")

    def update_layout(self, raw_layout: Optional[list]) -> bool:
        """
        Accept a new declared layout from the host.

        Ignored while a drag or resize is in progress.

        Returns:
            True if the layout was replaced
        """
        if self._registry.is_dragging or self._resize_placeholder is not None:
            logger.debug(f"Grid {self.group}: layout update skipped during interaction")
            return False

        normalized = self._normalize(raw_layout)
        if layouts_equal(normalized, self._layout):
            return False

        self._layout = normalized
        return True

    def is_group_item(self, item_type: str) -> bool:
        """Drag type belongs to this or another registered grid."""
        return item_type == self.group or self._registry.is_registered(item_type)

    # -------------------------------------------------------------------------
    # GridHandle protocol
    # -------------------------------------------------------------------------

    def remove_item(self, item_id: str) -> bool:
        """Drop an item taken over by another grid and close the gap."""
        index = index_of(self._layout, item_id)
        if index == -1:
            return False

        if self._old_layout is None:
            # Source grid whose drag_start was skipped
            self._old_layout = clone_layout(self._layout)

        remaining = self._layout[:index] + self._layout[index + 1:]
        self._layout = compact(remaining, self.config.compact_type, self.config.cols)
        self._dragging_item_id = None
        self._prev_position = None

        logger.debug(f"Grid {self.group}: released {item_id}")
        return True

    def discard_interaction(self) -> None:
        """Restore the pre-drag snapshot."""
        if self._old_layout is not None:
            self._layout = self._old_layout
        elif self._dragging_item_id is not None:
            self.remove_item(self._dragging_item_id)
        self._reset_interaction()

    def commit_transfer(self) -> None:
        """An item that left this grid was dropped elsewhere."""
        old = self._old_layout
        if old is None or not layouts_equal(old, self._layout):
            self.events.emit(GridEvent.layout_changed(self._layout, self.group))
        self._reset_interaction()

    # -------------------------------------------------------------------------
    # Dragging
    # -------------------------------------------------------------------------

    def drag_start(self) -> None:
        """Snapshot the layout before an item of this grid is dragged."""
        self._old_layout = clone_layout(self._layout)

    def hover(
        self,
        item: Union[LayoutItem, DragItem],
        pointer: Point,
        item_type: str,
        origin: Point = (0.0, 0.0),
        scroll: Point = (0.0, 0.0),
    ) -> Optional[LayoutItem]:
        """
        Drag update over this grid.

        Args:
            item: Dragged item (LayoutItem for grid items, DragItem for cards)
            pointer: Pointer position in page coordinates
            item_type: Grid id the item comes from, or the card item type
            origin: Container's top-left corner in page coordinates
            scroll: Scroll offsets (left, top) of the container's scroll parent

        Returns:
            The dragged item as placed in this grid, or None
        """
        if self._old_layout is None:
            self._old_layout = clone_layout(self._layout)

        self._registry.mark_hovered(self.group)

        if self.is_group_item(item_type):
            placed = self._move_group_item(item, pointer, item_type, origin, scroll)
        else:
            placed = self._move_card_item(item, pointer, origin, scroll)

        if placed is not None:
            self.events.emit_simple(GridEventType.DRAG_OVER, source=self.group, item=placed.copy())
        return placed

    def drop(self, item: Union[LayoutItem, DragItem], item_type: str) -> Optional[LayoutItem]:
        """
        Commit the dragged item where its placeholder is.

        Returns:
            The committed item, or None if nothing was being dragged here
        """
        index = -1
        if self._dragging_item_id is not None:
            index = index_of(self._layout, self._dragging_item_id)

        if index == -1:
            logger.debug(f"Grid {self.group}: drop ignored, no dragged item")
            self._registry.clear_hovered()
            return None

        committed = self._layout[index].copy(placeholder=False)
        layout = list(self._layout)
        layout[index] = committed
        self._layout = layout

        old = self._old_layout
        if old is not None and not layouts_equal(old, self._layout):
            self.events.emit(GridEvent.layout_changed(self._layout, self.group))

        if item_type != self.group:
            source = self._registry.resolve(item_type)
            if source is not None:
                source.commit_transfer()

        # Grids the drag passed through give up their provisional state
        for grid_id in self._registry.visited:
            if grid_id in (self.group, item_type):
                continue
            handle = self._registry.resolve(grid_id)
            if handle is None:
                logger.warning(f"Grid {grid_id} hovered during drag is no longer registered")
                continue
            handle.discard_interaction()

        self._reset_interaction()
        self._registry.clear_hovered()

        logger.info(f"Grid {self.group}: dropped {committed.item_id} at ({committed.x}, {committed.y})")
        self.events.emit(GridEvent.drop(self._layout, committed, item, item_type, self.group))
        return committed

    def drag_end(self, item_id: str, did_drop: bool, item_type: str) -> None:
        """
        Drag of one of this grid's items ended.

        A drop was already handled by drop(); anything else is a cancel.
        """
        if did_drop or not self.is_group_item(item_type):
            return
        logger.info(f"Grid {self.group}: drag of {item_id} cancelled")
        self._cancel_interaction()

    def card_item_drag_end(self, item: Union[LayoutItem, DragItem], did_drop: bool, item_type: str) -> None:
        """Drag of an external card ended, dropped here or nowhere."""
        if self._dragging_item_id is None:
            return
        if did_drop:
            self.drop(item, item_type)
        else:
            logger.info(f"Grid {self.group}: card drag cancelled")
            self._cancel_interaction()

    # -------------------------------------------------------------------------
    # Resizing
    # -------------------------------------------------------------------------

    def resize_start(self) -> None:
        self.drag_start()

    def resize(self, item_id: str, w: int, h: int) -> Optional[LayoutItem]:
        """
        Resize update.

        Returns:
            The resized item, or None for an unknown or static item
        """
        if self._old_layout is None:
            self._old_layout = clone_layout(self._layout)

        resized, item = resize_element(
            self._layout,
            item_id,
            w,
            h,
            self.config.prevent_collision,
            self.config.compact_type,
            self.config.cols,
        )
        if item is None:
            return None

        self._layout = compact(resized, self.config.compact_type, self.config.cols)
        self._resize_placeholder = item.copy(static=True)
        return get_layout_item(self._layout, item_id).copy()

    def resize_stop(self) -> List[LayoutItem]:
        """Commit the resize."""
        old = self._old_layout
        self._layout = compact(self._layout, self.config.compact_type, self.config.cols)
        self._resize_placeholder = None
        self._old_layout = None

        if old is not None and not layouts_equal(old, self._layout):
            self.events.emit(GridEvent.layout_changed(self._layout, self.group))

        self.events.emit_simple(GridEventType.RESIZE_STOP, source=self.group, layout=self.layout)
        return self.layout

    def resize_cancel(self) -> None:
        """Abandon the resize and restore the snapshot."""
        if self._old_layout is not None:
            self._layout = self._old_layout
        self._resize_placeholder = None
        self._old_layout = None

    # -------------------------------------------------------------------------
    # Placeholder
    # -------------------------------------------------------------------------

    def placeholder(self) -> Optional[Tuple[LayoutItem, GridPosition]]:
        """Drop target or resize rectangle in progress, with its pixel box."""
        item = self._resize_placeholder
        if item is None and self._dragging_item_id is not None:
            item = get_layout_item(self._layout, self._dragging_item_id)
            if item is not None and not item.placeholder:
                item = None
        if item is None:
            return None

        params = self.position_params
        w, h = get_wh(item, params)
        return item.copy(), calc_grid_item_position(params, item.x, item.y, w, h)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _normalize(self, raw_layout: Optional[list]) -> List[LayoutItem]:
        defaults = ItemDefaults(w=self.config.default_item_w, h=self.config.default_item_h)
        return re_layout(raw_layout, self.config.compact_type, self.config.cols, defaults)

    def _reset_interaction(self) -> None:
        if self._dragging_item_id is not None:
            index = index_of(self._layout, self._dragging_item_id)
            if index != -1 and self._layout[index].placeholder:
                layout = list(self._layout)
                layout[index] = layout[index].copy(placeholder=False)
                self._layout = layout

        self._dragging_item_id = None
        self._prev_position = None
        self._old_layout = None

    def _cancel_interaction(self) -> None:
        self.discard_interaction()
        for grid_id in self._registry.visited:
            if grid_id == self.group:
                continue
            handle = self._registry.resolve(grid_id)
            if handle is None:
                logger.warning(f"Grid {grid_id} hovered during drag is no longer registered")
                continue
            handle.discard_interaction()
        self._registry.clear_hovered()

    def _release_other_hovered(self, item: LayoutItem) -> None:
        """Only the grid under the pointer keeps the dragged item."""
        if len(self._registry.hovered) <= 1:
            return
        for grid_id in self._registry.release_others(self.group):
            handle = self._registry.resolve(grid_id)
            if handle is None:
                logger.warning(f"Skipping release in unregistered grid {grid_id}")
                continue
            handle.remove_item(item.item_id)

    def _move_group_item(
        self,
        item: Union[LayoutItem, DragItem],
        pointer: Point,
        item_type: str,
        origin: Point,
        scroll: Point,
    ) -> Optional[LayoutItem]:
        layout_item = get_layout_item(self._layout, item.item_id)

        if layout_item is None:
            if item_type != self.group:
                # Item from another grid: adopt it, its owner lets go
                layout_item = self._adopt(item)
                source = self._registry.resolve(item_type)
                if source is None:
                    logger.warning(f"Source grid {item_type} is no longer registered")
                else:
                    source.remove_item(item.item_id)
            else:
                # Own item coming back after another grid took it
                original = get_layout_item(self._old_layout or [], item.item_id)
                if original is None:
                    logger.debug(f"Grid {self.group}: {item.item_id} unknown, hover ignored")
                    return None
                layout_item = original.copy()

            self._layout = self._layout + [layout_item]

        self._release_other_hovered(layout_item)
        return self._move_item(layout_item, pointer, origin, scroll)

    def _adopt(self, item: Union[LayoutItem, DragItem]) -> LayoutItem:
        if isinstance(item, LayoutItem):
            return item.copy(placeholder=True, group=self.group)
        return LayoutItem(
            item_id=item.item_id,
            w=item.w or self.config.dropping_item_w,
            h=item.h or self.config.dropping_item_h,
            group=self.group,
            data=dict(item.data),
            placeholder=True,
        )

    def _move_card_item(
        self,
        item: Union[LayoutItem, DragItem],
        pointer: Point,
        origin: Point,
        scroll: Point,
    ) -> Optional[LayoutItem]:
        layout_item = None
        if self._dragging_item_id is not None:
            layout_item = get_layout_item(self._layout, self._dragging_item_id)

        if layout_item is None:
            item_id = item.item_id or self.config.dropping_item_id
            layout_item = get_layout_item(self._layout, item_id)

        if layout_item is None:
            w = min(item.w or self.config.dropping_item_w, self.config.cols)
            h = item.h or self.config.dropping_item_h
            x, y = calc_xy_from_pointer(self.position_params, pointer, w, h, origin, scroll)
            layout_item = LayoutItem(
                item_id=item.item_id or self.config.dropping_item_id,
                x=x,
                y=y,
                w=w,
                h=h,
                data=dict(item.data),
                placeholder=True,
            )
            self._layout = self._layout + [layout_item]

        self._release_other_hovered(layout_item)
        return self._move_item(layout_item, pointer, origin, scroll)

    def _move_item(
        self,
        layout_item: LayoutItem,
        pointer: Point,
        origin: Point,
        scroll: Point,
    ) -> Optional[LayoutItem]:
        item_id = layout_item.item_id
        self._dragging_item_id = item_id
        self._mark_placeholder(item_id)

        position = calc_xy_from_pointer(
            self.position_params, pointer, layout_item.w, layout_item.h, origin, scroll,
        )
        if position != self._prev_position:
            moved = move_element(
                self._layout,
                layout_item,
                position[0],
                position[1],
                True,
                self.config.prevent_collision,
                self.config.compact_type,
                self.config.cols,
                on_moved=self._on_item_moved,
            )
            self._layout = compact(moved, self.config.compact_type, self.config.cols)
            self._prev_position = position

        current = get_layout_item(self._layout, item_id)
        return current.copy() if current else None

    def _mark_placeholder(self, item_id: str) -> None:
        index = index_of(self._layout, item_id)
        if index != -1 and not self._layout[index].placeholder:
            layout = list(self._layout)
            layout[index] = layout[index].copy(placeholder=True)
            self._layout = layout

    def _on_item_moved(self, item: LayoutItem) -> None:
        self.events.emit_simple(GridEventType.ITEM_MOVED, source=self.group, item=item.copy())


def _declared_geometry(entry) -> Optional[tuple]:
    if isinstance(entry, LayoutItem):
        return entry.item_id, entry.x, entry.y, entry.w, entry.h
    if isinstance(entry, dict):
        item_id = next((entry[key] for key in ("item_id", "id", "i") if key in entry), None)
        return (
            None if item_id is None else str(item_id),
            entry.get("x"),
            entry.get("y"),
            entry.get("w"),
            entry.get("h"),
        )
    return None


def _matches_declared(raw_layout: Optional[list], layout: List[LayoutItem]) -> bool:
    """True if normalization kept the declared layout as it was."""
    raw_layout = list(raw_layout or [])
    if len(raw_layout) != len(layout):
        return False

    for entry, item in zip(raw_layout, layout):
        if isinstance(entry, LayoutItem):
            if entry != item:
                return False
        elif _declared_geometry(entry) != (item.item_id, item.x, item.y, item.w, item.h):
            return False
    return True
