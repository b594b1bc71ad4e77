"""
ui/events.py - Grid Event System

Notifies the host of layout state transitions. Each grid owns its own bus.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime, timezone
from enum import Enum
import uuid
import logging

from gridflow.core.models import LayoutItem, clone_layout

logger = logging.getLogger("ui.events")


class GridEventType(Enum):
    """Types of grid events."""

    # Committed layout differs from the previous one
    LAYOUT_CHANGED = "layout_changed"

    # Interaction events
    DRAG_OVER = "drag_over"
    DROP = "drop"
    RESIZE_STOP = "resize_stop"
    ITEM_MOVED = "item_moved"


@dataclass
class GridEvent:
    """A grid event with payload."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    event_type: GridEventType = GridEventType.LAYOUT_CHANGED
    source: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "type": self.event_type.value,
            "source": self.source,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "payload": self.payload,
        }

    @classmethod
    def layout_changed(cls, layout: List[LayoutItem], source: str) -> "GridEvent":
        """Create a layout changed event carrying a copy of the layout."""
        return cls(
            event_type=GridEventType.LAYOUT_CHANGED,
            source=source,
            payload={"layout": clone_layout(layout)},
        )

    @classmethod
    def drop(
        cls,
        layout: List[LayoutItem],
        item: LayoutItem,
        drag_item: Any,
        item_type: str,
        source: str,
    ) -> "GridEvent":
        """Create a drop event."""
        return cls(
            event_type=GridEventType.DROP,
            source=source,
            payload={
                "layout": clone_layout(layout),
                "item": item.copy(),
                "drag_item": drag_item,
                "item_type": item_type,
                "group": source,
            },
        )


# Type alias for event handlers
EventHandler = Callable[[GridEvent], None]


class EventBus:
    """
    Event bus for one grid.

    Supports:
    - Event subscription by type
    - Wildcard subscriptions (receive all events)
    - Event history for debugging
    """

    def __init__(self, max_history: int = 100):
        self._handlers: Dict[GridEventType, List[EventHandler]] = {}
        self._wildcard_handlers: List[EventHandler] = []
        self._history: List[GridEvent] = []
        self._max_history = max_history
        self._paused = False

    def subscribe(self, event_type: GridEventType, handler: EventHandler) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Type of events to receive
            handler: Callback function(event) -> None
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed handler to {event_type.value}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events."""
        if handler not in self._wildcard_handlers:
            self._wildcard_handlers.append(handler)
            logger.debug("Subscribed wildcard handler")

    def unsubscribe(self, event_type: GridEventType, handler: EventHandler) -> bool:
        """
        Unsubscribe from events of a specific type.

        Returns:
            True if handler was removed
        """
        try:
            self._handlers.get(event_type, []).remove(handler)
        except ValueError:
            return False
        logger.debug(f"Unsubscribed handler from {event_type.value}")
        return True

    def emit(self, event: GridEvent) -> None:
        """Deliver an event to its subscribers. Handler failures are logged."""
        if self._paused:
            logger.debug(f"Event bus paused, dropping event: {event.event_type.value}")
            return

        self._history.append(event)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        logger.debug(f"Emitting event: {event.event_type.value} from {event.source}")

        for handler in list(self._handlers.get(event.event_type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Event handler failed: {e}")

        for handler in list(self._wildcard_handlers):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Wildcard handler failed: {e}")

    def emit_simple(self, event_type: GridEventType, source: str = "", **payload) -> GridEvent:
        """Emit an event built from keyword payload."""
        event = GridEvent(event_type=event_type, source=source, payload=payload)
        self.emit(event)
        return event

    def pause(self) -> None:
        """Pause event emission."""
        self._paused = True

    def resume(self) -> None:
        """Resume event emission."""
        self._paused = False

    def get_history(self, limit: int = 20, event_type: Optional[GridEventType] = None) -> List[GridEvent]:
        """Most recent events, optionally of one type."""
        history = self._history
        if event_type:
            history = [e for e in history if e.event_type == event_type]
        return history[-limit:]
