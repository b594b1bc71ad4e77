"""
GRIDFLOW UI Notifications

Event plumbing between grid instances and the host UI.
"""

from .events import (
    GridEventType,
    GridEvent,
    EventHandler,
    EventBus,
)

__all__ = [
    "GridEventType",
    "GridEvent",
    "EventHandler",
    "EventBus",
]
