"""
layout/normalize.py - Entry point for external layout data

Every layout handed over by the host passes through re_layout(): raw items
are parsed, broken geometry is replaced by defaults, values are clamped into
the grid and the result is compacted once. Nothing here raises for bad
input; unusable entries are dropped with a warning.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union
import logging
import math

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from gridflow.core.constants import DEFAULT_ITEM_H, DEFAULT_ITEM_W
from gridflow.core.models import CompactType, LayoutItem, bottom, clamp, round_half_up
from .compactor import compact

__all__ = [
    'RawLayoutItem',
    'ItemDefaults',
    're_layout',
]

logger = logging.getLogger("layout.normalize")

# Keys that never reach LayoutItem.data
_TRANSIENT_KEYS = {"placeholder", "moved"}

_TRUE_STRINGS = {"true", "1", "yes", "on"}


def _flag(value: Any) -> Optional[bool]:
    """Read a boolean flag; strings like "false" are false, anything unreadable too."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, (int, float)):
        return bool(value)
    return False


class RawLayoutItem(BaseModel):
    """Layout item as supplied by the host, before clamping."""

    model_config = ConfigDict(extra="allow")

    item_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("item_id", "id", "i"))
    x: Optional[float] = None
    y: Optional[float] = None
    w: Optional[float] = None
    h: Optional[float] = None
    min_w: Optional[float] = Field(default=None, validation_alias=AliasChoices("min_w", "minW"))
    max_w: Optional[float] = Field(default=None, validation_alias=AliasChoices("max_w", "maxW"))
    min_h: Optional[float] = Field(default=None, validation_alias=AliasChoices("min_h", "minH"))
    max_h: Optional[float] = Field(default=None, validation_alias=AliasChoices("max_h", "maxH"))
    static: bool = False
    is_draggable: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("is_draggable", "isDraggable"),
    )
    is_resizable: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("is_resizable", "isResizable"),
    )
    group: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('item_id', 'group', mode='before')
    @classmethod
    def coerce_identifier(cls, v):
        if v is None or v == "":
            return None
        return str(v)

    @field_validator('x', 'y', 'w', 'h', 'min_w', 'max_w', 'min_h', 'max_h', mode='before')
    @classmethod
    def finite_or_missing(cls, v):
        # NaN, infinities and non-numbers all count as missing
        if v is None or isinstance(v, bool):
            return None
        try:
            v = float(v)
        except (TypeError, ValueError):
            return None
        return v if math.isfinite(v) else None

    @field_validator('static', mode='before')
    @classmethod
    def coerce_static(cls, v):
        return bool(_flag(v))

    @field_validator('is_draggable', 'is_resizable', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        return _flag(v)


    @field_validator('data', mode='before')
    @classmethod
    def coerce_data(cls, v):
        return v if isinstance(v, dict) else {}


@dataclass
class ItemDefaults:
    """Size given to items whose width or height is missing."""
    w: int = DEFAULT_ITEM_W
    h: int = DEFAULT_ITEM_H


def re_layout(
    raw_layout: Optional[Iterable[Union[LayoutItem, Dict[str, Any]]]],
    compact_type: Union[CompactType, str, None],
    cols: int,
    defaults: Optional[ItemDefaults] = None,
) -> List[LayoutItem]:
    """
    Validate, clamp and compact a host-supplied layout.

    Args:
        raw_layout: LayoutItems or dicts (snake_case or camelCase keys)
        compact_type: Compaction of the receiving grid
        cols: Column count of the receiving grid
        defaults: Size for items missing w/h

    Returns:
        Compacted layout of well-formed items
    """
    defaults = defaults or ItemDefaults()
    cols = max(1, int(cols))

    items: List[LayoutItem] = []
    seen = set()

    for index, entry in enumerate(raw_layout or []):
        raw = _parse(entry, index)
        if raw is None:
            continue

        item = _clamp(raw, index, cols, defaults, items)
        if item.item_id in seen:
            logger.warning(f"Dropping duplicate layout item {item.item_id!r} at index {index}")
            continue

        seen.add(item.item_id)
        items.append(item)

    return compact(items, compact_type, cols)


def _parse(entry: Any, index: int) -> Optional[RawLayoutItem]:
    if isinstance(entry, LayoutItem):
        entry = entry.to_dict()
    try:
        return RawLayoutItem.model_validate(entry)
    except ValidationError as e:
        logger.warning(f"Dropping unparseable layout item at index {index}: {e.error_count()} errors")
        return None


def _as_int(value: Optional[float]) -> Optional[int]:
    return None if value is None else round_half_up(value)


def _clamp(
    raw: RawLayoutItem,
    index: int,
    cols: int,
    defaults: ItemDefaults,
    placed: List[LayoutItem],
) -> LayoutItem:
    min_w = max(1, _as_int(raw.min_w) or 1)
    min_h = max(1, _as_int(raw.min_h) or 1)
    max_w = _as_int(raw.max_w)
    max_h = _as_int(raw.max_h)
    if max_w is not None and max_w < min_w:
        max_w = None
    if max_h is not None and max_h < min_h:
        max_h = None

    w = _as_int(raw.w)
    h = _as_int(raw.h)
    w = defaults.w if w is None else w
    h = defaults.h if h is None else h
    w = int(clamp(w, min_w, max_w if max_w is not None else math.inf))
    h = int(clamp(h, min_h, max_h if max_h is not None else math.inf))
    w = max(1, min(w, cols))

    x = _as_int(raw.x)
    y = _as_int(raw.y)
    x = 0 if x is None else int(clamp(x, 0, cols - w))
    # Items without a row go below everything placed so far
    y = bottom(placed) if y is None else max(0, y)

    data = dict(raw.model_extra or {})
    for key in _TRANSIENT_KEYS:
        data.pop(key, None)
    data.update(raw.data)

    return LayoutItem(
        item_id=raw.item_id if raw.item_id is not None else str(index),
        x=x,
        y=y,
        w=w,
        h=h,
        min_w=min_w,
        max_w=max_w,
        min_h=min_h,
        max_h=max_h,
        static=raw.static,
        is_draggable=True if raw.is_draggable is None else raw.is_draggable,
        is_resizable=True if raw.is_resizable is None else raw.is_resizable,
        group=raw.group,
        data=data,
    )
