"""
layout/geometry.py - Grid/pixel coordinate mapping

Converts between pixel space and grid cells for a given PositionParams.
"""

from __future__ import annotations
from typing import Tuple
import logging

from gridflow.core.models import (
    GridPosition,
    LayoutItem,
    PositionParams,
    clamp,
    round_half_up,
)

__all__ = [
    'calc_grid_item_position',
    'calc_xy',
    'calc_xy_from_pointer',
    'get_wh',
]

logger = logging.getLogger("layout.geometry")


def calc_grid_item_position(params: PositionParams, x: int, y: int, w: int, h: int) -> GridPosition:
    """
    Pixel box of a grid rectangle.

    Args:
        params: Grid geometry
        x, y: Top-left cell
        w, h: Size in cells

    Returns:
        GridPosition relative to the container origin
    """
    col_width = params.col_width
    margin_x, margin_y = params.margin
    padding_x, padding_y = params.container_padding

    return GridPosition(
        left=x * (col_width + margin_x) + padding_x,
        top=y * (params.row_height + margin_y) + padding_y,
        width=w * col_width + max(0, w - 1) * margin_x,
        height=h * params.row_height + max(0, h - 1) * margin_y,
    )


def calc_xy(params: PositionParams, top: float, left: float, w: int, h: int) -> Tuple[int, int]:
    """
    Grid cell under a pixel position, for an item of size (w, h).

    Rounds to the nearest cell, keeps the item inside the columns and never
    returns a negative row. Rows are unbounded below.
    """
    margin_x, margin_y = params.margin
    padding_x, padding_y = params.container_padding

    col_step = params.col_width + margin_x
    row_step = params.row_height + margin_y

    x = round_half_up((left - padding_x) / col_step) if col_step > 0 else 0
    y = round_half_up((top - padding_y) / row_step) if row_step > 0 else 0

    x = int(clamp(x, 0, max(0, params.cols - w)))
    y = max(0, y)

    return x, y


def calc_xy_from_pointer(
    params: PositionParams,
    pointer: Tuple[float, float],
    w: int,
    h: int,
    origin: Tuple[float, float] = (0.0, 0.0),
    scroll: Tuple[float, float] = (0.0, 0.0),
) -> Tuple[int, int]:
    """
    Grid cell under the pointer.

    Args:
        pointer: Pointer (x, y) in page coordinates
        origin: Container's top-left corner in page coordinates
        scroll: (scroll_left, scroll_top) of the container's scrollable parent
    """
    left = pointer[0] - origin[0] + scroll[0]
    top = pointer[1] - origin[1] + scroll[1]
    return calc_xy(params, top, left, w, h)


def get_wh(item: LayoutItem, params: PositionParams) -> Tuple[int, int]:
    """Effective size of an item under its min/max bounds and the grid limits."""
    max_w = params.cols if item.max_w is None else min(item.max_w, params.cols)
    max_h = params.max_rows if item.max_h is None else min(item.max_h, params.max_rows)

    w = int(clamp(item.w, item.min_w, max(item.min_w, max_w)))
    h = int(clamp(item.h, item.min_h, max(item.min_h, max_h)))

    # The grid's column count wins over an item's own minimum
    return max(1, min(w, params.cols)), h
