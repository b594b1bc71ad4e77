"""
layout/height.py - Container height
"""

from __future__ import annotations
from typing import List

from gridflow.core.models import LayoutItem, PositionParams, bottom

__all__ = [
    'get_container_height',
]


def get_container_height(layout: List[LayoutItem], params: PositionParams) -> float:
    """
    Pixel height needed to show every item.

    Rows are separated by the vertical margin, with no trailing margin after
    the last row, plus padding above and below.
    """
    margin_y = params.margin[1]
    padding_y = params.container_padding[1]

    rows = bottom(layout)
    height = rows * (params.row_height + margin_y) - margin_y + 2 * padding_y
    return max(height, 0)
