"""
GRIDFLOW Test Configuration and Fixtures

Shared grid geometry, registries and layout builders.
"""

import pytest
from typing import Callable, Tuple

from gridflow.bootstrap.config import GridConfig
from gridflow.core.models import LayoutItem, PositionParams
from gridflow.groups.registry import GroupRegistry
from gridflow.layout.geometry import calc_grid_item_position


def make_item(item_id: str, x: int = 0, y: int = 0, w: int = 1, h: int = 1, **kwargs) -> LayoutItem:
    """Shorthand LayoutItem builder."""
    return LayoutItem(item_id=item_id, x=x, y=y, w=w, h=h, **kwargs)


@pytest.fixture
def params() -> PositionParams:
    """12 columns, 1200px wide, 10px margins and padding, 30px rows."""
    return PositionParams(
        cols=12,
        margin=(10, 10),
        container_padding=(10, 10),
        row_height=30,
        container_width=1200,
    )


@pytest.fixture
def grid_config() -> GridConfig:
    """Configuration matching the `params` fixture."""
    return GridConfig(
        cols=12,
        margin=(10, 10),
        container_padding=(10, 10),
        row_height=30,
    )


@pytest.fixture
def registry() -> GroupRegistry:
    """Fresh registry per test."""
    return GroupRegistry()


@pytest.fixture
def pointer_at(params) -> Callable[[int, int], Tuple[float, float]]:
    """Pixel position of a cell's top-left corner, for a container at the origin."""

    def _pointer(x: int, y: int) -> Tuple[float, float]:
        box = calc_grid_item_position(params, x, y, 1, 1)
        return box.left, box.top

    return _pointer


@pytest.fixture
def sample_layout():
    """Three stacked items plus a static one."""
    return [
        make_item("a", 0, 0, 2, 2),
        make_item("b", 2, 0, 2, 1),
        make_item("c", 0, 2, 4, 1),
        make_item("s", 6, 0, 2, 2, static=True),
    ]
