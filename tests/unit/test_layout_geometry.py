"""
Unit tests for grid/pixel coordinate mapping.
"""

import pytest

from gridflow.core.models import LayoutItem, PositionParams
from gridflow.layout.geometry import (
    calc_grid_item_position,
    calc_xy,
    calc_xy_from_pointer,
    get_wh,
)


class TestCalcGridItemPosition:
    """Tests for calc_grid_item_position."""

    def test_origin_cell(self, params):
        """Top-left cell starts at the padding."""
        box = calc_grid_item_position(params, 0, 0, 1, 1)

        assert box.left == pytest.approx(10)
        assert box.top == pytest.approx(10)
        assert box.width == pytest.approx(1070 / 12)
        assert box.height == pytest.approx(30)

    def test_multi_cell_box_includes_inner_margins(self, params):
        """Width and height span the margins between cells."""
        col_width = 1070 / 12
        box = calc_grid_item_position(params, 2, 1, 2, 2)

        assert box.left == pytest.approx(2 * (col_width + 10) + 10)
        assert box.top == pytest.approx(50)
        assert box.width == pytest.approx(2 * col_width + 10)
        assert box.height == pytest.approx(70)

    def test_zero_width_container(self):
        """Degenerate container gives zero-width columns, no division error."""
        params = PositionParams(cols=12, container_width=0)
        box = calc_grid_item_position(params, 3, 0, 1, 1)

        assert params.col_width == 0
        assert box.width == 0

    def test_to_dict(self, params):
        """Pixel box serializes to a plain dict."""
        data = calc_grid_item_position(params, 0, 0, 1, 1).to_dict()
        assert set(data) == {"left", "top", "width", "height"}


class TestCalcXY:
    """Tests for calc_xy."""

    def test_round_trip(self, params):
        """Pixel box of a cell maps back to that cell."""
        box = calc_grid_item_position(params, 3, 2, 2, 1)
        assert calc_xy(params, box.top, box.left, 2, 1) == (3, 2)

    def test_rounds_half_up(self, params):
        """Half a column step rounds to the next column."""
        step = params.col_width + 10
        assert calc_xy(params, 10, 10 + 0.5 * step, 1, 1) == (1, 0)
        assert calc_xy(params, 10, 10 + 0.49 * step, 1, 1) == (0, 0)

    def test_clamps_to_columns(self, params):
        """Item never extends past the last column."""
        assert calc_xy(params, 10, 50000, 3, 1) == (9, 0)
        assert calc_xy(params, 10, -500, 3, 1) == (0, 0)

    def test_row_never_negative(self, params):
        """Pointer above the container maps to row 0."""
        assert calc_xy(params, -200, 10, 1, 1) == (0, 0)

    def test_rows_unbounded_below(self, params):
        """There is no bottom clamp."""
        _, y = calc_xy(params, 10 + 40 * 250, 10, 1, 1)
        assert y == 250

    def test_zero_step_maps_to_origin(self):
        """No column width and no margin gives column 0."""
        params = PositionParams(cols=4, margin=(0, 0), container_padding=(0, 0), container_width=0)
        assert calc_xy(params, 0, 300, 1, 1)[0] == 0


class TestCalcXYFromPointer:
    """Tests for pointer to cell conversion."""

    def test_origin_and_scroll(self, params):
        """Container offset is subtracted, scroll offset added."""
        box = calc_grid_item_position(params, 2, 3, 1, 1)
        origin = (100, 50)
        scroll = (0, 40)
        pointer = (box.left + origin[0], box.top + origin[1] - scroll[1])

        assert calc_xy_from_pointer(params, pointer, 1, 1, origin, scroll) == (2, 3)


class TestGetWH:
    """Tests for effective item size."""

    def test_plain_size(self, params):
        item = LayoutItem("a", w=3, h=2)
        assert get_wh(item, params) == (3, 2)

    def test_respects_min_and_max(self, params):
        """Item bounds clamp the size."""
        item = LayoutItem("a", w=1, h=9, min_w=2, max_h=4)
        assert get_wh(item, params) == (2, 4)

    def test_cols_win_over_min_w(self, params):
        """An item never gets wider than the grid."""
        item = LayoutItem("a", w=20, h=1, min_w=14)
        assert get_wh(item, params) == (12, 1)
