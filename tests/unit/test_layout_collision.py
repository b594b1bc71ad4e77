"""
Unit tests for rectangle overlap detection.
"""

from gridflow.core.models import LayoutItem
from gridflow.layout.collision import collides, get_all_collisions, get_first_collision


def _item(item_id, x, y, w=1, h=1, **kwargs):
    return LayoutItem(item_id=item_id, x=x, y=y, w=w, h=h, **kwargs)


class TestCollides:
    """Tests for collides."""

    def test_overlapping(self):
        assert collides(_item("a", 0, 0, 2, 2), _item("b", 1, 1, 2, 2))

    def test_touching_edges_do_not_collide(self):
        """Rectangles are half-open."""
        a = _item("a", 0, 0, 2, 2)
        assert not collides(a, _item("b", 2, 0, 1, 1))
        assert not collides(a, _item("c", 0, 2, 1, 1))

    def test_same_id_never_collides(self):
        """An item does not collide with itself."""
        assert not collides(_item("a", 0, 0, 2, 2), _item("a", 1, 1, 1, 1))

    def test_symmetric(self):
        a = _item("a", 0, 0, 3, 1)
        b = _item("b", 2, 0, 1, 3)
        assert collides(a, b) == collides(b, a)


class TestCollisionQueries:
    """Tests for get_first_collision and get_all_collisions."""

    def test_first_in_stored_order(self):
        layout = [_item("b", 1, 0), _item("a", 0, 0, 2, 1)]
        hit = get_first_collision(layout, _item("x", 0, 0, 3, 1))
        assert hit.item_id == "b"

    def test_none_when_free(self):
        layout = [_item("a", 0, 0)]
        assert get_first_collision(layout, _item("x", 5, 5)) is None

    def test_all_collisions(self):
        layout = [_item("a", 0, 0), _item("b", 1, 0), _item("c", 5, 0)]
        hits = get_all_collisions(layout, _item("x", 0, 0, 2, 1))
        assert [hit.item_id for hit in hits] == ["a", "b"]
