"""
GRIDFLOW Layout Engine

Pure layout algorithms: coordinate mapping, collision detection,
compaction, moving/resizing with displacement, container height and
normalization of host-supplied layouts.
"""

from .geometry import (
    calc_grid_item_position,
    calc_xy,
    calc_xy_from_pointer,
    get_wh,
)

from .collision import (
    collides,
    get_first_collision,
    get_all_collisions,
)

from .compactor import (
    compact,
    sort_layout_items,
)

from .mover import (
    move_element,
    resize_element,
)

from .height import (
    get_container_height,
)

from .normalize import (
    RawLayoutItem,
    ItemDefaults,
    re_layout,
)

__all__ = [
    # Geometry
    "calc_grid_item_position",
    "calc_xy",
    "calc_xy_from_pointer",
    "get_wh",

    # Collision
    "collides",
    "get_first_collision",
    "get_all_collisions",

    # Compaction
    "compact",
    "sort_layout_items",

    # Moving
    "move_element",
    "resize_element",

    # Height
    "get_container_height",

    # Normalization
    "RawLayoutItem",
    "ItemDefaults",
    "re_layout",
]
