"""
GRIDFLOW Grid Defaults

Default grid geometry and interaction settings used when the host does not
supply its own values.
"""

import math

# ==================== Grid Geometry ====================

DEFAULT_COLS = 12
DEFAULT_ROW_HEIGHT = 150  # px
DEFAULT_MARGIN = (10, 10)  # px between items (x, y)
DEFAULT_CONTAINER_PADDING = (10, 10)  # px around the grid (x, y)
DEFAULT_MAX_ROWS = math.inf

# ==================== Items ====================

DEFAULT_ITEM_W = 1
DEFAULT_ITEM_H = 1

# Item created when a card is dragged in from outside any grid
DEFAULT_DROPPING_ITEM_ID = "__dropping_item__"
DEFAULT_DROPPING_ITEM_W = 1
DEFAULT_DROPPING_ITEM_H = 1

# ==================== Groups ====================

# Prefix for anonymous grid names ("default_group_0", "default_group_1", ...)
DEFAULT_GROUP = "default_group"

# Drag type of cards that do not belong to any grid
DEFAULT_ITEM_TYPE = "card_item"
