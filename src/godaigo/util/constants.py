"""Rule constants: movement costs and render thresholds.

Values that the game config may override are only defaults here.
"""

import math

# -- Movement costs ------------------------------------------------------

IMPASSABLE: float = math.inf
"""Cost sentinel for hexes that cannot be entered. Only compared by equality."""

EMPTY_COST: int = 1
VOID_COST: int = 1
WIND_COST: int = 0
WATER_COST: int = 2
"""Water cost when the chain mimics nothing."""

WIND_ZONE_COST: int = 0
"""Cost of a move that stays inside wind zones."""

WIND_ZONE_EDGE_COST: int = 1
"""Cost of a move that enters or leaves a wind zone."""

# -- Rendering -----------------------------------------------------------

TARGET_FPS: float = 60.0
URGENT_DIRTY_THRESHOLD: int = 5
"""Dirty-set size at which a render is forced regardless of frame timing."""

# -- Board & turn --------------------------------------------------------

GRID_RADIUS: int = 8
INITIAL_REVEAL_EXTENT: int = 3
HEX_SIZE: float = 18.0
ACTION_POINTS_PER_TURN: int = 5
