"""
Game constants for the grid snake engine.
"""

from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Heading of a snake segment. Screen convention: y grows downwards."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]


# Movement directions
UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES: Dict[Direction, Direction] = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game settings
DEFAULT_ROWS = 40
DEFAULT_SURFACE_WIDTH = 1280
DEFAULT_SURFACE_HEIGHT = 720
DEFAULT_TICK_INTERVAL_MS = 50
DEFAULT_TICKS_PER_MOVE = 5
MAX_PLAYERS = 2

# Colour roles exposed to the renderer
ROLE_HEAD = "head"
ROLE_PRIMARY = "primary"
