"""
Domain entities for the grid snake engine.

This module contains the value types and entities that are independent of
scheduling, input devices and rendering.
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, Direction
from .geometry import Point, Rect, Circle
from .command import Command, CommandQueue, CommandSequence
from .snake import Segment, Snake, segment_behind
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'Direction',
    'Point', 'Rect', 'Circle',
    'Command', 'CommandQueue', 'CommandSequence',
    'Segment', 'Snake', 'segment_behind',
    'GameState',
]
