"""
Snake entity for the game engine.
"""

from dataclasses import dataclass, replace
from typing import List, Optional

from .command import CommandQueue
from .constants import Direction, RIGHT
from .geometry import Point


@dataclass
class Segment:
    """One body unit: position, heading and the last command it adopted."""

    point: Point
    direction: Direction
    command_ref: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.command_ref}:({self.point}),{self.direction.value}"


def segment_behind(segment: Segment) -> Segment:
    """Return a copy of segment moved one unit against its heading."""
    return Segment(
        point=segment.point.step(segment.direction.opposite),
        direction=segment.direction,
        command_ref=segment.command_ref,
    )


class Snake:
    """
    Represents a snake on the board.

    Attributes:
        segments: list of Segment from head at index 0 to tail at the end
        commands: pending turns not yet passed by the tail
        initial_pose: segment the snake is rebuilt from on reset
    """

    def __init__(self, initial_pose: Optional[Segment] = None):
        if initial_pose is None:
            initial_pose = Segment(Point(0, 0), RIGHT)
        self.initial_pose = Segment(initial_pose.point, initial_pose.direction)
        self.segments: List[Segment] = [replace(self.initial_pose)]
        self.commands = CommandQueue()

    @property
    def head(self) -> Segment:
        """Return the head segment (first element)."""
        if not self.segments:
            raise RuntimeError("Snake has no segments")
        return self.segments[0]

    @property
    def tail(self) -> Segment:
        if not self.segments:
            raise RuntimeError("Snake has no segments")
        return self.segments[-1]

    def __len__(self) -> int:
        return len(self.segments)

    def reset(self) -> None:
        """Back to a single segment at the initial pose with no pending turns."""
        self.segments = [replace(self.initial_pose)]
        self.commands.clear()

    def grow(self) -> Segment:
        """Append one segment behind the tail, inheriting its pending state."""
        segment = segment_behind(self.tail)
        self.segments.append(segment)
        return segment

    def positions(self) -> List[Point]:
        return [segment.point for segment in self.segments]

    def __str__(self) -> str:
        return ",".join(str(s) for s in self.segments)
