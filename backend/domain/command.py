"""
Directional commands and the per-snake command queue.

A command binds a heading change to the grid point where the head turned.
Trailing segments adopt it when they reach that point; the tail removes it.
"""

import itertools
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .constants import Direction
from .geometry import Point


@dataclass
class Command:
    """
    A queued turn.

    Attributes:
        sequence: globally increasing id, assigned by a CommandSequence
        point: grid point where the turn happens
        direction: heading adopted at that point (only changed by a correction)
    """

    sequence: int
    point: Point
    direction: Direction

    def __str__(self) -> str:
        return f"{self.sequence}:({self.point}),{self.direction.value}"


class CommandSequence:
    """Monotonically increasing id source owned by the engine."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


class CommandQueue:
    """Ordered commands of one snake, oldest first."""

    def __init__(self):
        self._commands: List[Command] = []

    def push(self, command: Command) -> None:
        last = self.last
        if last is not None and command.sequence <= last.sequence:
            raise RuntimeError(
                f"Command queue out of order: {command.sequence} after {last.sequence}"
            )
        self._commands.append(command)

    @property
    def last(self) -> Optional[Command]:
        return self._commands[-1] if self._commands else None

    def apply_to(self, segment, is_tail: bool) -> Optional[Command]:
        """
        Let a segment that just moved adopt the command bound to its point.

        Only commands newer than the segment's command_ref are eligible, so a
        segment never re-applies a command or goes back to an older one. The
        oldest eligible command at the point wins: when the body crosses the
        same cell twice the earlier turn belongs to the earlier pass. The tail
        is the last segment that can need a command, so it removes it.

        Returns:
            The adopted command, or None if nothing applied.
        """
        latest = self.last
        if latest is None:
            return None
        if segment.command_ref is not None and segment.command_ref >= latest.sequence:
            return None

        for index, command in enumerate(self._commands):
            if segment.command_ref is not None and segment.command_ref >= command.sequence:
                continue
            if command.point != segment.point:
                continue
            segment.command_ref = command.sequence
            segment.direction = command.direction
            if is_tail:
                del self._commands[index]
            return command
        return None

    def clear(self) -> None:
        self._commands.clear()

    def is_sorted(self) -> bool:
        return all(a.sequence < b.sequence for a, b in zip(self._commands, self._commands[1:]))

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands))

    def __str__(self) -> str:
        return ",".join(str(c) for c in self._commands)
