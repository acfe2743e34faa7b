"""
Keyboard player - validates heading changes and queues commands.
"""

import logging
from typing import Optional

from domain.command import Command, CommandSequence
from domain.constants import Direction, UP, DOWN, LEFT, RIGHT
from domain.snake import Snake
from .base import Player
from .bindings import KeyBindings

logger = logging.getLogger(__name__)


def is_reversal(snake: Snake, direction: Direction) -> bool:
    """
    True if turning the head to direction would send it back toward the
    second segment.
    """
    if len(snake) < 2:
        return False
    head = snake.segments[0].point
    neck = snake.segments[1].point
    if head.x == neck.x:
        # same column
        return (head.y > neck.y and direction == UP) or (head.y < neck.y and direction == DOWN)
    # same row
    return (head.x > neck.x and direction == LEFT) or (head.x < neck.x and direction == RIGHT)


class KeyboardPlayer(Player):
    """
    A human player bound to a KeyBindings table.
    """

    def __init__(self, snake_id: int, bindings: KeyBindings):
        super().__init__(snake_id)
        self.bindings = bindings

    def direction_for(self, key: str) -> Optional[Direction]:
        return self.bindings.direction_for(key)

    def steer(self, snake: Snake, direction: Direction, sequence: CommandSequence) -> bool:
        """
        Turn the snake's head, queueing the turn for the rest of the body.

        A repeat of the current heading and a reversal into the neck are
        rejected. A second turn issued at the point of the newest pending
        command corrects that command in place instead of queueing another
        one, and segments that already adopted it follow the correction.

        Returns:
            True if the heading changed.
        """
        head = snake.head
        if head.direction == direction:
            return False
        if is_reversal(snake, direction):
            logger.debug(f"Player {self.snake_id} reversal to {direction.value} rejected")
            return False

        head.direction = direction
        if len(snake) < 2:
            return True

        last = snake.commands.last
        if last is not None and last.point == head.point:
            if last.direction != direction:
                last.direction = direction
                for segment in snake.segments:
                    if segment.command_ref is None or segment.command_ref < last.sequence:
                        break
                    if segment.command_ref == last.sequence:
                        segment.direction = direction
                logger.debug(f"Player {self.snake_id} corrected command {last}")
        else:
            command = Command(sequence.next(), head.point, direction)
            snake.commands.push(command)
            logger.debug(f"Player {self.snake_id} queued command {command}")

        head.command_ref = snake.commands.last.sequence
        return True
