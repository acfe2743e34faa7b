"""
Base player interface for the game engine.
"""

from typing import Optional

from domain.constants import Direction


class Player:
    """
    Base class/interface for anything that steers a snake.

    Each player owns the snake at index snake_id and turns raw input into
    a heading for it.
    """

    def __init__(self, snake_id: int):
        self.snake_id = snake_id

    def direction_for(self, key: str) -> Optional[Direction]:
        """
        Return the heading requested by a key, or None if the key is not ours.
        """
        raise NotImplementedError
