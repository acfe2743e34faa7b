"""
GameState entity - a read-only snapshot of the game for renderers.
"""

from typing import Dict, Iterator, List, Tuple

from .constants import ROLE_HEAD, ROLE_PRIMARY


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        round_number: number of movement steps performed so far
        snake_positions: dict of snake index -> list of (x, y), head first
        consumables: list of (x, y) positions of all uneaten mice
        cols, rows: grid dimensions
        paused: whether the simulation is paused
    """

    def __init__(
        self,
        round_number: int,
        snake_positions: Dict[int, List[Tuple[int, int]]],
        consumables: List[Tuple[int, int]],
        cols: int,
        rows: int,
        paused: bool = False
    ):
        self.round_number = round_number
        self.snake_positions = snake_positions
        self.consumables = consumables
        self.cols = cols
        self.rows = rows
        self.paused = paused

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def segments_with_roles(self, snake_id: int) -> Iterator[Tuple[Tuple[int, int], str]]:
        """Yield ((x, y), role) for a snake, the head tagged ROLE_HEAD."""
        for index, position in enumerate(self.snake_positions.get(snake_id, [])):
            yield position, ROLE_HEAD if index == 0 else ROLE_PRIMARY

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        M = mouse (consumable)
        T = snake body
        0,1 = snake head (showing player number)
        Row 0 is printed first, matching the top-down screen grid.
        """
        board = [['.' for _ in range(self.cols)] for _ in range(self.rows)]

        for mx, my in self.consumables:
            if self.in_bounds(mx, my):
                board[my][mx] = 'M'

        # Heads drawn last so they stay visible over bodies
        for snake_id, positions in self.snake_positions.items():
            for x, y in positions[1:]:
                if self.in_bounds(x, y):
                    board[y][x] = 'T'
        for snake_id, positions in self.snake_positions.items():
            if positions and self.in_bounds(*positions[0]):
                hx, hy = positions[0]
                board[hy][hx] = str(snake_id)

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.rows)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.cols)))
        return "\n".join(result)

    def to_dict(self) -> Dict:
        return {
            "round_number": self.round_number,
            "snake_positions": {str(sid): [list(p) for p in pos] for sid, pos in self.snake_positions.items()},
            "consumables": [list(c) for c in self.consumables],
            "cols": self.cols,
            "rows": self.rows,
            "paused": self.paused,
        }

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, consumables={self.consumables}, "
            f"snakes={len(self.snake_positions)}, paused={self.paused}>"
        )
