"""
Construction-time configuration for the snake engine.

Values come from keyword arguments, or from the environment (and a .env file)
through GameConfig.from_env().
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain.constants import (
    DEFAULT_ROWS,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
    DEFAULT_TICK_INTERVAL_MS,
    DEFAULT_TICKS_PER_MOVE,
    MAX_PLAYERS,
)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class GameConfig:
    rows: int = DEFAULT_ROWS
    surface_width: int = DEFAULT_SURFACE_WIDTH
    surface_height: int = DEFAULT_SURFACE_HEIGHT
    player_count: int = 1
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    ticks_per_move: int = DEFAULT_TICKS_PER_MOVE

    @property
    def cols(self) -> int:
        """Columns follow the surface aspect ratio, rows are fixed."""
        return (self.rows * self.surface_width) // self.surface_height

    def validate(self) -> "GameConfig":
        if self.surface_width <= 0 or self.surface_height <= 0:
            raise ValueError(
                f"Can't find a drawable surface ({self.surface_width}x{self.surface_height})"
            )
        if self.rows <= 0:
            raise ValueError(f"rows must be positive, got {self.rows}")
        if self.cols <= 0:
            raise ValueError(f"Surface {self.surface_width}x{self.surface_height} leaves no columns")
        if not 1 <= self.player_count <= MAX_PLAYERS:
            raise ValueError(f"player_count must be 1 or {MAX_PLAYERS}, got {self.player_count}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.ticks_per_move <= 0:
            raise ValueError(f"ticks_per_move must be positive, got {self.ticks_per_move}")
        return self

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "GameConfig":
        load_dotenv(env_file)
        return cls(
            rows=_env_int("SNAKE_ROWS", DEFAULT_ROWS),
            surface_width=_env_int("SNAKE_SURFACE_WIDTH", DEFAULT_SURFACE_WIDTH),
            surface_height=_env_int("SNAKE_SURFACE_HEIGHT", DEFAULT_SURFACE_HEIGHT),
            player_count=_env_int("SNAKE_PLAYERS", 1),
            tick_interval_ms=_env_int("SNAKE_TICK_INTERVAL_MS", DEFAULT_TICK_INTERVAL_MS),
            ticks_per_move=_env_int("SNAKE_TICKS_PER_MOVE", DEFAULT_TICKS_PER_MOVE),
        ).validate()
