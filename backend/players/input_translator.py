"""
Input translator - routes raw key events to players or the pause toggle.
"""

from typing import List, Optional, Sequence, Tuple, Union

from domain.constants import Direction
from .bindings import DEFAULT_BINDINGS, PAUSE_KEYS, KeyBindings
from .keyboard_player import KeyboardPlayer

PAUSE = "pause"

Action = Union[str, Tuple[KeyboardPlayer, Direction]]


class InputTranslator:
    """
    Maps a key to either PAUSE or (player, direction).

    Only the first player_count binding tables are active, so the second
    player's keys are inert in a single player game.
    """

    def __init__(
        self,
        player_count: int = 1,
        bindings: Sequence[KeyBindings] = DEFAULT_BINDINGS,
        pause_keys: Sequence[str] = PAUSE_KEYS
    ):
        if player_count > len(bindings):
            raise ValueError(f"No key bindings for player {len(bindings)}")
        self.players: List[KeyboardPlayer] = [
            KeyboardPlayer(index, bindings[index]) for index in range(player_count)
        ]
        self.pause_keys = tuple(pause_keys)
        for player in self.players:
            clash = set(player.bindings.keys()) & set(self.pause_keys)
            if clash:
                raise ValueError(f"Pause keys also bound to player {player.snake_id}: {sorted(clash)}")

    def resolve(self, key: str) -> Optional[Action]:
        """Return PAUSE, (player, direction), or None for unrecognised keys."""
        if key in self.pause_keys:
            return PAUSE
        for player in self.players:
            direction = player.direction_for(key)
            if direction is not None:
                return player, direction
        return None
