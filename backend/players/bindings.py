"""
Key events and per-player key binding tables.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from domain.constants import Direction, UP, DOWN, LEFT, RIGHT


@dataclass
class KeyEvent:
    """A key press delivered by the host (window, terminal, test)."""

    key: str
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class KeyBindings:
    """Physical keys bound to each heading for one player."""

    up: Tuple[str, ...]
    down: Tuple[str, ...]
    left: Tuple[str, ...]
    right: Tuple[str, ...]
    _lookup: Dict[str, Direction] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        lookup: Dict[str, Direction] = {}
        for direction, keys in ((UP, self.up), (DOWN, self.down), (LEFT, self.left), (RIGHT, self.right)):
            for key in keys:
                if key in lookup:
                    raise ValueError(f"Key {key!r} bound to both {lookup[key].value} and {direction.value}")
                lookup[key] = direction
        object.__setattr__(self, "_lookup", lookup)

    def direction_for(self, key: str) -> Optional[Direction]:
        return self._lookup.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._lookup)


ARROW_BINDINGS = KeyBindings(
    up=("ArrowUp",),
    down=("ArrowDown",),
    left=("ArrowLeft",),
    right=("ArrowRight",),
)

WASD_BINDINGS = KeyBindings(
    up=("w", "W"),
    down=("s", "S"),
    left=("a", "A"),
    right=("d", "D"),
)

DEFAULT_BINDINGS = (ARROW_BINDINGS, WASD_BINDINGS)
PAUSE_KEYS = (" ",)
