"""
Grid snake simulation engine.

SnakeGame owns the players' snakes, the mice on the board and the tick
counters. A periodic tick drives movement every ticks_per_move ticks; key
events queue turns in between. Renderers read GameState snapshots and never
touch the live state.
"""

import argparse
import json
import logging
import os
import random
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from config import GameConfig
from domain.command import CommandSequence
from domain.constants import LEFT, RIGHT, DEFAULT_TICK_INTERVAL_MS, DEFAULT_TICKS_PER_MOVE, MAX_PLAYERS
from domain.game_state import GameState
from domain.geometry import Point
from domain.snake import Segment, Snake
from players.bindings import KeyEvent
from players.input_translator import InputTranslator, PAUSE
from services.tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)

EatCallback = Callable[[int, Point], None]


class SnakeGame:
    """
    Manages:
      - Grid (cols, rows)
      - Snakes, one per player, each with its command queue
      - Mice (consumables), one per player
      - Tick and movement counters, pause flag
      - Optional snapshot history for replay
    """

    def __init__(
        self,
        cols: int,
        rows: int,
        player_count: int = 1,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        ticks_per_move: int = DEFAULT_TICKS_PER_MOVE,
        on_eat: Optional[EatCallback] = None,
        rng: Optional[random.Random] = None,
        record_history: bool = False,
        translator: Optional[InputTranslator] = None
    ):
        if cols <= 0 or rows <= 0:
            raise ValueError(f"Grid must be at least 1x1, got {cols}x{rows}")
        if not 1 <= player_count <= MAX_PLAYERS:
            raise ValueError(f"player_count must be 1 or {MAX_PLAYERS}, got {player_count}")
        if ticks_per_move <= 0:
            raise ValueError(f"ticks_per_move must be positive, got {ticks_per_move}")

        self.cols = cols
        self.rows = rows
        self.player_count = player_count
        self.tick_interval_ms = tick_interval_ms
        self.ticks_per_move = ticks_per_move
        self.on_eat = on_eat
        self.rng = rng or random.Random()
        self.record_history = record_history

        self.snakes: List[Snake] = []
        self.mice: List[Point] = []
        self.scores: Dict[int, int] = {}
        self.sequence = CommandSequence()
        self.input = translator or InputTranslator(player_count)

        self.tick_count = 0
        self.total_ticks = 0
        self.round_number = 0
        self.paused = False
        self.listening = True
        self.history: List[GameState] = []

        # _lock guards game state; _tick_guard makes tick() non-reentrant
        self._lock = threading.RLock()
        self._tick_guard = threading.Lock()
        self._scheduler = TickScheduler(self.tick, tick_interval_ms)

        self._spawn_snakes()

    @classmethod
    def from_config(cls, config: GameConfig, **kwargs) -> "SnakeGame":
        config.validate()
        return cls(
            cols=config.cols,
            rows=config.rows,
            player_count=config.player_count,
            tick_interval_ms=config.tick_interval_ms,
            ticks_per_move=config.ticks_per_move,
            **kwargs
        )

    def _spawn_snakes(self):
        poses = [Segment(Point(0, 0), RIGHT)]
        if self.player_count > 1:
            poses.append(Segment(Point(self.cols - 1, self.rows - 1), LEFT))
        self.snakes = [Snake(pose) for pose in poses]
        self.scores = {index: 0 for index in range(len(self.snakes))}
        logger.info(f"Spawned {len(self.snakes)} snake(s) on a {self.cols}x{self.rows} grid")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self):
        """Attach the keyboard listener and start the periodic tick."""
        self.listening = True
        self._scheduler.start()

    def stop(self):
        """Stop the periodic tick and detach the keyboard listener."""
        self._scheduler.stop()
        self.listening = False

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def restart(self):
        """
        Start a fresh game: every snake back to its pose, no mice, tick
        counters zeroed. A running scheduler is left as-is.
        """
        with self._lock:
            self._spawn_snakes()
            self.mice = []
            self.tick_count = 0
            self.total_ticks = 0
            self.round_number = 0
            self.paused = False
            self.history = []

    def reset_snake(self, index: int, reason: str):
        """Per-player recovery: only this snake goes back to its initial pose."""
        if not 0 <= index < len(self.snakes):
            raise ValueError(f"No snake with index {index}")
        snake = self.snakes[index]
        logger.info(f"Snake {index} hit {reason} at ({snake.head.point}) with length {len(snake)}; resetting")
        snake.reset()

    def toggle_pause(self) -> bool:
        with self._lock:
            self.paused = not self.paused
            logger.info(f"{'Paused' if self.paused else 'Resumed'} at round {self.round_number}")
            for index, snake in enumerate(self.snakes):
                logger.info(f"snake {index}: {snake}")
                logger.info(f"cmds {index}: {snake.commands}")
            return self.paused

    # ------------------------------------------------------------------
    # Tick handling
    # ------------------------------------------------------------------

    def tick(self) -> bool:
        """
        Handle one scheduler tick.

        Returns:
            True if this tick performed a movement step.
        """
        if not self._tick_guard.acquire(blocking=False):
            logger.debug("Tick skipped: previous tick still running")
            return False
        try:
            with self._lock:
                # Counts every scheduler tick, paused or not
                self.total_ticks += 1
                if self.paused:
                    return False
                self.tick_count += 1
                if self.tick_count < self.ticks_per_move:
                    return False
                self.tick_count = 0
                self.step()
                return True
        finally:
            self._tick_guard.release()

    def step(self):
        """
        Execute one movement cycle:
          1) Move every snake, applying queued turns and collision resets
          2) Let heads eat mice and grow
          3) Respawn mice up to one per player
        """
        with self._lock:
            self._move()
            self._eat_mice()
            self._respawn_mice()
            self.round_number += 1
            if self.record_history:
                self.history.append(self.get_current_state())

    def _move(self):
        for index, snake in enumerate(self.snakes):
            last = len(snake.segments) - 1
            for i, segment in enumerate(snake.segments):
                segment.point = segment.point.step(segment.direction)
                snake.commands.apply_to(segment, is_tail=(i == last))
                if i == 0:
                    # Compared against the body before it moves this step
                    reason = self._collision(snake)
                    if reason is not None:
                        self.reset_snake(index, reason)
                        break
            self._check_invariants(index, snake)

    def _collision(self, snake: Snake) -> Optional[str]:
        head = snake.head.point
        if not self.in_bounds(head):
            return "wall"
        if any(segment.point == head for segment in snake.segments[1:]):
            return "self"
        return None

    def _check_invariants(self, index: int, snake: Snake):
        if not snake.segments:
            raise RuntimeError(f"Snake {index} has no segments")
        if not snake.commands.is_sorted():
            raise RuntimeError(f"Snake {index} command queue out of order: {snake.commands}")

    def _eat_mice(self):
        for index, snake in enumerate(self.snakes):
            head = snake.head.point
            for mouse in [m for m in self.mice if m == head]:
                self.mice.remove(mouse)
                logger.debug(f"eat: {mouse}")
                snake.grow()
                self.scores[index] += 1
                logger.info(f"grow: snake {index} now has {len(snake)} segments")
                if self.on_eat is not None:
                    self.on_eat(index, mouse)

    def _respawn_mice(self):
        # Occupancy is not checked; a mouse may appear under a body
        while len(self.mice) < self.player_count:
            x = self.rng.randint(0, self.cols - 1)
            y = self.rng.randint(0, self.rows - 1)
            self.mice.append(Point(x, y))
        if len(self.mice) > self.player_count:
            raise RuntimeError(f"{len(self.mice)} mice on the board for {self.player_count} player(s)")

    def set_mice(self, positions: List[Tuple[int, int]]):
        """Place mice at specified positions, replacing the current ones."""
        if len(positions) > self.player_count:
            raise ValueError(f"At most {self.player_count} mice allowed, got {len(positions)}")
        mice = [Point(x, y) for x, y in positions]
        for mouse in mice:
            if not self.in_bounds(mouse):
                raise ValueError(f"Mouse out of bounds at ({mouse}).")
        with self._lock:
            self.mice = mice

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.cols and 0 <= point.y < self.rows

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> bool:
        """
        Keyboard listener. Returns True if the event changed the game.
        Unrecognised keys and already handled events are ignored.
        """
        if not self.listening or event.default_prevented:
            return False

        action = self.input.resolve(event.key)
        if action is None:
            return False
        if action == PAUSE:
            self.toggle_pause()
            return True

        player, direction = action
        # Cancel the default action to avoid it being handled twice
        event.prevent_default()
        with self._lock:
            return player.steer(self.snakes[player.snake_id], direction, self.sequence)

    def press(self, key: str) -> bool:
        return self.handle_key(KeyEvent(key))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        with self._lock:
            snake_positions = {
                index: [(segment.point.x, segment.point.y) for segment in snake.segments]
                for index, snake in enumerate(self.snakes)
            }
            return GameState(
                round_number=self.round_number,
                snake_positions=snake_positions,
                consumables=[(m.x, m.y) for m in self.mice],
                cols=self.cols,
                rows=self.rows,
                paused=self.paused
            )

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.get_current_state().print_board() + "\n")

    def summary(self) -> Dict:
        return {
            "rounds": self.round_number,
            "ticks": self.total_ticks,
            "lengths": {str(i): len(s) for i, s in enumerate(self.snakes)},
            "scores": {str(i): score for i, score in self.scores.items()},
            "mice": [[m.x, m.y] for m in self.mice],
        }


# -------------------------------
# Simulation Function
# -------------------------------

def parse_key_script(script: Optional[str]) -> Dict[int, List[str]]:
    """
    Parse "tick:key,tick:key" into {tick: [keys]}. "space" stands for " ".
    """
    keys: Dict[int, List[str]] = {}
    if not script:
        return keys
    for item in script.split(","):
        item = item.strip()
        if not item:
            continue
        tick_text, sep, key = item.partition(":")
        if not sep or not key:
            raise ValueError(f"Bad key script entry {item!r}, expected tick:key")
        try:
            tick = int(tick_text)
        except ValueError:
            raise ValueError(f"Bad tick {tick_text!r} in key script entry {item!r}")
        keys.setdefault(tick, []).append(" " if key == "space" else key)
    return keys


def run_simulation(
    config: GameConfig,
    ticks: int,
    key_script: Optional[Dict[int, List[str]]] = None,
    seed: Optional[int] = None,
    realtime: bool = False,
    record_history: bool = False
) -> SnakeGame:
    """
    Runs a scripted session for a number of ticks.

    Args:
        config: grid, player and timing configuration
        ticks: number of ticks to run
        key_script: keys to press before the given tick number (0-based)
        seed: seed for mouse placement
        realtime: drive ticks with the TickScheduler instead of stepping
        record_history: keep a snapshot after every movement step

    Returns:
        The finished SnakeGame.
    """
    key_script = key_script or {}
    game = SnakeGame.from_config(
        config,
        rng=random.Random(seed),
        record_history=record_history,
        on_eat=lambda index, mouse: logger.debug(f"snake {index} ate mouse at ({mouse})")
    )
    if record_history:
        game.history.append(game.get_current_state())

    if not realtime:
        for tick in range(ticks):
            for key in key_script.get(tick, []):
                game.press(key)
            game.tick()
        return game

    pending = sorted(key_script.items())
    game.start()
    try:
        while game.total_ticks < ticks and game.running:
            while pending and pending[0][0] <= game.total_ticks:
                for key in pending.pop(0)[1]:
                    game.press(key)
            time.sleep(config.tick_interval_ms / 2000)
    finally:
        game.stop()
    return game


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------

def build_config(args: argparse.Namespace) -> GameConfig:
    """Environment defaults overridden by any flag given on the command line."""
    config = GameConfig.from_env()
    for field_name in ("rows", "player_count", "tick_interval_ms", "ticks_per_move"):
        value = getattr(args, field_name, None)
        if value is not None:
            setattr(config, field_name, value)
    if getattr(args, "width", None) is not None:
        config.surface_width = args.width
    if getattr(args, "height", None) is not None:
        config.surface_height = args.height
    return config.validate()


def add_simulation_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--players", dest="player_count", type=int, choices=[1, 2],
                        help="Number of players (default: SNAKE_PLAYERS or 1)")
    parser.add_argument("--rows", type=int, help="Grid rows (default: SNAKE_ROWS or 40)")
    parser.add_argument("--width", type=int, help="Surface width used for the column count")
    parser.add_argument("--height", type=int, help="Surface height used for the column count")
    parser.add_argument("--tick-interval-ms", dest="tick_interval_ms", type=int,
                        help="Milliseconds between ticks")
    parser.add_argument("--ticks-per-move", dest="ticks_per_move", type=int,
                        help="Ticks between movement steps")
    parser.add_argument("--ticks", type=int, default=200, help="Number of ticks to run")
    parser.add_argument("--keys", type=str, default="",
                        help="Scripted key presses, e.g. '10:ArrowDown,40:a,60:space'")
    parser.add_argument("--seed", type=int, help="Random seed for mouse placement")
    parser.add_argument("--realtime", action="store_true",
                        help="Run ticks on the scheduler instead of stepping them")


def main():
    parser = argparse.ArgumentParser(
        description="Run a headless grid snake session from a key script."
    )
    add_simulation_arguments(parser)
    parser.add_argument("--no-board", action="store_true", help="Do not print the final board")
    args = parser.parse_args()

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = build_config(args)
    game = run_simulation(
        config,
        ticks=args.ticks,
        key_script=parse_key_script(args.keys),
        seed=args.seed,
        realtime=args.realtime
    )

    if not args.no_board:
        game.print_board()
    print("\nSimulation Result Summary:")
    print(json.dumps(game.summary(), indent=2))


if __name__ == "__main__":
    main()
