"""
Tests for the services - renderer, video export and tick scheduler.
"""

import os
import sys
import threading
import time
from unittest.mock import patch

import pytest
from PIL import Image, ImageColor

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.game_state import GameState  # noqa: E402
from domain.geometry import Point, Rect  # noqa: E402
from services.frame_renderer import ColorScheme, FrameRenderer  # noqa: E402
from services.tick_scheduler import TickScheduler  # noqa: E402
from services.video_generator import SnakeVideoGenerator  # noqa: E402


def make_state(**kwargs):
    defaults = dict(
        round_number=0,
        snake_positions={0: [(0, 0), (1, 0)], 1: [(4, 4)]},
        consumables=[(2, 2)],
        cols=5,
        rows=5,
    )
    defaults.update(kwargs)
    return GameState(**defaults)


def rgb(color):
    return ImageColor.getrgb(color)


class TestFrameRenderer:
    """Tests for FrameRenderer."""

    def test_matrix_maps_cells_to_pixels(self):
        renderer = FrameRenderer(100, 50, cols=10, rows=5)
        assert renderer.cell(0, 0) == Rect(Point(0, 0), Point(10, 10))
        assert renderer.cell(9, 4) == Rect(Point(90, 40), Point(100, 50))

    def test_missing_surface(self):
        with pytest.raises(ValueError):
            FrameRenderer(0, 100, cols=5, rows=5)

    def test_render_colors(self):
        renderer = FrameRenderer(100, 100, cols=5, rows=5)

        img = renderer.render(make_state())

        assert img.size == (100, 100)
        # Left edge of each circle, clear of the centred length text
        assert img.getpixel((4, 10)) == rgb(ColorScheme.SNAKE_HEAD[0])
        assert img.getpixel((30, 10)) == rgb(ColorScheme.SNAKE_PRIMARY[0])
        assert img.getpixel((84, 90)) == rgb(ColorScheme.SNAKE_HEAD[1])
        assert img.getpixel((50, 50)) == rgb(ColorScheme.CONSUMABLE)
        # Cell corners stay background: shapes are inner circles
        assert img.getpixel((40, 40)) == rgb(ColorScheme.BACKGROUND)

    def test_off_lattice_points_are_skipped(self):
        renderer = FrameRenderer(50, 50, cols=5, rows=5)
        state = make_state(snake_positions={0: [(-1, 0), (5, 5)]}, consumables=[(9, 9)])

        img = renderer.render(state)

        assert img.getcolors() == [(2500, rgb(ColorScheme.BACKGROUND))]


class TestSnakeVideoGenerator:
    """Tests for SnakeVideoGenerator."""

    def test_render_frames(self):
        generator = SnakeVideoGenerator(cell_size=4)
        frames = generator.render_frames([make_state(), make_state(round_number=1)])
        assert len(frames) == 2
        assert frames[0].size == (20, 20)

    def test_empty_history(self):
        with pytest.raises(ValueError):
            SnakeVideoGenerator().render_frames([])

    def test_gif_output(self, tmp_path):
        generator = SnakeVideoGenerator(fps=5, cell_size=4)
        output = str(tmp_path / "session.gif")

        path = generator.generate_video([make_state(), make_state(consumables=[(3, 3)])], output)

        assert path == output
        with Image.open(path) as gif:
            assert gif.n_frames == 2

    def test_mp4_output_uses_moviepy(self, tmp_path):
        generator = SnakeVideoGenerator(fps=5, cell_size=4)
        output = str(tmp_path / "videos" / "session.mp4")

        with patch("services.video_generator.ImageSequenceClip") as clip_cls:
            generator.generate_video([make_state()], output)

        frames = clip_cls.call_args[0][0]
        assert len(frames) == 1
        assert clip_cls.call_args[1]["fps"] == 5
        clip_cls.return_value.write_videofile.assert_called_once()
        assert os.path.isdir(tmp_path / "videos")


class TestTickScheduler:
    """Tests for TickScheduler."""

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            TickScheduler(lambda: None, 0)

    def test_ticks_until_stopped(self):
        ticked = threading.Event()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) >= 3:
                ticked.set()

        scheduler = TickScheduler(callback, 5)
        scheduler.start()
        try:
            assert ticked.wait(timeout=5)
        finally:
            scheduler.stop()

        count = len(calls)
        assert scheduler.running is False
        ticked.wait(0.05)
        assert len(calls) == count

    def test_restart_keeps_single_job(self):
        scheduler = TickScheduler(lambda: None, 1000)
        scheduler.start()
        scheduler.start()
        try:
            assert len(scheduler._scheduler.get_jobs()) == 1
        finally:
            scheduler.stop()
        assert scheduler._scheduler.get_jobs() == []

    def test_failing_callback_stops_loop(self):
        def boom():
            raise RuntimeError("invariant broken")

        scheduler = TickScheduler(boom, 5)
        scheduler.start()
        scheduler._thread.join(timeout=5)
        assert scheduler.running is False
        scheduler.stop()

    def test_restart_from_callback_leaves_one_loop(self):
        """Restarting from inside a tick retires the old loop thread."""
        restarted = threading.Event()
        calls = []

        def live_loops():
            return [t for t in threading.enumerate() if t.name == "tick-scheduler" and t.is_alive()]

        def callback():
            calls.append(1)
            if len(calls) == 1:
                scheduler.start()
                restarted.set()

        scheduler = TickScheduler(callback, 5)
        scheduler.start()
        try:
            assert restarted.wait(timeout=5)
            for _ in range(100):
                if len(live_loops()) == 1:
                    break
                time.sleep(0.02)
            assert live_loops() == [scheduler._thread]
        finally:
            scheduler.stop()
        assert live_loops() == []
