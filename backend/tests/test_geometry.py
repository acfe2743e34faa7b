"""
Tests for domain.geometry - cell to drawable region math.
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import UP, DOWN, LEFT, RIGHT  # noqa: E402
from domain.geometry import Point, Rect, Circle  # noqa: E402


class TestPoint:
    """Tests for Point stepping."""

    def test_step_uses_top_down_screen_axis(self):
        """Up decreases y and down increases it."""
        p = Point(5, 5)
        assert p.step(UP) == Point(5, 4)
        assert p.step(DOWN) == Point(5, 6)
        assert p.step(LEFT) == Point(4, 5)
        assert p.step(RIGHT) == Point(6, 5)

    def test_step_rejects_unknown_direction(self):
        """Invalid headings are not silently treated as right."""
        with pytest.raises(ValueError):
            Point(0, 0).step("sideways")

    def test_points_are_values(self):
        """Points compare and hash by coordinates."""
        assert Point(1, 2) == Point(1, 2)
        assert len({Point(1, 2), Point(1, 2)}) == 1


class TestRect:
    """Tests for Rect derived shapes."""

    def test_corners_center_and_size(self):
        rect = Rect(Point(0, 0), Point(20, 10))
        assert rect.center == Point(10, 5)
        assert rect.top_left == Point(0, 0)
        assert rect.top_right == Point(20, 0)
        assert rect.bottom_left == Point(0, 10)
        assert rect.bottom_right == Point(20, 10)
        assert rect.width == 20
        assert rect.height == 10

    def test_inner_and_outer_square(self):
        """Squares are centred and sized by the short or long side."""
        rect = Rect(Point(0, 0), Point(20, 10))
        inner = rect.inner_square()
        outer = rect.outer_square()
        assert inner == Rect(Point(5, 0), Point(15, 10))
        assert outer == Rect(Point(0, -5), Point(20, 15))

    def test_inner_and_outer_circle(self):
        """Circle radius is half the short or long side."""
        rect = Rect(Point(0, 0), Point(20, 10))
        assert rect.inner_circle() == Circle(Point(10, 5), 5)
        assert rect.outer_circle() == Circle(Point(10, 5), 10)


class TestCircle:
    """Tests for Circle derived squares."""

    def test_inner_square_uses_radius_over_root_two(self):
        circle = Circle(Point(0, 0), 10)
        square = circle.inner_square()
        half = 10 / math.sqrt(2)
        assert square.start.x == pytest.approx(-half)
        assert square.end.y == pytest.approx(half)
        assert square.width == pytest.approx(2 * half)

    def test_outer_square_spans_diameter(self):
        circle = Circle(Point(3, 4), 2)
        assert circle.outer_square() == Rect(Point(1, 2), Point(5, 6))
