"""
Geometry value types used to map grid cells to drawable regions.

Grid points carry integer coordinates; the same Point type is reused for
pixel coordinates (floats) when a cell is turned into a Rect or Circle.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .constants import Direction


@dataclass(frozen=True)
class Point:
    x: float = 0
    y: float = 0

    def step(self, direction: Direction, distance: int = 1) -> "Point":
        """Return the point one grid unit (or `distance` units) along direction."""
        dx, dy = Direction(direction).delta
        return Point(self.x + dx * distance, self.y + dy * distance)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


@dataclass(frozen=True)
class Circle:
    point: Point
    radius: float

    def inner_square(self) -> "Rect":
        """Largest axis-aligned square that fits inside the circle."""
        c = self.point
        w = self.radius / math.sqrt(2)
        return Rect(Point(c.x - w, c.y - w), Point(c.x + w, c.y + w))

    def outer_square(self) -> "Rect":
        c = self.point
        w = self.radius
        return Rect(Point(c.x - w, c.y - w), Point(c.x + w, c.y + w))

    def __str__(self) -> str:
        return f"({self.point}),{self.radius}"


@dataclass(frozen=True)
class Rect:
    start: Point
    end: Point

    @property
    def center(self) -> Point:
        return Point((self.start.x + self.end.x) / 2, (self.start.y + self.end.y) / 2)

    @property
    def top_left(self) -> Point:
        return Point(self.start.x, self.start.y)

    @property
    def top_right(self) -> Point:
        return Point(self.end.x, self.start.y)

    @property
    def bottom_left(self) -> Point:
        return Point(self.start.x, self.end.y)

    @property
    def bottom_right(self) -> Point:
        return self.end

    @property
    def width(self) -> float:
        return self.end.x - self.start.x

    @property
    def height(self) -> float:
        return self.end.y - self.start.y

    def inner_square(self) -> "Rect":
        return self._square(min(self.width, self.height))

    def outer_square(self) -> "Rect":
        return self._square(max(self.width, self.height))

    def inner_circle(self) -> Circle:
        return Circle(self.center, min(self.width, self.height) / 2)

    def outer_circle(self) -> Circle:
        return Circle(self.center, max(self.width, self.height) / 2)

    def _square(self, side: float) -> "Rect":
        c = self.center
        half = side / 2
        return Rect(Point(c.x - half, c.y - half), Point(c.x + half, c.y + half))

    def __str__(self) -> str:
        return f"({self.start}),({self.end})"
