"""
Frame renderer for the snake engine.

Draws a GameState snapshot onto a Pillow image. Every grid cell maps to a
pixel Rect; snakes and mice are drawn as the inner circle of their cell.
"""

import logging
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.constants import ROLE_HEAD
from domain.game_state import GameState
from domain.geometry import Point, Rect

logger = logging.getLogger(__name__)


class ColorScheme:
    """Per-player colours, indexed by snake id"""

    SNAKE_PRIMARY = ["#f476ff", "#47e642"]
    SNAKE_HEAD = ["red", "green"]
    CONSUMABLE = "#5c5c53"
    LENGTH_TEXT = "blue"
    BACKGROUND = "#ffffff"


def load_font(size: int):
    try:
        return ImageFont.truetype("DejaVuSerif.ttf", size)
    except OSError:
        return ImageFont.load_default()


class FrameRenderer:
    """Render snapshots of a cols x rows grid onto a width x height surface"""

    def __init__(self, width: int, height: int, cols: int, rows: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Can't find a drawable surface ({width}x{height})")
        self.width = width
        self.height = height
        self.cols = cols
        self.rows = rows
        self.matrix = self._build_matrix()

    def _build_matrix(self) -> List[List[Rect]]:
        """matrix[x][y] is the pixel rectangle of grid cell (x, y)"""
        cell_w = self.width / self.cols
        cell_h = self.height / self.rows
        return [
            [
                Rect(Point(cell_w * i, cell_h * j), Point(cell_w * (i + 1), cell_h * (j + 1)))
                for j in range(self.rows)
            ]
            for i in range(self.cols)
        ]

    def cell(self, x: int, y: int) -> Rect:
        return self.matrix[x][y]

    def _on_lattice(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def render(self, state: GameState) -> Image.Image:
        """Draw consumables first, then each snake, onto a fresh frame."""
        img = Image.new("RGB", (self.width, self.height), ColorScheme.BACKGROUND)
        draw = ImageDraw.Draw(img)

        for x, y in state.consumables:
            self.draw_circle(draw, x, y, ColorScheme.CONSUMABLE)

        for snake_id in sorted(state.snake_positions):
            primary, head = self._colors(snake_id)
            positions = state.snake_positions[snake_id]
            for (x, y), role in state.segments_with_roles(snake_id):
                self.draw_circle(draw, x, y, head if role == ROLE_HEAD else primary)
            if positions:
                hx, hy = positions[0]
                self.draw_text(draw, str(len(positions)), hx, hy)

        return img

    def _colors(self, snake_id: int) -> Tuple[str, str]:
        index = snake_id % len(ColorScheme.SNAKE_PRIMARY)
        return ColorScheme.SNAKE_PRIMARY[index], ColorScheme.SNAKE_HEAD[index]

    def draw_circle(self, draw: ImageDraw.ImageDraw, x: int, y: int, color: str) -> None:
        # ignore overflow axis
        if not self._on_lattice(x, y):
            return
        circle = self.cell(x, y).inner_circle()
        box = circle.outer_square()
        draw.ellipse(
            [box.start.x, box.start.y, box.end.x, box.end.y],
            fill=color
        )

    def draw_text(self, draw: ImageDraw.ImageDraw, text: str, x: int, y: int, color: str = ColorScheme.LENGTH_TEXT) -> None:
        if not self._on_lattice(x, y):
            return
        rect = self.cell(x, y)
        center = rect.center
        font = load_font(max(1, int(rect.inner_circle().radius)))
        bbox = draw.textbbox((0, 0), text, font=font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        draw.text(
            (center.x - text_width / 2, center.y - text_height / 2),
            text,
            fill=color,
            font=font
        )
