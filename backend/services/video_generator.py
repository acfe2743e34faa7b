"""
Video Generation Service for snake sessions

Turns a recorded history of GameState snapshots into a video by:
1. Rendering each snapshot with FrameRenderer (Pillow)
2. Encoding frames to MP4 with MoviePy/FFmpeg, or to an animated GIF
   with Pillow when the output path ends in .gif
"""

import logging
import os
import tempfile
from typing import List, Optional, Sequence

import numpy as np
from moviepy import ImageSequenceClip
from PIL import Image

from domain.game_state import GameState
from .frame_renderer import FrameRenderer

logger = logging.getLogger(__name__)

# Video settings
DEFAULT_FPS = 4
CELL_SIZE = 16  # Size of each grid cell in pixels


class SnakeVideoGenerator:
    """Generate videos from recorded snake sessions"""

    def __init__(self, fps: int = DEFAULT_FPS, cell_size: int = CELL_SIZE):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        self.cell_size = cell_size

    def render_frames(self, history: Sequence[GameState]) -> List[Image.Image]:
        """Render every snapshot; all snapshots must share one grid size"""
        if not history:
            raise ValueError("No recorded frames to render")

        cols, rows = history[0].cols, history[0].rows
        renderer = FrameRenderer(cols * self.cell_size, rows * self.cell_size, cols, rows)

        frames = []
        for i, state in enumerate(history):
            if i % 50 == 0:
                logger.info(f"Rendering frame {i + 1}/{len(history)}")
            frames.append(renderer.render(state))
        return frames

    def generate_video(self, history: Sequence[GameState], output_path: Optional[str] = None) -> str:
        """
        Generate a video from a recorded history

        Args:
            history: snapshots in play order
            output_path: Optional output path (if None, uses temp file)

        Returns:
            Path to the generated video file
        """
        frames = self.render_frames(history)
        logger.info(f"Rendered {len(frames)} frames, creating video...")

        if output_path is None:
            output_path = os.path.join(tempfile.gettempdir(), "snake_session.mp4")

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        try:
            if output_path.lower().endswith(".gif"):
                self._write_gif(frames, output_path)
            else:
                clip = ImageSequenceClip([np.array(frame) for frame in frames], fps=self.fps)
                clip.write_videofile(output_path, codec="libx264", audio=False, logger=None)
        except Exception as e:
            logger.error(f"Failed to write video to {output_path}: {e}")
            raise

        logger.info(f"Video created successfully at {output_path}")
        return output_path

    def _write_gif(self, frames: List[Image.Image], output_path: str) -> None:
        duration_ms = int(1000 / self.fps)
        first, rest = frames[0], frames[1:]
        first.save(
            output_path,
            save_all=True,
            append_images=rest,
            duration=duration_ms,
            loop=0
        )
