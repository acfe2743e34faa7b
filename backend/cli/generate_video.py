#!/usr/bin/env python3
"""
CLI tool to record a scripted snake session as a video

Usage:
    python generate_video.py --ticks 400 --keys "20:ArrowDown,45:ArrowRight"

Examples:
    # Two players, GIF output
    python generate_video.py --players 2 --keys "5:a,30:w" --output ./session.gif

    # Custom video settings
    python generate_video.py --fps 8 --cell-size 12 --seed 7
"""

import os
import sys
import argparse
import logging

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import add_simulation_arguments, build_config, parse_key_script, run_simulation  # noqa: E402
from services.video_generator import SnakeVideoGenerator, DEFAULT_FPS, CELL_SIZE  # noqa: E402

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description='Record a scripted snake session as MP4 or GIF',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    add_simulation_arguments(parser)

    # Output options
    parser.add_argument(
        '--output', '-o',
        type=str,
        default='snake_session.mp4',
        help='Output video path; a .gif suffix writes an animated GIF (default: snake_session.mp4)'
    )

    # Video settings
    parser.add_argument(
        '--fps',
        type=int,
        default=DEFAULT_FPS,
        help=f'Frames per second (default: {DEFAULT_FPS})'
    )
    parser.add_argument(
        '--cell-size',
        type=int,
        default=CELL_SIZE,
        help=f'Pixels per grid cell (default: {CELL_SIZE})'
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = build_config(args)
        game = run_simulation(
            config,
            ticks=args.ticks,
            key_script=parse_key_script(args.keys),
            seed=args.seed,
            realtime=args.realtime,
            record_history=True
        )
        logger.info(f"Recorded {len(game.history)} frames over {game.total_ticks} ticks")

        generator = SnakeVideoGenerator(fps=args.fps, cell_size=args.cell_size)
        video_path = generator.generate_video(game.history, output_path=args.output)

        logger.info(f"[OK] Video generated successfully: {video_path}")

    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
