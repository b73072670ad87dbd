#!/usr/bin/env python3
"""
Serve the snake game on a local port and open it in a browser.

Usage:
    python backend/cli/play.py
    python backend/cli/play.py --fixed-canvas --step-ms 150
    python backend/cli/play.py --tile-count 30 --port 8080

Options override the SNAKE_* environment variables (see config.py).
"""

import os
import sys
import argparse
import logging

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app import create_app  # noqa: E402
from config import load_config  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Play Snake in the browser',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--tile-count', type=int, default=None,
                        help='Board is N x N cells (default: 20)')
    parser.add_argument('--step-ms', type=int, default=None,
                        help='Milliseconds per snake step (default: 140)')
    parser.add_argument('--cell-size', type=int, default=None,
                        help='Pixels per cell for the fixed canvas (default: 20)')
    parser.add_argument('--fixed-canvas', action='store_true',
                        help='Keep the board at --cell-size instead of fitting the window')
    parser.add_argument('--host', type=str, default=None,
                        help='Interface to listen on (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=None,
                        help='Port to listen on (default: 5000)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config().with_overrides(
        tile_count=args.tile_count,
        step_ms=args.step_ms,
        cell_size=args.cell_size,
        responsive_canvas=False if args.fixed_canvas else None,
        host=args.host,
        port=args.port,
    )

    logger.info(
        f"Serving {config.tile_count}x{config.tile_count} board, {config.step_ms} ms per step, "
        f"{'responsive' if config.responsive_canvas else 'fixed'} canvas"
    )
    if config.highscore_db:
        logger.info(f"High score stored in {config.highscore_db}")
    else:
        logger.info("High score persistence disabled")

    app = create_app(config)
    logger.info(f"Open http://{config.host}:{config.port}/ to play")
    # One request at a time: the session is not shared across threads
    app.run(host=config.host, port=config.port, threaded=False)


if __name__ == "__main__":
    main()
