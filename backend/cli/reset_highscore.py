#!/usr/bin/env python3
"""
Clear the stored high score.

Usage:
    python backend/cli/reset_highscore.py [--yes]
"""

import os
import sys
import argparse

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config import load_config  # noqa: E402
from services.highscore_store import SQLiteHighScoreStore  # noqa: E402


def reset_highscore(db_path: str, confirm: bool = False) -> bool:
    """
    Remove the high score row.

    Args:
        db_path: SQLite file holding the score
        confirm: If True, skip confirmation prompt

    Returns:
        True if the score was cleared, False if cancelled
    """
    store = SQLiteHighScoreStore(db_path)

    if not confirm:
        print(f"High score file: {db_path}")
        print(f"Current high score: {store.load()}")
        response = input("\nType 'RESET' to confirm: ")
        if response != 'RESET':
            print("Reset cancelled")
            return False

    store.clear()
    print("High score cleared")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Clear the stored snake high score")
    parser.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')
    args = parser.parse_args(argv)

    config = load_config()
    if not config.highscore_db:
        print("High score persistence is disabled (SNAKE_HIGHSCORE_DB is empty); nothing to reset")
        return 1

    return 0 if reset_highscore(config.highscore_db, confirm=args.yes) else 1


if __name__ == "__main__":
    sys.exit(main())
