"""
Game constants for the snake game.
"""

from enum import Enum

# Movement directions as (dx, dy) in screen coordinates (y grows downward)
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
NONE = (0, 0)
VALID_DIRECTIONS = {UP, DOWN, LEFT, RIGHT}

OPPOSITE = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


# Game settings
DEFAULT_TILE_COUNT = 20
DEFAULT_STEP_MS = 140
DEFAULT_FOOD_REWARD = 10
DEFAULT_CELL_SIZE = 20
MIN_CELL_SIZE = 8
HIGH_SCORE_KEY = "snakeHighScore"
