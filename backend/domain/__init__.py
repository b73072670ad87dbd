"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (storage, web host, rendering).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, NONE, VALID_DIRECTIONS, OPPOSITE, RunState,
    DEFAULT_TILE_COUNT, DEFAULT_STEP_MS, DEFAULT_FOOD_REWARD,
)
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'NONE', 'VALID_DIRECTIONS', 'OPPOSITE',
    'RunState',
    'DEFAULT_TILE_COUNT', 'DEFAULT_STEP_MS', 'DEFAULT_FOOD_REWARD',
    'Snake',
    'GameState',
]
