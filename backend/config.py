"""
Runtime configuration for the snake game.

Values come from the environment (a local .env file is loaded first), so the
two canvas variants can be picked without code changes:

- responsive canvas, 140 ms per step (default)
- fixed canvas, 150 ms per step: SNAKE_RESPONSIVE_CANVAS=false SNAKE_STEP_MS=150
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from domain.constants import (
    DEFAULT_TILE_COUNT,
    DEFAULT_STEP_MS,
    DEFAULT_FOOD_REWARD,
    DEFAULT_CELL_SIZE,
    MIN_CELL_SIZE,
)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def get_highscore_db_path() -> str:
    """Default location of the high score database: next to this file."""
    return str(Path(__file__).parent / 'snake_highscore.db')


@dataclass(frozen=True)
class GameConfig:
    tile_count: int = DEFAULT_TILE_COUNT
    step_ms: int = DEFAULT_STEP_MS
    food_reward: int = DEFAULT_FOOD_REWARD
    cell_size: int = DEFAULT_CELL_SIZE
    responsive_canvas: bool = True
    min_cell_size: int = MIN_CELL_SIZE
    max_catch_up_ticks: int = 5
    highscore_db: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 5000

    def __post_init__(self):
        if self.tile_count < 2:
            raise ValueError(f"tile_count must be at least 2, got {self.tile_count}")
        if self.step_ms <= 0:
            raise ValueError(f"step_ms must be positive, got {self.step_ms}")
        if self.food_reward < 0:
            raise ValueError(f"food_reward must be non-negative, got {self.food_reward}")
        if self.cell_size <= 0 or self.min_cell_size <= 0:
            raise ValueError("cell sizes must be positive")
        if self.max_catch_up_ticks < 1:
            raise ValueError(f"max_catch_up_ticks must be at least 1, got {self.max_catch_up_ticks}")

    @property
    def step_seconds(self) -> float:
        return self.step_ms / 1000.0

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_config() -> GameConfig:
    """
    Build a GameConfig from environment variables.

    SNAKE_HIGHSCORE_DB set to an empty string disables persistence; unset
    uses the default path.
    """
    load_dotenv()

    highscore_db = os.getenv('SNAKE_HIGHSCORE_DB')
    if highscore_db is None:
        highscore_db = get_highscore_db_path()
    elif highscore_db.strip() == "":
        highscore_db = None

    return GameConfig(
        tile_count=_env_int('SNAKE_TILE_COUNT', DEFAULT_TILE_COUNT),
        step_ms=_env_int('SNAKE_STEP_MS', DEFAULT_STEP_MS),
        food_reward=_env_int('SNAKE_FOOD_REWARD', DEFAULT_FOOD_REWARD),
        cell_size=_env_int('SNAKE_CELL_SIZE', DEFAULT_CELL_SIZE),
        responsive_canvas=_env_bool('SNAKE_RESPONSIVE_CANVAS', True),
        min_cell_size=_env_int('SNAKE_MIN_CELL_SIZE', MIN_CELL_SIZE),
        max_catch_up_ticks=_env_int('SNAKE_MAX_CATCH_UP_TICKS', 5),
        highscore_db=highscore_db,
        host=os.getenv('SNAKE_HOST', '127.0.0.1'),
        port=_env_int('SNAKE_PORT', 5000),
    )
