import logging
import random
from typing import List, Optional, Tuple

from domain.constants import (
    NONE, RIGHT, VALID_DIRECTIONS, OPPOSITE, RunState,
    DEFAULT_TILE_COUNT, DEFAULT_FOOD_REWARD,
)
from domain.game_state import GameState
from domain.snake import Snake
from services.highscore_store import MemoryHighScoreStore

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Manages:
      - Board (tile_count x tile_count)
      - Snake and heading
      - Food
      - Score and persisted high score
      - Run state (idle / running / paused / over)

    Every mutation happens through the public operations below; callers
    serialize them (one timer, one input handler, same thread).
    """
    def __init__(
        self,
        tile_count: int = DEFAULT_TILE_COUNT,
        food_reward: int = DEFAULT_FOOD_REWARD,
        high_score_store=None,
        rng: Optional[random.Random] = None
    ):
        if tile_count < 2:
            raise ValueError(f"tile_count must be at least 2, got {tile_count}")

        self.tile_count = tile_count
        self.food_reward = food_reward
        self.high_score_store = high_score_store or MemoryHighScoreStore()
        self.rng = rng or random.Random()

        # Read once at startup
        self.high_score = self.high_score_store.load()

        self.snake = Snake([self.center])
        self.food: Optional[Tuple[int, int]] = None
        self.heading: Tuple[int, int] = NONE
        self.score = 0
        self.run_state = RunState.IDLE
        self.reset()

    @property
    def center(self) -> Tuple[int, int]:
        return (self.tile_count // 2, self.tile_count // 2)

    def reset(self):
        """Back to a fresh Idle game; the high score is kept."""
        self.snake = Snake([self.center])
        self.heading = NONE
        self.score = 0
        self.food = self._random_free_cell()
        self.run_state = RunState.IDLE

    def start(self):
        """Idle or Paused -> Running. A still snake starts moving right."""
        if self.run_state not in (RunState.IDLE, RunState.PAUSED):
            return
        if self.heading == NONE:
            self.heading = RIGHT
        self.run_state = RunState.RUNNING

    def pause(self):
        if self.run_state == RunState.RUNNING:
            self.run_state = RunState.PAUSED

    def resume(self):
        if self.run_state == RunState.PAUSED:
            self.run_state = RunState.RUNNING

    def set_heading(self, direction: Tuple[int, int]) -> bool:
        """
        Change the direction of travel.

        Reversals and repeats of the current heading are ignored, as is any
        change once the game is over. The first accepted heading of an idle
        game starts it. Returns whether the heading changed.
        """
        direction = tuple(direction)
        if direction not in VALID_DIRECTIONS:
            raise ValueError(f"Invalid direction {direction}; expected one of {sorted(VALID_DIRECTIONS)}")

        if self.run_state == RunState.OVER:
            return False
        if direction == self.heading:
            return False
        if self.heading != NONE and direction == OPPOSITE[self.heading]:
            return False

        self.heading = direction
        if self.run_state == RunState.IDLE:
            self.run_state = RunState.RUNNING
        return True

    def _random_free_cell(self) -> Optional[Tuple[int, int]]:
        """
        Return a cell chosen uniformly from those not covered by the snake,
        or None when the snake fills the board.
        """
        occupied = set(self.snake.positions)
        free_cells: List[Tuple[int, int]] = [
            (x, y)
            for y in range(self.tile_count)
            for x in range(self.tile_count)
            if (x, y) not in occupied
        ]
        if not free_cells:
            return None
        return self.rng.choice(free_cells)

    def _in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.tile_count and 0 <= y < self.tile_count

    def tick(self) -> bool:
        """
        Advance the snake one cell:
          1) wall hit -> game over, snake unchanged
          2) self hit -> game over, snake unchanged
          3) move the head
          4) on food: score, maybe new high score, grow, new food
          5) otherwise drop the tail
        Returns True if the snake moved.
        """
        if self.run_state != RunState.RUNNING:
            return False

        hx, hy = self.snake.head
        dx, dy = self.heading
        new_head = (hx + dx, hy + dy)

        if not self._in_bounds(new_head):
            self.end_game("wall")
            return False

        if self.snake.occupies(new_head):
            self.end_game("self")
            return False

        self.snake.positions.appendleft(new_head)

        if new_head == self.food:
            self.score += self.food_reward
            if self.score > self.high_score:
                self.high_score = self.score
                logger.info(f"New high score: {self.high_score}")
                self.high_score_store.save(self.high_score)

            self.food = self._random_free_cell()
            if self.food is None:
                self.end_game("board full")
        else:
            self.snake.positions.pop()

        return True

    def end_game(self, reason: str):
        self.run_state = RunState.OVER
        logger.info(f"Game Over ({reason}): score {self.score}, length {len(self.snake)}")
        logger.debug("\n" + self.get_current_state().print_board())

    def get_current_state(self) -> GameState:
        """
        Return a read-only snapshot of the current board as a GameState.
        """
        return GameState(
            snake=list(self.snake.positions),
            food=self.food,
            heading=self.heading,
            score=self.score,
            high_score=self.high_score,
            run_state=self.run_state,
            tile_count=self.tile_count
        )


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    """Serve the game on a local port; see cli/play.py for the options."""
    from cli.play import main as play_main
    play_main()


if __name__ == "__main__":
    main()
