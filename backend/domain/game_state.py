"""
GameState entity - a read-only snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import RunState


class GameState:
    """
    A snapshot of the game handed to the renderer and the web host.

    Attributes:
        snake: list of (x, y), head first
        food: (x, y) of the food, or None once the board is full
        heading: current (dx, dy) direction of travel
        score: points scored this game
        high_score: best score seen so far
        run_state: RunState of the game
        tile_count: board is tile_count x tile_count cells
    """

    def __init__(
        self,
        snake: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        heading: Tuple[int, int],
        score: int,
        high_score: int,
        run_state: RunState,
        tile_count: int
    ):
        self.snake = snake
        self.food = food
        self.heading = heading
        self.score = score
        self.high_score = high_score
        self.run_state = run_state
        self.tile_count = tile_count

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is the top row, as on screen.
        """
        board = [['.' for _ in range(self.tile_count)] for _ in range(self.tile_count)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(board)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.tile_count)))
        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form (tuples become lists)."""
        return {
            "snake": [list(cell) for cell in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "heading": list(self.heading),
            "score": self.score,
            "high_score": self.high_score,
            "run_state": self.run_state.value,
            "tile_count": self.tile_count,
        }

    def __repr__(self):
        return (
            f"<GameState state={self.run_state.value}, score={self.score}, "
            f"length={len(self.snake)}, food={self.food}>"
        )
