"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, Tuple


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: Iterable[Tuple[int, int]]):
        self.positions = deque(positions)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def occupies(self, cell: Tuple[int, int]) -> bool:
        return cell in self.positions

    def __len__(self) -> int:
        return len(self.positions)
