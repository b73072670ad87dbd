"""
Game session: the fixed-period timer and the input handlers for one game.

The session is cooperative and single-threaded. Instead of a background
timer it remembers when the next step is due and runs every due step when
`advance()` is called; each input command advances first, so timer steps and
input are applied in the order they happened.
"""

import logging
import time
from typing import Callable, Optional, Tuple

from domain.constants import RunState
from domain.game_state import GameState
from services.controls import direction_for_key, direction_for_button

logger = logging.getLogger(__name__)


class GameSession:
    """
    Drives a SnakeGame from a monotonic clock.

    Args:
        game: SnakeGame instance owned by this session
        step_seconds: Fixed period between ticks
        max_catch_up_ticks: Most ticks a single advance() may run; steps
            overdue beyond that are dropped
        clock: Returns the current time in seconds (time.monotonic by default)
    """

    def __init__(
        self,
        game,
        step_seconds: float,
        max_catch_up_ticks: int = 5,
        clock: Optional[Callable[[], float]] = None
    ):
        if step_seconds <= 0:
            raise ValueError(f"step_seconds must be positive, got {step_seconds}")
        self.game = game
        self.step_seconds = step_seconds
        self.max_catch_up_ticks = max_catch_up_ticks
        self.clock = clock or time.monotonic
        self._last_tick_at: Optional[float] = None

    @property
    def timer_active(self) -> bool:
        return self._last_tick_at is not None

    def _sync_timer(self, now: float):
        """Register the timer when Running, deregister otherwise."""
        if self.game.run_state == RunState.RUNNING:
            if self._last_tick_at is None:
                self._last_tick_at = now
        else:
            self._last_tick_at = None

    def advance(self, now: Optional[float] = None) -> int:
        """
        Run every tick that has come due. Returns the number of ticks run.
        """
        if now is None:
            now = self.clock()
        if self._last_tick_at is None:
            return 0

        due = int((now - self._last_tick_at) / self.step_seconds)
        if due <= 0:
            return 0

        ran = 0
        for _ in range(min(due, self.max_catch_up_ticks)):
            self.game.tick()
            ran += 1
            if self.game.run_state != RunState.RUNNING:
                break

        if due > self.max_catch_up_ticks:
            logger.debug(f"Dropped {due - self.max_catch_up_ticks} overdue ticks")
            self._last_tick_at = now
        else:
            self._last_tick_at += due * self.step_seconds

        self._sync_timer(now)
        return ran

    def _command(self, action: Callable[[], object]):
        now = self.clock()
        self.advance(now)
        result = action()
        self._sync_timer(now)
        return result

    def set_heading(self, direction: Tuple[int, int]) -> bool:
        return self._command(lambda: self.game.set_heading(direction))

    def handle_key(self, key: str) -> bool:
        """Keyboard input; unmapped keys are ignored. Returns whether it was a game key."""
        direction = direction_for_key(key)
        if direction is None:
            return False
        self.set_heading(direction)
        return True

    def handle_button(self, button: str) -> bool:
        """On-screen direction button; also resumes a paused game."""
        direction = direction_for_button(button)
        if direction is None:
            return False

        def press():
            if self.game.run_state == RunState.PAUSED:
                self.game.resume()
            self.game.set_heading(direction)

        self._command(press)
        return True

    def start(self):
        """Start button; a finished game is reset first so it starts afresh."""
        def press():
            if self.game.run_state == RunState.OVER:
                self.game.reset()
            self.game.start()

        self._command(press)

    def pause(self):
        self._command(self.game.pause)

    def resume(self):
        self._command(self.game.resume)

    def reset(self):
        self._command(self.game.reset)

    def visibility_changed(self, hidden: bool):
        """A hidden page pauses a running game; showing it again does not resume."""
        if hidden:
            self.pause()
        else:
            self.advance()

    def snapshot(self) -> GameState:
        self.advance()
        return self.game.get_current_state()
