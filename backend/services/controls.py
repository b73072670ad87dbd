"""
Input mapping: device events to game directions.

Keyboard keys follow the browser's KeyboardEvent.key names (arrow keys and
WASD, any case); on-screen buttons send "up", "down", "left" or "right".
"""

from typing import Dict, Optional, Tuple

from domain.constants import UP, DOWN, LEFT, RIGHT, RunState

KEY_DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "arrowup": UP,
    "w": UP,
    "arrowdown": DOWN,
    "s": DOWN,
    "arrowleft": LEFT,
    "a": LEFT,
    "arrowright": RIGHT,
    "d": RIGHT,
}

BUTTON_DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}

START_BUTTON_LABELS = {
    RunState.IDLE: "Start",
    RunState.RUNNING: "Playing...",
    RunState.PAUSED: "Resume",
    RunState.OVER: "Game Over - Restart",
}


def direction_for_key(key: Optional[str]) -> Optional[Tuple[int, int]]:
    """Direction for a key name, or None for keys the game ignores."""
    if not key:
        return None
    return KEY_DIRECTIONS.get(key.strip().lower())


def direction_for_button(button: Optional[str]) -> Optional[Tuple[int, int]]:
    if not button:
        return None
    return BUTTON_DIRECTIONS.get(button.strip().lower())


def start_button_label(run_state: RunState) -> str:
    return START_BUTTON_LABELS[run_state]
