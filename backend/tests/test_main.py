"""
Tests for main.py - Snake game state machine.

Covers the run-state transitions, heading rules, the tick algorithm
(walls, self collision, growth, food placement) and high score handling.
"""

import pytest
import random
import sys
import os
from unittest.mock import MagicMock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import SnakeGame  # noqa: E402
from domain.constants import UP, DOWN, LEFT, RIGHT, NONE, RunState  # noqa: E402
from domain.game_state import GameState  # noqa: E402
from domain.snake import Snake  # noqa: E402
from services.highscore_store import MemoryHighScoreStore  # noqa: E402


def make_game(tile_count=20, high_score=0, seed=7):
    store = MemoryHighScoreStore(high_score)
    return SnakeGame(tile_count=tile_count, high_score_store=store, rng=random.Random(seed))


def place(game, snake, heading, food=None, run_state=RunState.RUNNING):
    """Put the game into an exact position for a scenario."""
    game.snake = Snake(snake)
    game.heading = heading
    if food is not None:
        game.food = food
    game.run_state = run_state


class TestInitialization:
    """Tests for construction and reset."""

    def test_game_starts_idle_at_center(self):
        game = make_game()

        assert game.run_state == RunState.IDLE
        assert list(game.snake.positions) == [(10, 10)]
        assert game.heading == NONE
        assert game.score == 0

    def test_food_is_on_board_and_off_snake(self):
        game = make_game()

        fx, fy = game.food
        assert 0 <= fx < 20 and 0 <= fy < 20
        assert game.food != (10, 10)

    def test_high_score_read_from_store(self):
        game = make_game(high_score=120)
        assert game.high_score == 120

    def test_tiny_board_rejected(self):
        with pytest.raises(ValueError):
            SnakeGame(tile_count=1)

    def test_reset_restores_initial_values_and_keeps_high_score(self):
        game = make_game(high_score=30)
        place(game, [(3, 3), (2, 3), (1, 3)], RIGHT)
        game.score = 50
        game.high_score = 50
        game.run_state = RunState.OVER

        game.reset()

        assert list(game.snake.positions) == [(10, 10)]
        assert len(game.snake) == 1
        assert game.score == 0
        assert game.heading == NONE
        assert game.run_state == RunState.IDLE
        assert game.high_score == 50
        assert game.food not in game.snake.positions

    def test_odd_board_center(self):
        game = make_game(tile_count=15)
        assert list(game.snake.positions) == [(7, 7)]


class TestRunStateTransitions:
    """Tests for start/pause/resume."""

    def test_start_from_idle_defaults_to_right(self):
        game = make_game()
        game.start()

        assert game.run_state == RunState.RUNNING
        assert game.heading == RIGHT

    def test_start_keeps_existing_heading(self):
        game = make_game()
        place(game, [(10, 10)], UP, run_state=RunState.PAUSED)

        game.start()

        assert game.run_state == RunState.RUNNING
        assert game.heading == UP

    def test_start_is_noop_when_over(self):
        game = make_game()
        game.run_state = RunState.OVER
        game.start()
        assert game.run_state == RunState.OVER

    def test_pause_and_resume(self):
        game = make_game()
        game.start()

        game.pause()
        assert game.run_state == RunState.PAUSED

        game.resume()
        assert game.run_state == RunState.RUNNING

    def test_pause_only_from_running(self):
        game = make_game()
        game.pause()
        assert game.run_state == RunState.IDLE

        game.run_state = RunState.OVER
        game.pause()
        assert game.run_state == RunState.OVER

    def test_resume_only_from_paused(self):
        game = make_game()
        game.resume()
        assert game.run_state == RunState.IDLE

        game.run_state = RunState.OVER
        game.resume()
        assert game.run_state == RunState.OVER

    def test_reset_from_over_returns_to_idle(self):
        game = make_game()
        game.run_state = RunState.OVER
        game.reset()
        assert game.run_state == RunState.IDLE


class TestSetHeading:
    """Tests for direction changes."""

    def test_first_direction_starts_idle_game(self):
        game = make_game()

        assert game.set_heading(UP) is True
        assert game.heading == UP
        assert game.run_state == RunState.RUNNING

    def test_any_direction_accepted_from_rest(self):
        for direction in (UP, DOWN, LEFT, RIGHT):
            game = make_game()
            assert game.set_heading(direction) is True
            assert game.heading == direction

    def test_reversal_is_ignored(self):
        game = make_game()
        place(game, [(10, 10), (9, 10)], RIGHT)

        assert game.set_heading(LEFT) is False
        assert game.heading == RIGHT

    @pytest.mark.parametrize("current,opposite", [
        (UP, DOWN), (DOWN, UP), (LEFT, RIGHT), (RIGHT, LEFT),
    ])
    def test_every_opposite_rejected(self, current, opposite):
        game = make_game()
        place(game, [(10, 10)], current)

        game.set_heading(opposite)

        assert game.heading == current

    def test_same_heading_is_noop(self):
        game = make_game()
        place(game, [(10, 10)], RIGHT)
        assert game.set_heading(RIGHT) is False

    def test_perpendicular_turn_accepted(self):
        game = make_game()
        place(game, [(10, 10), (9, 10)], RIGHT)

        assert game.set_heading(UP) is True
        assert game.heading == UP

    def test_ignored_when_over(self):
        game = make_game()
        place(game, [(10, 10)], RIGHT, run_state=RunState.OVER)

        assert game.set_heading(UP) is False
        assert game.heading == RIGHT
        assert game.run_state == RunState.OVER

    def test_paused_game_takes_heading_but_stays_paused(self):
        game = make_game()
        place(game, [(10, 10)], RIGHT, run_state=RunState.PAUSED)

        game.set_heading(DOWN)

        assert game.heading == DOWN
        assert game.run_state == RunState.PAUSED

    def test_invalid_direction_raises(self):
        game = make_game()
        with pytest.raises(ValueError):
            game.set_heading((1, 1))
        with pytest.raises(ValueError):
            game.set_heading(NONE)

    def test_list_direction_accepted(self):
        game = make_game()
        game.set_heading([0, -1])
        assert game.heading == UP


class TestTick:
    """Tests for the update step."""

    def test_eat_food_scenario(self):
        """N=20, snake [(10,10)], heading right, food (11,10)."""
        game = make_game()
        place(game, [(10, 10)], RIGHT, food=(11, 10))

        assert game.tick() is True

        assert list(game.snake.positions) == [(11, 10), (10, 10)]
        assert game.score == 10
        assert game.food not in {(11, 10), (10, 10)}
        assert game.run_state == RunState.RUNNING

    def test_wall_collision_scenario(self):
        """N=20, snake [(19,10)], heading right: wall hit, snake unchanged."""
        game = make_game()
        place(game, [(19, 10)], RIGHT, food=(0, 0))

        assert game.tick() is False

        assert game.run_state == RunState.OVER
        assert list(game.snake.positions) == [(19, 10)]

    @pytest.mark.parametrize("start,heading", [
        ((0, 5), LEFT), ((5, 0), UP), ((5, 19), DOWN), ((19, 5), RIGHT),
    ])
    def test_every_wall_ends_game(self, start, heading):
        game = make_game()
        place(game, [start], heading, food=(10, 10))

        game.tick()

        assert game.run_state == RunState.OVER
        assert list(game.snake.positions) == [start]

    def test_self_collision_scenario(self):
        """Snake [(5,5),(6,5),(6,6),(5,6)] heading into (6,5)."""
        game = make_game()
        body = [(5, 5), (6, 5), (6, 6), (5, 6)]
        place(game, body, RIGHT, food=(0, 0))

        game.tick()

        assert game.run_state == RunState.OVER
        assert list(game.snake.positions) == body

    def test_moving_into_tail_cell_is_collision(self):
        game = make_game()
        body = [(5, 5), (5, 6), (6, 6), (6, 5)]
        place(game, body, RIGHT, food=(0, 0))

        game.tick()

        assert game.run_state == RunState.OVER

    def test_plain_move_keeps_length(self):
        game = make_game()
        place(game, [(5, 5), (4, 5), (3, 5)], RIGHT, food=(0, 0))

        game.tick()

        assert list(game.snake.positions) == [(6, 5), (5, 5), (4, 5)]
        assert game.score == 0
        assert game.food == (0, 0)

    def test_tick_does_nothing_unless_running(self):
        for state in (RunState.IDLE, RunState.PAUSED, RunState.OVER):
            game = make_game()
            place(game, [(5, 5)], RIGHT, food=(0, 0), run_state=state)

            assert game.tick() is False
            assert list(game.snake.positions) == [(5, 5)]
            assert game.run_state == state

    def test_new_high_score_is_persisted(self):
        store = MagicMock()
        store.load.return_value = 0
        game = SnakeGame(high_score_store=store, rng=random.Random(1))
        place(game, [(10, 10)], RIGHT, food=(11, 10))

        game.tick()

        assert game.high_score == 10
        store.save.assert_called_once_with(10)

    def test_score_below_high_score_not_persisted(self):
        store = MagicMock()
        store.load.return_value = 100
        game = SnakeGame(high_score_store=store, rng=random.Random(1))
        place(game, [(10, 10)], RIGHT, food=(11, 10))

        game.tick()

        assert game.score == 10
        assert game.high_score == 100
        store.save.assert_not_called()

    def test_custom_reward(self):
        game = SnakeGame(food_reward=25, rng=random.Random(3))
        place(game, [(10, 10)], RIGHT, food=(11, 10))

        game.tick()

        assert game.score == 25

    def test_full_board_ends_game_without_food(self):
        game = make_game(tile_count=2)
        place(game, [(0, 1), (0, 0), (1, 0)], RIGHT, food=(1, 1))

        game.tick()

        assert game.food is None
        assert game.run_state == RunState.OVER
        assert len(game.snake) == 4


class TestInvariants:
    """Random play: properties that hold in every reachable state."""

    def test_random_play_keeps_invariants(self):
        rng = random.Random(2024)
        game = make_game(tile_count=8, seed=11)
        high_scores = [game.high_score]

        for _ in range(3000):
            if game.run_state == RunState.OVER:
                game.reset()
            if rng.random() < 0.3:
                game.set_heading(rng.choice([UP, DOWN, LEFT, RIGHT]))
            if game.run_state == RunState.IDLE:
                game.start()

            score_before = game.score
            food_before = game.food
            head_before = game.snake.head
            dx, dy = game.heading
            moved = game.tick()

            if moved and (head_before[0] + dx, head_before[1] + dy) == food_before:
                assert game.score == score_before + 10
            else:
                assert game.score == score_before

            if game.run_state != RunState.OVER:
                cells = list(game.snake.positions)
                assert all(0 <= x < 8 and 0 <= y < 8 for x, y in cells)
                assert len(set(cells)) == len(cells)
                assert game.food not in cells

            high_scores.append(game.high_score)

        assert high_scores == sorted(high_scores)


class TestSnapshot:
    """Tests for get_current_state()."""

    def test_snapshot_contents(self):
        game = make_game(high_score=40)
        place(game, [(3, 3), (2, 3)], RIGHT, food=(7, 7))
        game.score = 20

        state = game.get_current_state()

        assert isinstance(state, GameState)
        assert state.snake == [(3, 3), (2, 3)]
        assert state.food == (7, 7)
        assert state.heading == RIGHT
        assert state.score == 20
        assert state.high_score == 40
        assert state.run_state == RunState.RUNNING
        assert state.tile_count == 20

    def test_snapshot_is_detached_from_game(self):
        game = make_game()
        place(game, [(3, 3)], RIGHT, food=(7, 7))
        state = game.get_current_state()

        game.tick()

        assert state.snake == [(3, 3)]
