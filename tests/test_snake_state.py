import pytest

from game_logic import InputController
from grid import Direction, GridModel
from snake_state import Outcome, SnakeState, initial_body


def make_snake(size, body):
    return SnakeState(GridModel(size), body)


def test_initial_body_positions():
    assert initial_body(20) == [(5, 10), (6, 10), (7, 10)]
    assert initial_body(5) == [(1, 2), (2, 2), (3, 2)]
    assert initial_body(3) == [(0, 1), (1, 1), (2, 1)]


def test_head_is_last_and_tail_is_first():
    snake = make_snake(5, [(1, 2), (2, 2), (3, 2)])
    assert snake.head == (3, 2)
    assert snake.tail == (1, 2)
    assert len(snake) == 3
    assert (2, 2) in snake


def test_advance_moves_and_drops_tail():
    snake = make_snake(5, [(1, 2), (2, 2), (3, 2)])
    outcome = snake.advance(Direction.RIGHT, food=(0, 0))
    assert outcome is Outcome.MOVED
    assert list(snake.body) == [(2, 2), (3, 2), (4, 2)]
    assert snake.occupied == {(2, 2), (3, 2), (4, 2)}


def test_advance_onto_food_keeps_tail():
    snake = make_snake(5, [(1, 2), (2, 2), (3, 2)])
    outcome = snake.advance(Direction.RIGHT, food=(4, 2))
    assert outcome is Outcome.ATE
    assert list(snake.body) == [(1, 2), (2, 2), (3, 2), (4, 2)]
    assert len(snake.occupied) == 4


def test_wall_collision_does_not_mutate():
    snake = make_snake(4, [(1, 2), (2, 2), (3, 2)])
    outcome = snake.advance(Direction.RIGHT, food=None)
    assert outcome is Outcome.COLLISION
    assert list(snake.body) == [(1, 2), (2, 2), (3, 2)]
    assert snake.occupied == {(1, 2), (2, 2), (3, 2)}


def test_moving_into_current_tail_collides():
    snake = make_snake(5, [(1, 1), (2, 1), (2, 2), (1, 2)])
    outcome = snake.advance(Direction.UP, food=None)
    assert outcome is Outcome.COLLISION
    assert len(snake) == 4


def test_reversal_request_keeps_heading_down():
    snake = make_snake(4, [(0, 0), (0, 1)])
    controls = InputController(Direction.DOWN)
    assert controls.request_turn(Direction.UP) is False
    assert controls.next_direction is Direction.DOWN

    direction = controls.commit()
    assert snake.advance(direction, food=None) is Outcome.MOVED
    assert snake.head == (0, 2)


def test_reversal_request_on_tiny_grid_still_heads_into_wall():
    snake = make_snake(2, [(0, 0), (0, 1)])
    controls = InputController(Direction.DOWN)
    controls.request_turn("up")
    assert snake.advance(controls.commit(), food=None) is Outcome.COLLISION


def test_copy_is_independent():
    snake = make_snake(5, [(1, 2), (2, 2), (3, 2)])
    clone = snake.copy()
    clone.advance(Direction.UP, food=None)
    assert list(snake.body) == [(1, 2), (2, 2), (3, 2)]
    assert clone.head == (3, 1)


def test_rejects_duplicate_and_out_of_bounds_cells():
    with pytest.raises(ValueError):
        make_snake(5, [(1, 1), (1, 1)])
    with pytest.raises(ValueError):
        make_snake(3, [(0, 0), (3, 0)])
    with pytest.raises(ValueError):
        make_snake(3, [])
