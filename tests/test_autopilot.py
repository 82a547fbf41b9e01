import random

import pytest

from autopilot import (
    SOURCE_FALLBACK,
    SOURCE_PATH,
    Autopilot,
    FallbackHeuristic,
    SafetySimulator,
    boustrophedon_direction,
    food_priority,
)
from game_logic import SnakeConfig, SnakeGame
from grid import Direction, GridModel
from snake_state import SnakeState

# Head at (0, 1) with food in the (0, 0) corner; eating it walls the head in.
TRAP_BODY = [
    (4, 4), (4, 3), (4, 2), (4, 1), (4, 0), (3, 0), (2, 0),
    (1, 0), (1, 1), (1, 2), (0, 2), (0, 1),
]
# 3x3 serpentine leaving only (2, 2) free.
ALMOST_FULL_BODY = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2)]
# Head at (2, 2) heading left. Turning up toward the food seals the head in
# at (2, 1); turning down keeps the freed (1, 3) corner next to the tail.
POCKET_BODY = [
    (1, 3), (1, 2), (1, 1), (1, 0), (2, 0), (3, 0), (3, 1), (3, 2), (2, 2),
]


def test_boustrophedon_sweep():
    grid = GridModel(5)
    assert boustrophedon_direction((0, 0), grid) is Direction.RIGHT
    assert boustrophedon_direction((2, 2), grid) is Direction.RIGHT
    assert boustrophedon_direction((4, 0), grid) is Direction.DOWN
    assert boustrophedon_direction((4, 1), grid) is Direction.LEFT
    assert boustrophedon_direction((2, 3), grid) is Direction.LEFT
    assert boustrophedon_direction((0, 1), grid) is Direction.DOWN


def test_food_priority_prefers_pointing_at_food():
    head, food = (2, 2), (2, 0)
    assert food_priority(Direction.UP, head, food) == -150
    assert food_priority(Direction.LEFT, head, food) == 0
    assert food_priority(Direction.UP, head, None) == 0


def test_simulator_accepts_open_meal():
    grid = GridModel(5)
    snake = SnakeState(grid, [(1, 2), (2, 2), (3, 2)])
    assert SafetySimulator(grid).validate([(3, 2), (4, 2)], snake) is True


def test_simulator_rejects_self_trap():
    grid = GridModel(5)
    snake = SnakeState(grid, TRAP_BODY)
    assert SafetySimulator(grid).validate([(0, 1), (0, 0)], snake) is False


def test_simulator_accepts_board_filling_meal():
    grid = GridModel(3)
    snake = SnakeState(grid, ALMOST_FULL_BODY)
    assert SafetySimulator(grid).validate([(1, 2), (2, 2)], snake) is True


def test_simulator_does_not_touch_live_snake():
    grid = GridModel(5)
    snake = SnakeState(grid, [(1, 2), (2, 2), (3, 2)])
    SafetySimulator(grid).validate([(3, 2), (3, 3), (3, 4)], snake)
    assert list(snake.body) == [(1, 2), (2, 2), (3, 2)]


def test_simulator_rejects_bad_paths():
    grid = GridModel(5)
    snake = SnakeState(grid, [(1, 2), (2, 2), (3, 2)])
    simulator = SafetySimulator(grid)
    assert simulator.validate([(3, 2)], snake) is False
    with pytest.raises(ValueError):
        simulator.validate([(0, 0), (1, 0)], snake)


def test_fallback_follows_sweep_when_open():
    grid = GridModel(5)
    snake = SnakeState(grid, [(0, 0), (1, 0), (2, 0)])
    assert FallbackHeuristic(grid).choose(snake, Direction.RIGHT, None) is Direction.RIGHT


def test_fallback_turns_away_from_bottom_wall():
    grid = GridModel(4)
    snake = SnakeState(grid, [(0, 3), (1, 3), (2, 3), (3, 3)])
    # Sweep says left, which reverses into the neck; down and right leave the board.
    assert FallbackHeuristic(grid).choose(snake, Direction.RIGHT, None) is Direction.UP


def test_fallback_keeps_heading_when_boxed_in():
    grid = GridModel(3)
    snake = SnakeState(grid, [(1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 0)])
    assert FallbackHeuristic(grid).choose(snake, Direction.UP, (2, 2)) is Direction.UP


def test_keeps_tail_route_single_step():
    grid = GridModel(5)
    snake = SnakeState(grid, POCKET_BODY)
    simulator = SafetySimulator(grid)
    assert simulator.keeps_tail_route(snake, Direction.UP, (0, 0)) is False
    assert simulator.keeps_tail_route(snake, Direction.DOWN, (0, 0)) is True
    # Straight ahead is the body.
    assert simulator.keeps_tail_route(snake, Direction.LEFT, (0, 0)) is False
    assert list(snake.body) == POCKET_BODY


def test_fallback_prefers_tail_route_over_food():
    grid = GridModel(5)
    snake = SnakeState(grid, POCKET_BODY)
    # Sweep says right, a reversal. Up points at the food but cuts off the tail.
    assert food_priority(Direction.UP, snake.head, (0, 0)) < food_priority(Direction.DOWN, snake.head, (0, 0))
    assert FallbackHeuristic(grid).choose(snake, Direction.LEFT, (0, 0)) is Direction.DOWN


def test_fallback_uses_food_order_when_both_turns_keep_tail_route():
    grid = GridModel(5)
    snake = SnakeState(grid, [(1, 1), (1, 0), (2, 0), (2, 1)])
    # Sweep says left into the tail cell; down and right both leave the tail reachable.
    fallback = FallbackHeuristic(grid)
    assert fallback.choose(snake, Direction.DOWN, (4, 1)) is Direction.RIGHT
    assert fallback.choose(snake, Direction.DOWN, (2, 4)) is Direction.DOWN


def test_autopilot_takes_safe_path_to_food():
    grid = GridModel(5)
    snake = SnakeState(grid, [(1, 2), (2, 2), (3, 2)])
    decision = Autopilot(grid).decide(snake, Direction.RIGHT, (4, 2))
    assert decision.source == SOURCE_PATH
    assert decision.direction is Direction.RIGHT
    assert decision.path == ((3, 2), (4, 2))


def test_autopilot_falls_back_on_unsafe_path():
    grid = GridModel(5)
    snake = SnakeState(grid, TRAP_BODY)
    decision = Autopilot(grid).decide(snake, Direction.UP, (0, 0))
    assert decision.source == SOURCE_FALLBACK
    assert decision.path is None


def test_autopilot_falls_back_without_food():
    grid = GridModel(5)
    snake = SnakeState(grid, [(0, 0), (1, 0), (2, 0)])
    decision = Autopilot(grid).decide(snake, Direction.RIGHT, None)
    assert decision.source == SOURCE_FALLBACK
    assert decision.direction is Direction.RIGHT


def test_autopilot_falls_back_when_food_unreachable():
    grid = GridModel(5)
    # Body seals off the right column; food sits behind it.
    body = [(3, 0), (3, 1), (3, 2), (3, 3), (3, 4), (2, 4)]
    snake = SnakeState(grid, body)
    decision = Autopilot(grid).decide(snake, Direction.LEFT, (4, 0))
    assert decision.source == SOURCE_FALLBACK


@pytest.mark.parametrize("seed", range(6))
def test_fallback_turns_keep_tail_route_when_possible(seed):
    game = SnakeGame(SnakeConfig(grid_size=8, autopilot=True), rng=random.Random(seed))
    simulator = SafetySimulator(game.grid)
    for _ in range(2000):
        if game.status.is_terminal:
            break
        snake = game.snake.copy()
        heading = game.controls.current_direction
        food = game.food
        game.step()

        decision = game.last_decision
        if decision.source != SOURCE_FALLBACK:
            continue
        sweep = boustrophedon_direction(snake.head, game.grid)
        if decision.direction is sweep:
            continue
        turns = [
            d for d in Direction
            if d is not heading.opposite and not snake.is_collision(snake.candidate_head(d))
        ]
        if any(simulator.keeps_tail_route(snake, d, food) for d in turns):
            assert simulator.keeps_tail_route(snake, decision.direction, food)
