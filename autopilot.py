# Autopilot: A* toward food, simulate-ahead self-trap check, serpentine fallback.
from __future__ import annotations

from dataclasses import dataclass

try:
    from .grid import Cell, Direction, GridModel, direction_between
    from .pathfinding import find_path
    from .snake_state import Outcome, SnakeState
except ImportError:
    from grid import Cell, Direction, GridModel, direction_between
    from pathfinding import find_path
    from snake_state import Outcome, SnakeState


SOURCE_PATH = "path"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class AutopilotDecision:
    direction: Direction
    source: str                       # SOURCE_PATH | SOURCE_FALLBACK
    path: tuple[Cell, ...] | None = None


class SafetySimulator:
    """Rejects food paths after which the snake could no longer reach its own tail."""

    def __init__(self, grid: GridModel) -> None:
        self.grid = grid

    def validate(self, path: list[Cell], snake: SnakeState) -> bool:
        if len(path) < 2:
            return False
        if path[0] != snake.head:
            raise ValueError(f"path starts at {path[0]}, expected snake head {snake.head}")

        food = path[-1]
        ghost = snake.copy()
        for step_from, step_to in zip(path, path[1:]):
            if ghost.advance(direction_between(step_from, step_to), food) is Outcome.COLLISION:
                return False
        return self.tail_reachable(ghost)

    def tail_reachable(self, snake: SnakeState) -> bool:
        """True if the head can still route to the tail cell once the tail moves off it."""
        # Eating the last free cell wins outright.
        if len(snake) == self.grid.cell_count:
            return True

        occupied = set(snake.occupied)
        occupied.discard(snake.tail)
        return find_path(self.grid, snake.head, snake.tail, occupied) is not None

    def keeps_tail_route(self, snake: SnakeState, direction: Direction, food: Cell | None) -> bool:
        """Single-step version of `validate` for moves that are not part of a food path."""
        ghost = snake.copy()
        if ghost.advance(direction, food) is Outcome.COLLISION:
            return False
        return self.tail_reachable(ghost)


def boustrophedon_direction(head: Cell, grid: GridModel) -> Direction:
    """Serpentine sweep: right along even rows, left along odd rows, down at row ends."""
    x, y = head
    if y % 2 == 0:
        return Direction.RIGHT if x < grid.size - 1 else Direction.DOWN
    return Direction.LEFT if x > 0 else Direction.DOWN


def food_priority(direction: Direction, head: Cell, food: Cell | None) -> int:
    """Lower is better: points at the food first, then follows the longer axis."""
    if food is None:
        return 0
    dx = food[0] - head[0]
    dy = food[1] - head[1]
    priority = 0
    if (
        (direction is Direction.RIGHT and dx > 0)
        or (direction is Direction.LEFT and dx < 0)
        or (direction is Direction.DOWN and dy > 0)
        or (direction is Direction.UP and dy < 0)
    ):
        priority -= 100
    horizontal = direction in (Direction.LEFT, Direction.RIGHT)
    if horizontal and abs(dx) > abs(dy):
        priority -= 50
    elif not horizontal and abs(dy) > abs(dx):
        priority -= 50
    return priority


class FallbackHeuristic:
    """Deterministic direction used when no verified-safe food path exists."""

    def __init__(self, grid: GridModel, simulator: SafetySimulator | None = None) -> None:
        self.grid = grid
        self.simulator = simulator if simulator is not None else SafetySimulator(grid)

    def _is_open(self, snake: SnakeState, direction: Direction, current_direction: Direction) -> bool:
        if direction is current_direction.opposite:
            return False
        return not snake.is_collision(snake.candidate_head(direction))

    def choose(self, snake: SnakeState, current_direction: Direction, food: Cell | None) -> Direction:
        preferred = boustrophedon_direction(snake.head, self.grid)
        if self._is_open(snake, preferred, current_direction):
            return preferred

        # Sweep is blocked (wall at the bottom row or own body): take any safe turn.
        open_turns = [
            d for d in Direction
            if d is not preferred and self._is_open(snake, d, current_direction)
        ]
        if not open_turns:
            # Boxed in; any move collides.
            return current_direction

        # Turns that keep a route to the tail come first; food alignment breaks ties.
        # min() returns the first minimum, so remaining ties keep enum order.
        return min(
            open_turns,
            key=lambda d: (
                not self.simulator.keeps_tail_route(snake, d, food),
                food_priority(d, snake.head, food),
            ),
        )


class Autopilot:
    """PathPlanner -> SafetySimulator -> FallbackHeuristic."""

    def __init__(self, grid: GridModel) -> None:
        self.grid = grid
        self.simulator = SafetySimulator(grid)
        self.fallback = FallbackHeuristic(grid, self.simulator)

    def decide(self, snake: SnakeState, current_direction: Direction, food: Cell | None) -> AutopilotDecision:
        if food is not None:
            path = find_path(self.grid, snake.head, food, snake.occupied)
            if path is not None and self.simulator.validate(path, snake):
                return AutopilotDecision(
                    direction=direction_between(path[0], path[1]),
                    source=SOURCE_PATH,
                    path=tuple(path),
                )

        direction = self.fallback.choose(snake, current_direction, food)
        return AutopilotDecision(direction=direction, source=SOURCE_FALLBACK)
