# Core Snake game state and rules, independent from GUI/benchmark code.
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import random

try:
    from .autopilot import Autopilot, AutopilotDecision
    from .grid import Cell, Direction, GridModel
    from .snake_state import INITIAL_LENGTH, Outcome, SnakeState, initial_body
except ImportError:
    from autopilot import Autopilot, AutopilotDecision
    from grid import Cell, Direction, GridModel
    from snake_state import INITIAL_LENGTH, Outcome, SnakeState, initial_body


# Bounds used when validating settings from the GUI and CLI.
MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 60
MIN_CELL_SIZE = 8
MAX_CELL_SIZE = 48
MIN_SPEED_MS = 20
MAX_SPEED_MS = 1000
FOOD_REWARD = 10


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer and GUI."""
    grid_size: int = 20
    cell_size: int = 25
    speed_ms: int = 200
    food_reward: int = FOOD_REWARD
    autopilot: bool = False
    seed: int | None = None

    def validate(self) -> None:
        if not (MIN_GRID_SIZE <= self.grid_size <= MAX_GRID_SIZE):
            raise ValueError(f"Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.")
        if not (MIN_CELL_SIZE <= self.cell_size <= MAX_CELL_SIZE):
            raise ValueError(f"Cell size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}.")
        if not (MIN_SPEED_MS <= self.speed_ms <= MAX_SPEED_MS):
            raise ValueError(f"Speed must be between {MIN_SPEED_MS} and {MAX_SPEED_MS} ms.")
        if self.food_reward < 0:
            raise ValueError("Food reward must be >= 0.")


class GameStatus(str, Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"
    VICTORY = "victory"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.RUNNING


@dataclass(frozen=True)
class TickResult:
    outcome: Outcome
    status: GameStatus


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to renderers."""
    body: tuple[Cell, ...]       # tail first, head last
    food: Cell | None
    score: int
    status: GameStatus
    direction: Direction
    autopilot: bool

    @property
    def head(self) -> Cell:
        return self.body[-1]


class FoodGenerator:
    """Places food on a uniformly random free cell."""

    def __init__(self, grid: GridModel, rng: random.Random) -> None:
        self.grid = grid
        self.rng = rng

    def generate(self, occupied: set[Cell]) -> Cell | None:
        """Return a free cell, or None when the board is full (victory)."""
        free_cells = [cell for cell in self.grid.cells() if cell not in occupied]
        if not free_cells:
            return None
        return self.rng.choice(free_cells)


class InputController:
    """Buffers the next direction; the buffered value is applied once per move."""

    def __init__(self, direction: Direction = Direction.RIGHT) -> None:
        self.current_direction = direction
        self.next_direction = direction

    def request_turn(self, direction: Direction | str) -> bool:
        """Queue a direction; instant 180-degree turns and unknown names are ignored."""
        try:
            direction = Direction(direction)
        except ValueError:
            return False
        if direction is self.current_direction.opposite:
            return False
        self.next_direction = direction
        return True

    def commit(self) -> Direction:
        self.current_direction = self.next_direction
        return self.current_direction


class SnakeGame:
    """Fixed-interval tick driver owning the snake, food, score and status."""

    def __init__(
        self,
        config: SnakeConfig | None = None,
        rng: random.Random | None = None,
        now_ms: float = 0.0,
    ) -> None:
        self.config = config if config is not None else SnakeConfig()
        self.config.validate()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.autopilot_enabled = self.config.autopilot
        self.last_move_ms = now_ms
        self.initialize(self.config.grid_size, now_ms)

    def initialize(self, grid_size: int, now_ms: float | None = None) -> None:
        """(Re)build the board for a new grid size and start a fresh game.

        The move clock is kept unless `now_ms` is given, as in `reset`.
        """
        if not (MIN_GRID_SIZE <= grid_size <= MAX_GRID_SIZE):
            raise ValueError(f"Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.")
        self.config.grid_size = grid_size
        self.grid = GridModel(grid_size)
        self.autopilot = Autopilot(self.grid)
        self.reset(now_ms)

    def reset(self, now_ms: float | None = None) -> None:
        """Start over with a fresh 3-cell snake, new food, score 0."""
        # Build everything first so a half-reset game is never visible.
        snake = SnakeState(self.grid, initial_body(self.grid.size, INITIAL_LENGTH))
        controls = InputController(Direction.RIGHT)
        food_generator = FoodGenerator(self.grid, self.rng)
        food = food_generator.generate(snake.occupied)

        self.snake = snake
        self.controls = controls
        self.food_generator = food_generator
        self.food = food
        self.score = 0
        self.status = GameStatus.RUNNING if food is not None else GameStatus.VICTORY
        self.last_decision: AutopilotDecision | None = None
        if now_ms is not None:
            self.last_move_ms = now_ms

    def request_turn(self, direction: Direction | str) -> bool:
        if self.status.is_terminal:
            return False
        return self.controls.request_turn(direction)

    def set_autopilot(self, enabled: bool) -> None:
        self.autopilot_enabled = bool(enabled)

    def resume(self, now_ms: float) -> None:
        """Restart the move interval from `now_ms`, e.g. after a pause."""
        self.last_move_ms = now_ms

    def tick(self, now_ms: float) -> TickResult:
        """Apply at most one move if `speed_ms` has elapsed since the last one."""
        if self.status.is_terminal:
            return TickResult(Outcome.IDLE, self.status)
        if now_ms - self.last_move_ms < self.config.speed_ms:
            return TickResult(Outcome.IDLE, self.status)
        self.last_move_ms = now_ms
        return self.step()

    def step(self) -> TickResult:
        """Advance one cell immediately, ignoring the tick interval."""
        if self.status.is_terminal:
            return TickResult(Outcome.IDLE, self.status)

        if self.autopilot_enabled:
            decision = self.autopilot.decide(self.snake, self.controls.current_direction, self.food)
            self.last_decision = decision
            self.controls.request_turn(decision.direction)

        direction = self.controls.commit()
        outcome = self.snake.advance(direction, self.food)

        if outcome is Outcome.COLLISION:
            self.status = GameStatus.GAME_OVER
        elif outcome is Outcome.ATE:
            self.score += self.config.food_reward
            self.food = self.food_generator.generate(self.snake.occupied)
            if self.food is None:
                self.status = GameStatus.VICTORY

        return TickResult(outcome, self.status)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            body=tuple(self.snake.body),
            food=self.food,
            score=self.score,
            status=self.status,
            direction=self.controls.current_direction,
            autopilot=self.autopilot_enabled,
        )
