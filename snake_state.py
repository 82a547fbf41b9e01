# Snake body storage and the single move operation that mutates it.
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Iterable

try:
    from .grid import Cell, Direction, GridModel
except ImportError:
    from grid import Cell, Direction, GridModel


INITIAL_LENGTH = 3


class Outcome(str, Enum):
    IDLE = "idle"            # tick arrived too early or the game is over
    MOVED = "moved"
    ATE = "ate"
    COLLISION = "collision"  # wall or own body; nothing was mutated


def initial_body(size: int, length: int = INITIAL_LENGTH) -> list[Cell]:
    """Horizontal body on the middle row, tail first, heading right."""
    row = size // 2
    tail_x = size // 4
    # Fallback for tiny boards where the default column would overflow.
    if tail_x + length > size:
        tail_x = max(0, (size - length) // 2)
    return [(tail_x + i, row) for i in range(length)]


class SnakeState:
    """Ordered body (tail at index 0, head at -1) mirrored by an occupancy set."""

    def __init__(self, grid: GridModel, body: Iterable[Cell]) -> None:
        self.grid = grid
        self.body: deque[Cell] = deque()   # ordered body, head at the right end
        self.occupied: set[Cell] = set()   # O(1) body collision lookup
        for cell in body:
            if not grid.in_bounds(cell):
                raise ValueError(f"body cell {cell} is outside the {grid.size}x{grid.size} grid")
            if cell in self.occupied:
                raise ValueError(f"body cell {cell} appears more than once")
            self.body.append(cell)
            self.occupied.add(cell)
        if not self.body:
            raise ValueError("snake body cannot be empty")

    @property
    def head(self) -> Cell:
        return self.body[-1]

    @property
    def tail(self) -> Cell:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def __contains__(self, cell: object) -> bool:
        return cell in self.occupied

    def copy(self) -> SnakeState:
        clone = SnakeState.__new__(SnakeState)
        clone.grid = self.grid
        clone.body = deque(self.body)
        clone.occupied = set(self.occupied)
        return clone

    def candidate_head(self, direction: Direction) -> Cell:
        return self.grid.shift(self.head, direction)

    def is_collision(self, cell: Cell) -> bool:
        return not self.grid.in_bounds(cell) or cell in self.occupied

    def advance(self, direction: Direction, food: Cell | None) -> Outcome:
        """Move one cell. Returns COLLISION without touching the body if the move is fatal."""
        new_head = self.candidate_head(direction)

        # The current tail counts as occupied: it only frees up after the move.
        if self.is_collision(new_head):
            return Outcome.COLLISION

        self.body.append(new_head)
        self.occupied.add(new_head)

        if new_head == food:
            return Outcome.ATE

        old_tail = self.body.popleft()
        self.occupied.discard(old_tail)
        return Outcome.MOVED
