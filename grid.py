# Grid coordinates, directions, and bounds checks shared by the game and autopilot.
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


Cell = tuple[int, int]


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Cell:
        return DIRECTION_DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return REVERSE_DIRECTION[self]


# y grows downward, so Up moves toward row 0.
DIRECTION_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}
REVERSE_DIRECTION = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class GridModel:
    """Square lattice of `size` x `size` cells."""
    size: int

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("grid size must be >= 1")

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def shift(self, cell: Cell, direction: Direction) -> Cell:
        """Translate a cell by one tile; the result may lie outside the grid."""
        dx, dy = direction.delta
        return cell[0] + dx, cell[1] + dy

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """In-bounds 4-neighbours, always yielded in Up, Down, Left, Right order."""
        for direction in Direction:
            candidate = self.shift(cell, direction)
            if self.in_bounds(candidate):
                yield candidate

    def cells(self) -> Iterator[Cell]:
        for x in range(self.size):
            for y in range(self.size):
                yield x, y


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def direction_between(src: Cell, dst: Cell) -> Direction:
    """Direction of a single step from `src` to the adjacent cell `dst`."""
    delta = (dst[0] - src[0], dst[1] - src[1])
    for direction, step in DIRECTION_DELTAS.items():
        if step == delta:
            return direction
    raise ValueError(f"cells {src} and {dst} are not adjacent")
