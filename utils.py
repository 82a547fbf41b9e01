# Shared headless helpers: board encoding, autopilot game runs, and score statistics.
from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Callable

import numpy as np

try:
    from .autopilot import SOURCE_FALLBACK
    from .game_logic import GameStatus, SnakeConfig, SnakeGame, Snapshot
except ImportError:
    from autopilot import SOURCE_FALLBACK
    from game_logic import GameStatus, SnakeConfig, SnakeGame, Snapshot


EMPTY_VALUE = 0.0
FOOD_VALUE = 0.5
BODY_VALUE = -0.5
HEAD_VALUE = 1.0
BOARD_GLYPHS = {EMPTY_VALUE: ".", FOOD_VALUE: "*", BODY_VALUE: "o", HEAD_VALUE: "@"}


@dataclass
class GameSummary:
    score: int
    length: int
    ticks: int
    status: GameStatus
    fallback_ticks: int
    final: Snapshot


def encode_board_state(snapshot: Snapshot, grid_size: int) -> np.ndarray:
    """
    Board encoding indexed as board[y, x]:
    - 0.0: empty
    - 0.5: food
    - -0.5: snake body
    - 1.0: snake head
    """
    board = np.zeros((grid_size, grid_size), dtype=np.float32)

    if snapshot.food is not None:
        fx, fy = snapshot.food
        board[fy, fx] = FOOD_VALUE

    for x, y in snapshot.body:
        board[y, x] = BODY_VALUE
    hx, hy = snapshot.head
    board[hy, hx] = HEAD_VALUE

    return board


def format_board(board: np.ndarray) -> str:
    """Render an encoded board as text, one row per line."""
    rows = []
    for row in board:
        rows.append("".join(BOARD_GLYPHS.get(float(value), "?") for value in row))
    return "\n".join(rows)


def run_autopilot_game(
    cfg: SnakeConfig,
    seed: int | None = None,
    max_ticks: int = 10_000,
    on_step: Callable[[SnakeGame, int], None] | None = None,
) -> GameSummary:
    """Play one full autopilot game without a clock; stops at a terminal state or `max_ticks`."""
    if max_ticks <= 0:
        raise ValueError("max_ticks must be > 0")

    game = SnakeGame(cfg, rng=random.Random(seed))
    game.set_autopilot(True)

    ticks = 0
    fallback_ticks = 0
    while ticks < max_ticks and not game.status.is_terminal:
        game.step()
        ticks += 1
        if game.last_decision is not None and game.last_decision.source == SOURCE_FALLBACK:
            fallback_ticks += 1
        if on_step is not None:
            on_step(game, ticks)

    return GameSummary(
        score=game.score,
        length=len(game.snake),
        ticks=ticks,
        status=game.status,
        fallback_ticks=fallback_ticks,
        final=game.snapshot(),
    )


def summarize_scores(values: list[float]) -> dict[str, float]:
    if not values:
        raise ValueError("values cannot be empty")
    arr = np.asarray(values, dtype=np.float32)
    return {
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "max": float(arr.max()),
        "min": float(arr.min()),
        "std": float(arr.std()),
        "p25": float(np.percentile(arr, 25)),
        "p75": float(np.percentile(arr, 75)),
    }


def chunked_mean(values: list[float], chunk_size: int) -> tuple[np.ndarray, np.ndarray]:
    """Compute mean value per fixed-size chunk."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    arr = np.asarray(values, dtype=np.float32)
    if arr.size == 0:
        empty = np.array([], dtype=np.float32)
        return empty, empty

    x_end: list[float] = []
    means: list[float] = []
    for start in range(0, arr.size, chunk_size):
        chunk = arr[start : start + chunk_size]
        x_end.append(float(start + chunk.size))
        means.append(float(np.mean(chunk)))

    return np.asarray(x_end, dtype=np.float32), np.asarray(means, dtype=np.float32)
