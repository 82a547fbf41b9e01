# Headless autopilot benchmark with summary table and optional matplotlib plots.
from __future__ import annotations

import argparse
import os

# Keep matplotlib cache local for environments without writable home config.
LOCAL_MPLCONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".mplconfig")
os.makedirs(LOCAL_MPLCONFIG, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", LOCAL_MPLCONFIG)

import matplotlib.pyplot as plt
import numpy as np

try:
    from .game_logic import MAX_GRID_SIZE, MIN_GRID_SIZE, GameStatus, SnakeConfig
    from .utils import (
        GameSummary,
        chunked_mean,
        encode_board_state,
        format_board,
        run_autopilot_game,
        summarize_scores,
    )
except ImportError:
    from game_logic import MAX_GRID_SIZE, MIN_GRID_SIZE, GameStatus, SnakeConfig
    from utils import (
        GameSummary,
        chunked_mean,
        encode_board_state,
        format_board,
        run_autopilot_game,
        summarize_scores,
    )


def _plot_results(lengths: list[float], cell_count: int) -> None:
    fig, (ax_trend, ax_hist) = plt.subplots(1, 2, figsize=(12, 4.5))

    ax_trend.set_title("Final Length (Average per 10 Games)")
    ax_trend.set_xlabel("Game")
    ax_trend.set_ylabel("Length")
    ax_trend.grid(alpha=0.25)
    x10, mean10 = chunked_mean(lengths, chunk_size=10)
    if x10.size > 0:
        ax_trend.plot(x10, mean10, color="#1f77b4", linewidth=2.2, marker="o", markersize=3)
    ax_trend.axhline(cell_count, color="#2ca02c", linestyle=":", linewidth=1.4, label="Board full")
    ax_trend.legend(loc="lower right")

    ax_hist.set_title("Final Length Distribution")
    ax_hist.set_xlabel("Length")
    ax_hist.set_ylabel("Count")
    ax_hist.grid(alpha=0.2)
    max_length = int(max(lengths))
    bins = np.arange(0.5, max_length + 1.5, 1.0)
    ax_hist.hist(lengths, bins=bins, color="#44b5a4", alpha=0.85, edgecolor="#17323a")
    mean_all = float(np.mean(lengths))
    median_all = float(np.median(lengths))
    ax_hist.axvline(mean_all, color="#1f77b4", linestyle="--", linewidth=1.6, label=f"Mean: {mean_all:.2f}")
    ax_hist.axvline(median_all, color="#ff7f0e", linestyle="-", linewidth=1.6, label=f"Median: {median_all:.2f}")
    ax_hist.legend(loc="upper left")

    fig.tight_layout()
    plt.show()


def _print_progress_bar(game_index: int, total: int, bar_length: int = 40) -> None:
    total_safe = max(1, int(total))
    percent = min(1.0, max(0.0, game_index / total_safe))
    filled = int(bar_length * percent)
    bar = "#" * filled + "-" * (bar_length - filled)
    print(f"\rProgress: |{bar}| {game_index}/{total_safe} ({percent * 100:.1f}%)", end="", flush=True)


def run_benchmark(
    grid_size: int,
    num_games: int,
    seed: int = 0,
    max_ticks: int | None = None,
) -> list[GameSummary]:
    """Play `num_games` seeded autopilot games; game i uses seed `seed + i`."""
    if num_games <= 0:
        raise ValueError("num_games must be > 0")

    cfg = SnakeConfig(grid_size=grid_size)
    tick_limit = max_ticks if max_ticks is not None else 4 * grid_size ** 3
    results: list[GameSummary] = []
    for game_index in range(num_games):
        results.append(run_autopilot_game(cfg, seed=seed + game_index, max_ticks=tick_limit))
        _print_progress_bar(game_index + 1, num_games)
    print()
    return results


def print_report(results: list[GameSummary], grid_size: int) -> None:
    cell_count = grid_size * grid_size
    lengths = [float(r.length) for r in results]
    scores = [float(r.score) for r in results]
    ticks = [float(r.ticks) for r in results]
    fallback_share = [r.fallback_ticks / r.ticks for r in results if r.ticks]

    print("=" * 60)
    print(f"AUTOPILOT BENCHMARK  {grid_size}x{grid_size}  ({len(results)} games)")
    print("=" * 60)
    print(f"{'Metric':<16} {'Length':>12} {'Score':>12} {'Ticks':>12}")
    print("-" * 60)
    stats = [summarize_scores(lengths), summarize_scores(scores), summarize_scores(ticks)]
    for key, label in (
        ("mean", "Mean"),
        ("median", "Median"),
        ("max", "Max"),
        ("min", "Min"),
        ("std", "Std dev"),
        ("p25", "25th percentile"),
        ("p75", "75th percentile"),
    ):
        print(f"{label:<16} {stats[0][key]:>12.2f} {stats[1][key]:>12.2f} {stats[2][key]:>12.2f}")
    print("=" * 60)

    victories = sum(1 for r in results if r.status is GameStatus.VICTORY)
    deaths = sum(1 for r in results if r.status is GameStatus.GAME_OVER)
    stalled = len(results) - victories - deaths
    print(f"Victories {victories}, game overs {deaths}, stalled {stalled}")
    print(f"Victory rate: {victories / len(results) * 100:.1f}%")
    print(f"Mean board coverage: {np.mean(lengths) / cell_count * 100:.1f}%")
    if fallback_share:
        print(f"Ticks decided by fallback: {np.mean(fallback_share) * 100:.1f}%")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark the Snake autopilot")
    parser.add_argument("--grid-size", type=int, default=10, help="Board side length")
    parser.add_argument("--games", type=int, default=50, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first game")
    parser.add_argument("--max-ticks", type=int, default=None, help="Stop a game after this many ticks")
    parser.add_argument("--no-plot", action="store_true", help="Disable matplotlib plots")
    parser.add_argument("--show-board", action="store_true", help="Print the final board of the longest game")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if not (MIN_GRID_SIZE <= args.grid_size <= MAX_GRID_SIZE):
        raise SystemExit(f"--grid-size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.")
    if args.games <= 0:
        raise SystemExit("--games must be > 0.")
    if args.max_ticks is not None and args.max_ticks <= 0:
        raise SystemExit("--max-ticks must be > 0.")

    print(f"Running {args.games} autopilot games on a {args.grid_size}x{args.grid_size} board...")
    results = run_benchmark(args.grid_size, args.games, seed=args.seed, max_ticks=args.max_ticks)
    print_report(results, args.grid_size)

    if args.show_board:
        best = max(results, key=lambda r: r.length)
        print(f"\nLongest game: length {best.length}, {best.status.value}")
        print(format_board(encode_board_state(best.final, args.grid_size)))

    if not args.no_plot:
        _plot_results([float(r.length) for r in results], args.grid_size * args.grid_size)


if __name__ == "__main__":
    main()
