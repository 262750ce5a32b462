"""Benchmarking tools: how much of a board pure deduction can clear."""

from collections import defaultdict
from typing import Dict, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .cli import format_board
from .engine import Board, GameState
from .solver import MinesweeperSolver

# Standard difficulty levels: name -> (width, height, mines)
LEVELS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (30, 16, 99),
}


def format_solver_knowledge(board: Board, *, show_coords: bool = True) -> str:
    """
    Format what a player currently sees on the board.

    Args:
        board: Board to display.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where hidden cells are '.', flags 'F' and revealed
        cells their number.
    """
    text = format_board(board, reveal_all=False)
    if show_coords:
        return text
    # Drop the two header lines and the "yy |" row labels.
    return "\n".join(line[4:] for line in text.splitlines()[2:])


def run_solver_single_test(
    width: int,
    height: int,
    mines_count: int,
    *,
    show_boards: bool = False,
) -> Dict[str, object]:
    """
    Run the deduction solver once on a fresh board.

    Args:
        width: Board width.
        height: Board height.
        mines_count: Total number of mines on the board.
        show_boards: If True, print the underlying board and what the solver
            uncovered.

    Returns:
        Metrics of the run:
        - status: "won" if deduction cleared the board, "stalled" otherwise
        - revealed_cells_count, markings_count, reveal_moves_count, passes_count
        - clear_ratio: fraction of safe cells revealed
    """
    board = Board(width, height, mines_count)
    solver = MinesweeperSolver(board)
    solver.reveal_revealable()
    # One more rebuild so every mine provable from the final clues is flagged.
    solver.flag_bombs()

    if board.game_state is GameState.LOST:
        raise RuntimeError("The deduction solver revealed a mine.")

    if show_boards:
        print("Underlying board (mines visible):")
        print(format_board(board, reveal_all=True))
        print()
        print("Solver knowledge (hidden shown as '.'):")
        print(format_solver_knowledge(board))
        print()
        print(f"Finished in state {board.game_state.value}.")

    return {
        "status": "won" if board.game_state is GameState.WON else "stalled",
        "revealed_cells_count": board.revealed_count,
        "markings_count": board.flagged_count,
        "reveal_moves_count": solver.reveal_moves_count,
        "passes_count": solver.passes_count,
        "clear_ratio": board.revealed_count / board.safe_cells_count,
    }


def run_solver_many_tests(
    width: int,
    height: int,
    mines_count: int,
    runs: int,
) -> Dict[str, float]:
    """
    Run many independent games and return averaged metrics plus win rate.

    Args:
        width: Board width.
        height: Board height.
        mines_count: Total number of mines on the board.
        runs: Number of independent games to run.

    Returns:
        Averages of the single-run metrics (prefixed with "avg_"), plus
        ``win_rate``: share of boards cleared without a single guess.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    sums: Dict[str, float] = defaultdict(float)
    wins = 0

    for _ in range(runs):
        payload = run_solver_single_test(width, height, mines_count)
        if payload["status"] == "won":
            wins += 1
        for k, v in payload.items():
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                sums[f"avg_{k}"] += float(v)

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    out["win_rate"] = wins / runs
    return out


def run_solver_expert_level_analysis(
    runs: int, *, show: bool = True
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated solver tests on the standard difficulty levels and plot summaries.

    Args:
        runs: Number of independent games to run per difficulty level.
        show: If True, display the charts with ``plt.show()``.

    Returns:
        Mapping from level name to statistics dict returned by run_solver_many_tests().
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, (w, h, m) in LEVELS.items():
        results[level] = run_solver_many_tests(w, h, m, runs)

    level_names = list(LEVELS.keys())
    x = np.arange(len(level_names))

    # 1) Share of safe cells cleared by deduction
    clear_ratios = [results[n]["avg_clear_ratio"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, clear_ratios)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average share of safe cells revealed")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Deduction coverage by difficulty level")  # type: ignore[misc]
    plt.tight_layout()

    # 2) Moves and flags
    bar_w = 0.35
    moves = [results[n]["avg_reveal_moves_count"] for n in level_names]
    flags = [results[n]["avg_markings_count"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, moves, width=bar_w, label="reveal moves")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, flags, width=bar_w, label="flags")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average count per game")  # type: ignore[misc]
    plt.title("Solver actions by difficulty level")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()

    # 3) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Win rate without guessing")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Boards cleared by pure deduction")  # type: ignore[misc]
    plt.tight_layout()

    if show:
        plt.show()  # type: ignore[misc]

    return results
