"""
Quickstart example for sweeplogic.

This script demonstrates basic usage of the board and the deduction solver.
"""

from sweeplogic import (
    LEVELS,
    Board,
    MinesweeperSolver,
    format_board,
    run_solver_many_tests,
)


def main():
    print("=" * 60)
    print("sweeplogic - Quickstart Example")
    print("=" * 60)

    # Example 1: Solve a single game
    print("\n1. Solving a single Intermediate game (16x16, 40 mines)...")
    print("-" * 60)

    board = Board(width=16, height=16, mines_count=40)
    solver = MinesweeperSolver(board)
    revealed = solver.reveal_revealable()

    print(f"Result: {board.game_state.value}")
    print(f"Cells revealed: {revealed} / {board.safe_cells_count}")
    print(f"Mines flagged: {board.flagged_count}")
    print(f"Solver passes: {solver.passes_count}")

    # Example 2: Show board state
    print("\n2. Board as the solver left it:")
    print("-" * 60)
    print(format_board(board))

    # Example 3: Run multiple games for statistics
    print("\n3. Running 50 games for statistics...")
    print("-" * 60)

    results = run_solver_many_tests(width=16, height=16, mines_count=40, runs=50)

    print(f"Cleared without guessing: {results['win_rate']*100:.1f}%")
    print(f"Average share of safe cells revealed: {results['avg_clear_ratio']*100:.1f}%")

    # Example 4: Compare difficulty levels
    print("\n4. Win rates by difficulty level (10 games each)...")
    print("-" * 60)

    for name, (w, h, m) in LEVELS.items():
        results = run_solver_many_tests(width=w, height=h, mines_count=m, runs=10)
        print(f"{name:15s} ({w}x{h}, {m:2d} mines): {results['win_rate']*100:5.1f}% win rate")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
