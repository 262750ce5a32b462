"""
sweeplogic

Minesweeper with a solver that only makes moves it can prove:
- Board: first-reveal safety, flood reveal and chording
- ConstraintStore: subset/superset simplification of mine-count facts
- MinesweeperSolver: reveals every provably safe cell, flags every provable mine
"""

from .analysis import (
    LEVELS,
    format_solver_knowledge,
    run_solver_expert_level_analysis,
    run_solver_many_tests,
    run_solver_single_test,
)
from .cli import format_board, play_cli
from .constraints import ConstraintStore, DeductionError
from .engine import Board, Cell, CellState, Coordinate, GameState
from .session import GameSession
from .solver import MinesweeperSolver

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Board",
    "Cell",
    "CellState",
    "Coordinate",
    "GameState",
    "ConstraintStore",
    "DeductionError",
    "MinesweeperSolver",
    "GameSession",
    # CLI
    "format_board",
    "play_cli",
    # Analysis functions
    "LEVELS",
    "format_solver_knowledge",
    "run_solver_single_test",
    "run_solver_many_tests",
    "run_solver_expert_level_analysis",
]
