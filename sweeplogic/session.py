"""A single game: one board plus the solver bound to it."""

from typing import Optional

from .engine import Board, Coordinate, GameState
from .solver import MinesweeperSolver


class GameSession:
    """
    Owns the current board and solver. Front ends hold a session instead of a
    board so that starting a new game swaps both at once.
    """

    def __init__(self, width: int, height: int, mines_count: int) -> None:
        self.width = width
        self.height = height
        self.mines_count = mines_count
        self.board = Board(width, height, mines_count)
        self.solver = MinesweeperSolver(self.board)

    def reset(self) -> None:
        """Discard the current game and start a fresh one with the same size."""
        self.board.reset_timer()
        self.board = Board(self.width, self.height, self.mines_count)
        self.solver = MinesweeperSolver(self.board)

    @property
    def game_state(self) -> GameState:
        return self.board.game_state

    def reveal(self, x: int, y: int) -> int:
        return len(self.board.reveal(x, y))

    def flag(self, x: int, y: int) -> None:
        self.board.flag(x, y)

    def reveal_revealable(self) -> int:
        return self.solver.reveal_revealable()

    def reveal_one(self) -> Optional[Coordinate]:
        return self.solver.reveal_one()

    def flag_bombs(self) -> int:
        return self.solver.flag_bombs()
