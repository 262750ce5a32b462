import random

import pytest

from sweeplogic import Board, CellState, Coordinate, GameState, MinesweeperSolver
from sweeplogic.constraints import ConstraintStore


@pytest.fixture
def proof_log(monkeypatch):
    """Record every cell any store proves safe or proves to be a mine."""
    log = {"safe": [], "mines": []}
    prove_safe = ConstraintStore._prove_safe
    prove_mine = ConstraintStore._prove_mine

    def record_safe(self, cell_id):
        log["safe"].append((self.board, cell_id))
        prove_safe(self, cell_id)

    def record_mine(self, cell_id):
        log["mines"].append((self.board, cell_id))
        prove_mine(self, cell_id)

    monkeypatch.setattr(ConstraintStore, "_prove_safe", record_safe)
    monkeypatch.setattr(ConstraintStore, "_prove_mine", record_mine)
    return log


class TestScenarios:

    def test_corner_mine_board_is_solved(self, corner_mine_board):
        solver = MinesweeperSolver(corner_mine_board)
        revealed = solver.reveal_revealable()

        assert revealed == 8
        assert corner_mine_board.game_state is GameState.WON
        mine = corner_mine_board.get_cell(Coordinate(2, 2))
        assert mine.state is CellState.FLAGGED
        for cell in corner_mine_board.cells:
            if cell is not mine:
                assert cell.state is CellState.REVEALED

    def test_deduces_top_row(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        solver = MinesweeperSolver(top_mine_board)

        assert solver.reveal_revealable() == 2
        assert top_mine_board.game_state is GameState.WON
        assert top_mine_board.get_cell(Coordinate(1, 0)).state is CellState.FLAGGED

    def test_flag_bombs_flags_without_revealing(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        solver = MinesweeperSolver(top_mine_board)

        assert solver.flag_bombs() == 1
        assert top_mine_board.get_cell(Coordinate(1, 0)).state is CellState.FLAGGED
        assert top_mine_board.revealed_count == 6
        assert solver.flag_bombs() == 0

    def test_reveal_one_reveals_a_single_proven_cell(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        solver = MinesweeperSolver(top_mine_board)

        coord = solver.reveal_one()

        assert coord in (Coordinate(0, 0), Coordinate(2, 0))
        assert top_mine_board.get_cell(coord).state is CellState.REVEALED
        assert top_mine_board.revealed_count == 7

    def test_reveal_one_opens_untouched_board(self):
        board = Board(9, 9, 10)
        solver = MinesweeperSolver(board)
        assert solver.reveal_one() == Coordinate(0, 0)
        assert board.game_state in (GameState.PLAYING, GameState.WON)

    def test_stops_instead_of_guessing(self, coin_flip_board):
        solver = MinesweeperSolver(coin_flip_board)

        assert solver.reveal_revealable() == 6
        assert coin_flip_board.game_state is GameState.PLAYING
        assert coin_flip_board.get_cell(Coordinate(3, 0)).state is CellState.HIDDEN
        assert coin_flip_board.get_cell(Coordinate(3, 1)).state is CellState.HIDDEN
        assert coin_flip_board.flagged_count == 0
        assert solver.reveal_one() is None

    def test_unreachable_region_stays_hidden(self, split_board):
        solver = MinesweeperSolver(split_board)

        assert solver.reveal_revealable() == 16
        assert split_board.flagged_count == 4
        for y in range(4):
            assert split_board.get_cell(Coordinate(4, y)).state is CellState.FLAGGED
            assert split_board.get_cell(Coordinate(5, y)).state is CellState.HIDDEN

    def test_nothing_left_to_do_after_win(self, corner_mine_board):
        solver = MinesweeperSolver(corner_mine_board)
        solver.reveal_revealable()
        assert solver.reveal_revealable() == 0
        assert solver.reveal_one() is None

    def test_ignores_lost_board(self, top_mine_board):
        top_mine_board.reveal(1, 0)
        assert top_mine_board.game_state is GameState.LOST
        solver = MinesweeperSolver(top_mine_board)
        assert solver.reveal_revealable() == 0
        assert solver.reveal_moves_count == 0


class TestManualFlags:

    def test_correct_flag_still_solves(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        top_mine_board.flag(1, 0)
        solver = MinesweeperSolver(top_mine_board)

        assert solver.reveal_revealable() == 2
        assert top_mine_board.game_state is GameState.WON
        assert top_mine_board.get_cell(Coordinate(1, 0)).state is CellState.FLAGGED
        assert solver.markings_count == 1

    def test_wrong_flag_flag_bombs(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        top_mine_board.flag(0, 0)
        solver = MinesweeperSolver(top_mine_board)

        assert solver.flag_bombs() == 1
        assert top_mine_board.get_cell(Coordinate(1, 0)).state is CellState.FLAGGED
        assert top_mine_board.get_cell(Coordinate(0, 0)).state is CellState.FLAGGED

    def test_wrong_flag_never_reveals_a_mine(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        top_mine_board.flag(0, 0)
        solver = MinesweeperSolver(top_mine_board)

        assert solver.reveal_revealable() == 1
        assert top_mine_board.game_state is GameState.PLAYING
        assert top_mine_board.get_cell(Coordinate(2, 0)).state is CellState.REVEALED
        assert top_mine_board.get_cell(Coordinate(0, 0)).state is CellState.FLAGGED
        assert solver.reveal_one() is None

    def test_removing_wrong_flag_lets_solver_finish(self, top_mine_board):
        top_mine_board.reveal(0, 2)
        top_mine_board.flag(0, 0)
        solver = MinesweeperSolver(top_mine_board)
        solver.reveal_revealable()

        top_mine_board.flag(0, 0)

        assert solver.reveal_one() == Coordinate(0, 0)
        assert top_mine_board.game_state is GameState.WON

    def test_random_wrong_flags(self):
        for seed in range(40):
            random.seed(seed)
            board = Board(9, 9, 10)
            solver = MinesweeperSolver(board)
            solver.reveal_one()

            safe_hidden = [c for c in board.cells if c.is_hidden and not c.is_mine]
            for cell in random.sample(safe_hidden, min(3, len(safe_hidden))):
                coord = board.id_to_coordinate(cell.id)
                board.flag(coord.x, coord.y)

            solver.reveal_revealable()
            solver.flag_bombs()

            assert board.game_state is not GameState.LOST
            for cell in board.cells:
                if cell.state is CellState.REVEALED:
                    assert not cell.is_mine
                if cell.id in solver.proven_mines:
                    assert cell.is_mine


class TestSoundness:

    @pytest.mark.parametrize(
        "width, height, mines, games",
        [(9, 9, 10, 150), (16, 16, 40, 40), (30, 16, 99, 15)],
    )
    def test_random_boards(self, proof_log, width, height, mines, games):
        for seed in range(games):
            random.seed(seed)
            board = Board(width, height, mines)
            solver = MinesweeperSolver(board)

            solver.reveal_revealable()
            solver.flag_bombs()

            assert board.game_state is not GameState.LOST
            for cell in board.cells:
                if cell.state is CellState.FLAGGED:
                    assert cell.is_mine
                if cell.state is CellState.REVEALED:
                    assert not cell.is_mine
            assert (board.game_state is GameState.WON) == (
                board.revealed_count == board.safe_cells_count
            )

        assert proof_log["safe"]
        for proof_board, cell_id in proof_log["safe"]:
            assert not proof_board.cells[cell_id].is_mine
        for proof_board, cell_id in proof_log["mines"]:
            assert proof_board.cells[cell_id].is_mine

    def test_counters(self, corner_mine_board):
        solver = MinesweeperSolver(corner_mine_board)
        solver.reveal_revealable()
        assert solver.reveal_moves_count == 1
        assert solver.revealed_cells_count == 8
        assert solver.passes_count == 2
        assert solver.markings_count == 1
