"""Deduction-only Minesweeper solver driving a ConstraintStore."""

import logging
from typing import Iterable, Optional, Set

from .constraints import ConstraintStore
from .engine import Board, Coordinate

logger = logging.getLogger(__name__)


class MinesweeperSolver:
    """
    Reveal every cell that can be proven safe from the visible clues.

    The solver never guesses. Each revealed number ``n`` becomes the fact
    "exactly ``n - p`` mines among ``U``", where ``p`` counts neighbors this
    solver has proven to be mines and ``U`` holds every other neighbor that is
    not revealed. The store simplifies those facts into proven safe cells
    (revealed here) and proven mines (flagged by the store).

    Only proven mines are taken as known. A flag placed by hand is just an
    unknown cell, so a wrong manual flag never corrupts a deduction.
    """

    def __init__(self, board: Board) -> None:
        """
        Initialize a solver bound to a specific board.

        Args:
            board: The board to read clues from and apply moves to.
        """
        self.board = board
        self.proven_mines: Set[int] = set()
        self.groups = ConstraintStore(board, self.proven_mines)

        # Metrics / counters (for analysis)
        self.reveal_moves_count: int = 0
        self.revealed_cells_count: int = 0
        self.passes_count: int = 0

    @property
    def markings_count(self) -> int:
        return len(self.proven_mines)

    def _cell_constraint(self, cell_id: int) -> None:
        """Insert the fact contributed by one revealed numbered cell."""
        cell = self.board.cells[cell_id]
        if not cell.is_revealed or cell.is_mine or cell.adjacent_mines == 0:
            return

        known = 0
        unknown = []
        for n in self.board.neighbor_ids(cell_id):
            neighbor = self.board.cells[n]
            if neighbor.is_flagged and n in self.proven_mines:
                known += 1
            elif neighbor.is_hidden or neighbor.is_flagged:
                unknown.append(n)
        if not unknown:
            return

        self.groups.insert(cell.adjacent_mines - known, unknown)

    def init_groups(self) -> None:
        """Rebuild the constraint store from every revealed numbered cell."""
        self.groups = ConstraintStore(self.board, self.proven_mines)
        for cell in self.board.cells:
            self._cell_constraint(cell.id)

    def _reveal(self, cell_id: int) -> int:
        """
        Reveal one cell and feed the newly exposed clues to the store.

        Returns:
            Number of cells revealed by the move (0 if it was a no-op).
        """
        # Queued ids may have been opened by an earlier flood; revealing them
        # again would chord instead.
        if not self.board.cells[cell_id].is_hidden:
            return 0

        coord = self.board.id_to_coordinate(cell_id)
        changed = self.board.reveal(coord.x, coord.y)
        if not changed:
            return 0
        self.reveal_moves_count += 1

        revealed = [cid for cid in changed if not self.board.cells[cid].is_mine]
        self.revealed_cells_count += len(revealed)
        self._update_groups(revealed)
        return len(revealed)

    def _update_groups(self, cell_ids: Iterable[int]) -> None:
        if self.board.is_over:
            return
        for cid in cell_ids:
            self._cell_constraint(cid)

    def reveal_revealable(self) -> int:
        """
        Reveal cells until no further cell can be proven safe.

        Each pass rebuilds the store, then drains its safe queue while adding
        constraints only for the cells each reveal exposes. A pass that revealed
        anything is followed by a full rebuild, since new numbers can combine
        with old ones in ways the incremental updates did not cover.

        Returns:
            Total number of cells revealed.
        """
        total = 0
        while True:
            self.init_groups()
            self.passes_count += 1

            revealed_this_pass = 0
            while True:
                cell_id = self.groups.pop_safe_cell()
                if cell_id is None:
                    break
                revealed_this_pass += self._reveal(cell_id)

            logger.debug(
                "Pass %d revealed %d cells.", self.passes_count, revealed_this_pass
            )
            total += revealed_this_pass
            if revealed_this_pass == 0:
                return total

    def reveal_one(self) -> Optional[Coordinate]:
        """
        Reveal a single cell proven safe.

        Returns:
            The coordinate revealed, or None if no cell is known to be safe.
        """
        self.init_groups()
        while True:
            cell_id = self.groups.pop_safe_cell()
            if cell_id is None:
                return None
            if self._reveal(cell_id):
                return self.board.id_to_coordinate(cell_id)

    def flag_bombs(self) -> int:
        """
        Flag every cell currently provable to be a mine.

        Returns:
            Number of flags placed.
        """
        before = self.board.flagged_count
        self.init_groups()
        return self.board.flagged_count - before
