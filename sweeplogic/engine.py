"""Minesweeper board: topology, mine placement and the reveal/flag/chord rules."""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, NamedTuple, Set, Tuple

from .timer import ElapsedTimer
from .utils import get_neighborhoods

logger = logging.getLogger(__name__)


class CellState(Enum):
    """Visibility state of a single cell."""
    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"
    DETONATED = "detonated"


class GameState(Enum):
    """Lifecycle of a game. LOST and WON are terminal."""
    INIT = "init"
    READY = "ready"
    PLAYING = "playing"
    LOST = "lost"
    WON = "won"


class Coordinate(NamedTuple):
    """Column/row pair addressing one cell."""
    x: int
    y: int


@dataclass
class Cell:
    """A single board cell. ``id`` equals its index in ``Board.cells``."""
    id: int
    state: CellState = CellState.HIDDEN
    is_mine: bool = False
    adjacent_mines: int = 0

    @property
    def is_hidden(self) -> bool:
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state is CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state is CellState.FLAGGED


class Board:
    """Minesweeper board with first-reveal safety and chording."""

    def __init__(self, width: int, height: int, mines_count: int) -> None:
        """
        Initialize an empty board. Mines are placed on the first reveal.

        Args:
            width: Board width (number of columns), must be > 0.
            height: Board height (number of rows), must be > 0.
            mines_count: Total number of mines, 0 <= mines_count < width * height.

        Raises:
            ValueError: If dimensions or the mine count are invalid.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        if mines_count < 0:
            raise ValueError("mines_count must be non-negative.")
        if mines_count >= width * height:
            raise ValueError("mines_count must leave at least one safe cell.")

        self.width: int = width
        self.height: int = height
        self.mines_count: int = mines_count

        self.game_state: GameState = GameState.INIT
        self.revealed_count: int = 0
        self.flagged_count: int = 0
        self.mines_placed: bool = False
        self.timer = ElapsedTimer()

        self._neighborhoods: Tuple[Tuple[int, ...], ...] = get_neighborhoods(
            width, height
        )
        self.cells: List[Cell] = [Cell(i) for i in range(width * height)]

        self.game_state = GameState.READY

    # -------------------------------------------------------------------------
    # Topology
    # -------------------------------------------------------------------------

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def coordinate_to_id(self, coord: Coordinate) -> int:
        """
        Translate a coordinate to its cell id.

        Raises:
            IndexError: If the coordinate is outside the board.
        """
        if not self.in_bounds(coord):
            raise IndexError(f"Cell {tuple(coord)} is outside the board.")
        return coord.y * self.width + coord.x

    def id_to_coordinate(self, cell_id: int) -> Coordinate:
        """
        Translate a cell id to its coordinate.

        Raises:
            IndexError: If the id does not address a cell.
        """
        if not 0 <= cell_id < len(self.cells):
            raise IndexError(f"Cell id {cell_id} is outside the board.")
        return Coordinate(cell_id % self.width, cell_id // self.width)

    def neighbor_ids(self, cell_id: int) -> Tuple[int, ...]:
        """Return precomputed neighbor ids for a cell."""
        return self._neighborhoods[cell_id]

    def get_adjacent_cells(self, coord: Coordinate) -> List[Coordinate]:
        """Return the up to 8 in-bounds coordinates surrounding ``coord``."""
        cell_id = self.coordinate_to_id(coord)
        return [self.id_to_coordinate(n) for n in self._neighborhoods[cell_id]]

    def get_cell(self, coord: Coordinate) -> Cell:
        return self.cells[self.coordinate_to_id(coord)]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def remaining_mines(self) -> int:
        """Mines not yet accounted for by a flag. Negative if over-flagged."""
        return self.mines_count - self.flagged_count

    @property
    def safe_cells_count(self) -> int:
        return self.width * self.height - self.mines_count

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.elapsed_seconds

    @property
    def is_over(self) -> bool:
        return self.game_state in (GameState.LOST, GameState.WON)

    def reset_timer(self) -> None:
        self.timer.reset()

    def mine_ids(self) -> Set[int]:
        return {cell.id for cell in self.cells if cell.is_mine}

    def flagged_neighbors(self, cell_id: int) -> int:
        return sum(1 for n in self._neighborhoods[cell_id] if self.cells[n].is_flagged)

    def hidden_neighbors(self, cell_id: int) -> List[int]:
        return [n for n in self._neighborhoods[cell_id] if self.cells[n].is_hidden]

    # -------------------------------------------------------------------------
    # Mine placement
    # -------------------------------------------------------------------------

    def place_mines(self, avoid: Coordinate) -> None:
        """
        Place mines uniformly at random, keeping ``avoid`` and its neighbors clear.

        Args:
            avoid: Coordinate of the first revealed cell.

        Raises:
            ValueError: If mines are already placed or too few cells are eligible.
        """
        avoid_id = self.coordinate_to_id(avoid)
        safe: Set[int] = set(self._neighborhoods[avoid_id]) | {avoid_id}
        eligible = [i for i in range(len(self.cells)) if i not in safe]

        if self.mines_count > len(eligible):
            raise ValueError(
                "Cannot place enough mines outside the first reveal's neighborhood."
            )

        self._set_mines(random.sample(eligible, self.mines_count))

    def place_mines_at(self, coords: Iterable[Coordinate]) -> None:
        """
        Place mines at exact coordinates instead of sampling them.

        Raises:
            ValueError: If mines are already placed or the count does not match.
        """
        ids = {self.coordinate_to_id(Coordinate(*c)) for c in coords}
        if len(ids) != self.mines_count:
            raise ValueError(
                f"Expected {self.mines_count} distinct mines, got {len(ids)}."
            )
        self._set_mines(sorted(ids))

    def _set_mines(self, mine_ids: Iterable[int]) -> None:
        if self.mines_placed:
            raise ValueError("Mines are already placed.")

        for mine_id in mine_ids:
            self.cells[mine_id].is_mine = True
            for n in self._neighborhoods[mine_id]:
                self.cells[n].adjacent_mines += 1

        self.mines_placed = True

    # -------------------------------------------------------------------------
    # Player actions
    # -------------------------------------------------------------------------

    def reveal(self, x: int, y: int) -> List[int]:
        """
        Reveal a cell, flooding zero regions and chording satisfied numbers.

        Revealing a hidden zero cell opens its neighbors, and so on across the
        connected zero region. Revealing an already revealed cell chords it:
        if its flagged neighbors match its number, every hidden neighbor is
        revealed.

        Args:
            x: X-coordinate of the cell to reveal.
            y: Y-coordinate of the cell to reveal.

        Returns:
            Ids of every cell whose state changed during the call, in reveal order.

        Raises:
            IndexError: If the coordinate is outside the board.
        """
        coord = Coordinate(x, y)
        cell_id = self.coordinate_to_id(coord)

        if self.is_over:
            return []

        if self.game_state is GameState.READY:
            if not self.mines_placed:
                self.place_mines(coord)
            self.timer.start()
            self.game_state = GameState.PLAYING

        cell = self.cells[cell_id]
        if cell.state in (CellState.FLAGGED, CellState.DETONATED):
            return []

        pending: List[int] = (
            self._chord_targets(cell_id) if cell.is_revealed else [cell_id]
        )
        changed: List[int] = []

        while pending:
            cid = pending.pop()
            current = self.cells[cid]
            if not current.is_hidden:
                continue

            if current.is_mine:
                current.state = CellState.DETONATED
                changed.append(cid)
                changed.extend(self._disclose_mines())
                self.game_state = GameState.LOST
                self.timer.stop()
                logger.info("Mine detonated at %s; game lost.", self.id_to_coordinate(cid))
                return changed

            current.state = CellState.REVEALED
            self.revealed_count += 1
            changed.append(cid)

            if current.adjacent_mines == 0:
                pending.extend(self._chord_targets(cid))

        if self.revealed_count == self.safe_cells_count:
            self.game_state = GameState.WON
            self.timer.stop()
            logger.info("All safe cells revealed; game won.")

        return changed

    def _chord_targets(self, cell_id: int) -> List[int]:
        """Hidden neighbors of a revealed cell whose flags satisfy its number."""
        if self.cells[cell_id].adjacent_mines != self.flagged_neighbors(cell_id):
            return []
        # Reversed so the stack pops neighbors in row-major order.
        return list(reversed(self.hidden_neighbors(cell_id)))

    def _disclose_mines(self) -> List[int]:
        disclosed: List[int] = []
        for cell in self.cells:
            if cell.is_mine and cell.is_hidden:
                cell.state = CellState.REVEALED
                disclosed.append(cell.id)
        return disclosed

    def flag(self, x: int, y: int) -> None:
        """
        Toggle a flag on a hidden cell. Any other state is left unchanged.

        Raises:
            IndexError: If the coordinate is outside the board.
        """
        cell = self.cells[self.coordinate_to_id(Coordinate(x, y))]
        if cell.state is CellState.HIDDEN:
            cell.state = CellState.FLAGGED
            self.flagged_count += 1
        elif cell.state is CellState.FLAGGED:
            cell.state = CellState.HIDDEN
            self.flagged_count -= 1
