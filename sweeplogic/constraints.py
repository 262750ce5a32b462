"""Deduction store: a self-simplifying set of mine-count constraints."""

import logging
from collections import defaultdict, deque
from typing import (
    TYPE_CHECKING,
    DefaultDict,
    Deque,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
    Union,
)

from .utils import bits_from_ids, is_subset, iter_bits, popcount

if TYPE_CHECKING:
    from .engine import Board

logger = logging.getLogger(__name__)

# Cell id used as the opening move on an untouched board (top-left corner).
OPENING_CELL_ID = 0


class DeductionError(RuntimeError):
    """A deduction contradicts the board's ground truth. Always a solver bug."""


class ConstraintStore:
    """
    Minimal, mutually irreducible set of facts "exactly k mines among cells S".

    Cell sets are integer bitsets (bit ``id`` set for every member). Facts are
    bucketed by mine count and then by set size, each size list kept in
    insertion order. Whenever a fact is a subset of another, the larger one is
    replaced by the difference, so singletons surface on their own:

    - ``(0, {id})`` proves ``id`` safe and queues it for :meth:`pop_safe_cell`.
    - ``(1, {id})`` proves ``id`` is a mine and flags it on the board.

    Every proof is checked against the board's mine layout; a mismatch raises
    :class:`DeductionError`.
    """

    def __init__(
        self, board: "Board", proven_mines: Optional[Set[int]] = None
    ) -> None:
        self.board = board

        # _buckets[required_mines][set_size] -> bitsets, oldest first
        self._buckets: DefaultDict[int, DefaultDict[int, List[int]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._count: int = 0

        self.safe_queue: Deque[int] = deque()
        self.proven_safe: Set[int] = set()
        # May be shared with the caller so proofs outlive a rebuild.
        self.proven_mines: Set[int] = set() if proven_mines is None else proven_mines

        self._first_pop: bool = True

    def __len__(self) -> int:
        return self._count

    def constraints(self) -> Iterator[Tuple[int, int]]:
        """Yield every stored ``(required_mines, bitset)`` pair."""
        for required in sorted(self._buckets):
            by_size = self._buckets[required]
            for size in sorted(by_size):
                for bits in by_size[size]:
                    yield required, bits

    @property
    def pending(self) -> List[int]:
        """Ids proven safe and not yet popped, in queue order."""
        return list(self.safe_queue)

    # -------------------------------------------------------------------------
    # Insertion
    # -------------------------------------------------------------------------

    def insert(self, required_mines: int, cells: Union[int, Iterable[int]]) -> None:
        """
        Add the fact "exactly ``required_mines`` mines among ``cells``".

        Args:
            required_mines: Number of mines among the cells.
            cells: A bitset, or an iterable of cell ids.

        Raises:
            DeductionError: If the fact, or anything derived from it, is
                impossible or contradicts the mine layout.
        """
        bits = cells if isinstance(cells, int) else bits_from_ids(cells)
        if bits == 0:
            return

        # Explicit work-list; cascades can run as deep as the board is large.
        pending: List[Tuple[int, int]] = [(required_mines, bits)]
        while pending:
            required, bits = pending.pop()
            self._insert_one(required, bits, pending)

    def _insert_one(
        self, required: int, bits: int, pending: List[Tuple[int, int]]
    ) -> None:
        size = popcount(bits)
        if required < 0 or required > size:
            raise DeductionError(
                f"Impossible constraint: {required} mines among {size} cells "
                f"{sorted(iter_bits(bits))}."
            )
        if size == 0:
            return

        # All cells safe: split into singletons.
        if required == 0 and size > 1:
            pending.extend((0, 1 << i) for i in reversed(list(iter_bits(bits))))
            return

        if required == 1 and size == 1:
            self._prove_mine(bits.bit_length() - 1)

        # All cells mines: split into singletons.
        if required > 1 and required == size:
            pending.extend((1, 1 << i) for i in reversed(list(iter_bits(bits))))
            return

        match = self._find_subset(required, bits, size)
        if match is not None:
            match_required, match_bits = match
            pending.append((required - match_required, bits & ~match_bits))
            return

        self._buckets[required][size].append(bits)
        self._count += 1

        if required == 0:
            self._prove_safe(bits.bit_length() - 1)

        for super_required, super_bits in self._extract_supersets(required, bits, size):
            pending.append((super_required - required, super_bits & ~bits))

    def _find_subset(
        self, required: int, bits: int, size: int
    ) -> Optional[Tuple[int, int]]:
        """
        First stored fact whose cells are contained in ``bits``.

        Scans higher mine counts first, then larger sets, then newer facts.
        """
        for match_required in range(required, -1, -1):
            by_size = self._buckets.get(match_required)
            if not by_size:
                continue
            for match_size in sorted(by_size, reverse=True):
                if match_size > size:
                    continue
                for stored in reversed(by_size[match_size]):
                    if is_subset(stored, bits):
                        return match_required, stored
        return None

    def _extract_supersets(
        self, required: int, bits: int, size: int
    ) -> List[Tuple[int, int]]:
        """Remove and return stored facts that strictly contain ``bits``."""
        removed: List[Tuple[int, int]] = []
        for super_required in sorted(self._buckets):
            if super_required < required:
                continue
            by_size = self._buckets[super_required]
            for super_size in sorted(by_size):
                if super_size <= size:
                    continue
                kept: List[int] = []
                for stored in by_size[super_size]:
                    if is_subset(bits, stored):
                        removed.append((super_required, stored))
                    else:
                        kept.append(stored)
                by_size[super_size] = kept
        self._count -= len(removed)
        return removed

    def _prove_safe(self, cell_id: int) -> None:
        cell = self.board.cells[cell_id]
        if cell.is_mine:
            raise DeductionError(
                f"Cell {self.board.id_to_coordinate(cell_id)} was proven safe "
                "but holds a mine."
            )
        logger.debug("Safe: %s", self.board.id_to_coordinate(cell_id))
        self.proven_safe.add(cell_id)
        self.safe_queue.append(cell_id)

    def _prove_mine(self, cell_id: int) -> None:
        cell = self.board.cells[cell_id]
        if not cell.is_mine:
            raise DeductionError(
                f"Cell {self.board.id_to_coordinate(cell_id)} was proven a mine "
                "but is safe."
            )
        coord = self.board.id_to_coordinate(cell_id)
        if cell.is_hidden:
            self.board.flag(coord.x, coord.y)
            logger.debug("Mine: %s", coord)
        self.proven_mines.add(cell_id)

    # -------------------------------------------------------------------------
    # Consumption
    # -------------------------------------------------------------------------

    def pop_safe_cell(self) -> Optional[int]:
        """
        Next cell id proven safe, or None when no safe cell is known.

        The very first call on an empty store for an untouched board returns
        the top-left cell as the opening move.
        """
        if self._first_pop:
            self._first_pop = False
            if (
                self._count == 0
                and not self.safe_queue
                and self.board.revealed_count == 0
            ):
                return OPENING_CELL_ID

        if not self.safe_queue:
            return None
        return self.safe_queue.popleft()
