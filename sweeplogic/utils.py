"""Grid topology helpers and integer bitset utilities."""

from typing import Dict, Iterator, List, Tuple

# Module-level cache: (width, height) -> (neighbor ids of cell 0, of cell 1, ...)
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Tuple[Tuple[int, ...], ...]] = {}


def get_neighborhoods(width: int, height: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Precompute and cache 8-connected neighbor ids for every cell in a grid.

    Cells are identified by ``id = y * width + x``. A neighbor is any in-bounds
    cell whose squared distance to the cell is 1 or 2.

    Args:
        width: Grid width (number of columns). Must be positive.
        height: Grid height (number of rows). Must be positive.

    Returns:
        A tuple indexed by cell id, each entry holding the ids of that cell's
        neighbors in row-major order.

    Raises:
        ValueError: If width or height is non-positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    key = (width, height)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: List[Tuple[int, ...]] = []
    for y in range(height):
        for x in range(width):
            nbrs: List[int] = []
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < width and 0 <= ny < height:
                        nbrs.append(ny * width + nx)
            neighborhoods.append(tuple(nbrs))

    result = tuple(neighborhoods)
    _NEIGHBORHOODS_CACHE[key] = result
    return result


def popcount(bits: int) -> int:
    """Number of set bits in a non-negative bitset."""
    return bin(bits).count("1")


def iter_bits(bits: int) -> Iterator[int]:
    """Yield the indices of the set bits in ascending order."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


def bits_from_ids(ids) -> int:
    """Build a bitset with one bit set per id."""
    bits = 0
    for i in ids:
        bits |= 1 << i
    return bits


def is_subset(a: int, b: int) -> bool:
    """True if every bit of ``a`` is also set in ``b``."""
    return a & ~b == 0
