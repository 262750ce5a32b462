# tests/conftest.py
import random

import matplotlib

# Headless backend before anything imports pyplot.
matplotlib.use("Agg")

import pytest

from sweeplogic import Board


def make_board(width, height, mines):
    """Board with mines at fixed (x, y) positions and nothing revealed."""
    board = Board(width, height, len(mines))
    board.place_mines_at(mines)
    return board


@pytest.fixture(autouse=True)
def seeded_random():
    random.seed(1234)


@pytest.fixture
def corner_mine_board():
    """3x3, one mine at (2, 2)."""
    return make_board(3, 3, [(2, 2)])


@pytest.fixture
def top_mine_board():
    """
    3x3, one mine at (1, 0).

    Revealing (0, 2) opens the bottom two rows and leaves the top row hidden:

        . . .
        1 1 1
        0 0 0
    """
    return make_board(3, 3, [(1, 0)])


@pytest.fixture
def split_board():
    """
    6x4 with a wall of mines in column 4. Revealing (0, 0) opens columns 0-3
    and leaves column 5 hidden behind the wall.
    """
    return make_board(6, 4, [(4, y) for y in range(4)])


@pytest.fixture
def coin_flip_board():
    """
    4x2 with one mine at (3, 0). After the opening, the two cells of column 3
    share the same clue and cannot be told apart.
    """
    return make_board(4, 2, [(3, 0)])


@pytest.fixture
def board_factory():
    return make_board
