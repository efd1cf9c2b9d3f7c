"""Shared fixtures."""

import pytest

from fritz.board.board import Board

# Valid standard board: 28 tiles, no two instances touching, rabbit at E5.
SAMPLE_CELLS = {
    "A1": "bison", "B1": "bison", "C1": "bison", "D1": "bison",
    "F1": "lion", "G1": "lion", "H1": "lion",
    "A3": "lion", "B3": "lion", "C3": "lion",
    "E3": "deer", "F3": "deer",
    "G5": "deer", "H5": "deer",
    "H3": "rabbit", "A5": "rabbit", "C5": "rabbit", "E5": "rabbit",
    "A7": "eagle", "B7": "eagle", "A8": "eagle",
    "D7": "eagle", "E7": "eagle", "D8": "eagle",
    "G7": "zebra", "H7": "zebra", "H8": "zebra", "I8": "zebra",
}


def make_sample_board() -> Board:
    return Board.from_dict(SAMPLE_CELLS)


@pytest.fixture
def sample_board() -> Board:
    return make_sample_board()


@pytest.fixture
def winning_guesses() -> dict:
    """Correct guess for every animal tile, keyed by tile."""
    return dict(SAMPLE_CELLS)
