"""Grid coordinates and A1-style tile keys."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Union

GRID_SIZE = 9

_KEY_PATTERN = re.compile(r"^([A-Z])(\d{1,2})$")


@dataclass(frozen=True, order=True)
class Coordinate:
    """A 1-indexed (row, col) position on the grid.

    The external form is ``{ColumnLetter}{Row}``: column 1 is "A", so
    ``Coordinate(row=5, col=5)`` is "E5".
    """

    row: int
    col: int

    def __post_init__(self):
        """Reject positions outside the grid."""
        if not in_bounds(self.row, self.col):
            raise ValueError(f"Coordinate out of range: row={self.row}, col={self.col}")

    @property
    def key(self) -> str:
        return f"{chr(ord('A') + self.col - 1)}{self.row}"

    def __str__(self) -> str:
        return self.key

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Parse a tile key like "B7" (case-insensitive)."""
        match = _KEY_PATTERN.match(text.strip().upper())
        if not match:
            raise ValueError(f"Not a tile key: {text!r}")
        col = ord(match.group(1)) - ord("A") + 1
        row = int(match.group(2))
        return cls(row=row, col=col)

    def neighbors(self) -> Iterator["Coordinate"]:
        """Yield the up-to-8 surrounding coordinates that lie on the grid."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                r, c = self.row + dr, self.col + dc
                if in_bounds(r, c):
                    yield Coordinate(r, c)

    def offset(self, d_row: int, d_col: int) -> "Coordinate":
        """Translate by (d_row, d_col); raises ValueError if it leaves the grid."""
        return Coordinate(self.row + d_row, self.col + d_col)


CoordLike = Union[Coordinate, str]


def in_bounds(row: int, col: int) -> bool:
    return 1 <= row <= GRID_SIZE and 1 <= col <= GRID_SIZE


def to_coordinate(value: CoordLike) -> Coordinate:
    """Accept either a Coordinate or its tile key."""
    if isinstance(value, Coordinate):
        return value
    if isinstance(value, str):
        return Coordinate.parse(value)
    raise TypeError(f"Expected Coordinate or tile key, got {type(value).__name__}")


def chebyshev(a: Coordinate, b: Coordinate) -> int:
    """King-move distance; 1 means the tiles touch, diagonals included."""
    return max(abs(a.row - b.row), abs(a.col - b.col))


def all_coordinates() -> list[Coordinate]:
    """Every tile on the grid in row-major order."""
    return [Coordinate(r, c) for r in range(1, GRID_SIZE + 1) for c in range(1, GRID_SIZE + 1)]
