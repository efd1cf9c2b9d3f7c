"""Search clues: how many of three tiles landed on each animal."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from fritz.board.board import Board
from fritz.board.coords import Coordinate, CoordLike, to_coordinate
from fritz.board.shapes import AnimalKind
from fritz.errors import InvalidSelectionError

TILES_PER_TURN = 3


def normalize_tiles(tiles: Iterable[CoordLike]) -> tuple[Coordinate, ...]:
    """Parse a search selection, keeping submission order.

    Raises:
        InvalidSelectionError: Wrong count, duplicates, or a tile off the grid.
    """
    if isinstance(tiles, str):
        raise InvalidSelectionError("Expected a collection of tiles, got a single string")

    coords: list[Coordinate] = []
    for tile in tiles:
        try:
            coords.append(to_coordinate(tile))
        except (TypeError, ValueError) as e:
            raise InvalidSelectionError(f"Invalid tile {tile!r}: {e}") from e

    if len(coords) != TILES_PER_TURN:
        raise InvalidSelectionError(f"A search needs exactly {TILES_PER_TURN} tiles, got {len(coords)}")
    if len(set(coords)) != len(coords):
        raise InvalidSelectionError("A search cannot include the same tile twice")
    return tuple(coords)


def evaluate_turn(board: Board, tiles: Sequence[Coordinate]) -> dict[AnimalKind, int]:
    """Count hits per animal kind; kinds with no hits are omitted.

    Which tile produced which hit is never returned.
    """
    counts = Counter(board[tile] for tile in tiles if tile in board)
    return {kind: counts[kind] for kind in AnimalKind if counts[kind] > 0}
