"""Animal kinds and their polyomino footprints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class AnimalKind(Enum):
    """Kinds of animal hidden on the board."""

    RABBIT = "rabbit"
    DEER = "deer"
    LION = "lion"
    EAGLE = "eagle"
    BISON = "bison"
    ZEBRA = "zebra"

    @property
    def tile_count(self) -> int:
        return _TILE_COUNTS[self]

    @property
    def instance_count(self) -> int:
        return _INSTANCE_COUNTS[self]

    @property
    def shapes(self) -> tuple["Shape", ...]:
        return SHAPE_CATALOG[self]


@dataclass(frozen=True)
class Shape:
    """One fixed rotation of an animal footprint.

    Offsets are (d_row, d_col) pairs relative to the anchor tile.
    """

    offsets: tuple[tuple[int, int], ...]
    label: str = ""

    def __post_init__(self):
        """Convert lists to tuples and reject repeated cells."""
        offsets = tuple(tuple(o) for o in self.offsets)
        if len(set(offsets)) != len(offsets):
            raise ValueError(f"Shape {self.label or offsets} repeats an offset")
        object.__setattr__(self, "offsets", offsets)

    @property
    def size(self) -> int:
        return len(self.offsets)


_TILE_COUNTS = {
    AnimalKind.RABBIT: 1,
    AnimalKind.DEER: 2,
    AnimalKind.LION: 3,
    AnimalKind.EAGLE: 3,
    AnimalKind.BISON: 4,
    AnimalKind.ZEBRA: 4,
}

_INSTANCE_COUNTS = {
    AnimalKind.RABBIT: 4,
    AnimalKind.DEER: 2,
    AnimalKind.LION: 2,
    AnimalKind.EAGLE: 2,
    AnimalKind.BISON: 1,
    AnimalKind.ZEBRA: 1,
}

SHAPE_CATALOG: dict[AnimalKind, tuple[Shape, ...]] = {
    AnimalKind.RABBIT: (
        Shape(((0, 0),), "single"),
    ),
    AnimalKind.DEER: (
        Shape(((0, 0), (0, 1)), "horizontal"),
        Shape(((0, 0), (1, 0)), "vertical"),
    ),
    AnimalKind.LION: (
        Shape(((0, 0), (0, 1), (0, 2)), "horizontal"),
        Shape(((0, 0), (1, 0), (2, 0)), "vertical"),
    ),
    AnimalKind.EAGLE: (
        Shape(((0, 0), (1, 0), (1, 1)), "L right"),
        Shape(((0, 0), (0, 1), (1, 0)), "L down"),
        Shape(((0, 0), (0, 1), (1, 1)), "L left"),
        Shape(((0, 1), (1, 0), (1, 1)), "L up"),
    ),
    AnimalKind.BISON: (
        Shape(((0, 0), (0, 1), (0, 2), (0, 3)), "horizontal"),
        Shape(((0, 0), (1, 0), (2, 0), (3, 0)), "vertical"),
    ),
    AnimalKind.ZEBRA: (
        Shape(((0, 0), (0, 1), (1, 1), (1, 2)), "Z horizontal"),
        Shape(((0, 1), (1, 0), (1, 1), (2, 0)), "Z vertical"),
        Shape(((0, 1), (0, 2), (1, 0), (1, 1)), "S horizontal"),
        Shape(((0, 0), (1, 0), (1, 1), (2, 1)), "S vertical"),
    ),
}

TOTAL_ANIMAL_TILES = sum(kind.tile_count * kind.instance_count for kind in AnimalKind)


def shapes_for(kind: AnimalKind) -> tuple[Shape, ...]:
    """Return every valid rotation for *kind*."""
    return SHAPE_CATALOG[kind]


def normalize_offsets(cells: Iterable[tuple[int, int]]) -> frozenset[tuple[int, int]]:
    """Shift a set of (row, col) cells so its top-left bound sits at (0, 0)."""
    cells = list(cells)
    if not cells:
        return frozenset()
    min_row = min(r for r, _ in cells)
    min_col = min(c for _, c in cells)
    return frozenset((r - min_row, c - min_col) for r, c in cells)


def matches_kind(kind: AnimalKind, cells: Iterable[tuple[int, int]]) -> bool:
    """True if *cells* is a translated copy of one of *kind*'s rotations."""
    footprint = normalize_offsets(cells)
    return any(normalize_offsets(shape.offsets) == footprint for shape in SHAPE_CATALOG[kind])
