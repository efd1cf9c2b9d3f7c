"""Read-only board: which tiles hold which animal."""

from __future__ import annotations

import hashlib
from collections import Counter
from dataclasses import dataclass
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional, Union

from fritz.board.coords import Coordinate, CoordLike, to_coordinate
from fritz.board.shapes import AnimalKind


@dataclass(frozen=True)
class Placement:
    """One placed animal instance."""

    kind: AnimalKind
    cells: frozenset[Coordinate]

    def __post_init__(self):
        """Convert iterables of cells to a frozenset."""
        if not isinstance(self.cells, frozenset):
            object.__setattr__(self, "cells", frozenset(self.cells))


class Board(Mapping[Coordinate, AnimalKind]):
    """Hidden ground truth: occupied tiles only, empty tiles are absent.

    Keys may be given as Coordinates or tile keys ("A1"), values as
    AnimalKind members or their string values.
    """

    def __init__(self, cells: Optional[Mapping[CoordLike, Union[AnimalKind, str]]] = None):
        self._cells: dict[Coordinate, AnimalKind] = {}
        for coord, kind in (cells or {}).items():
            self._cells[to_coordinate(coord)] = kind if isinstance(kind, AnimalKind) else AnimalKind(kind)

    @classmethod
    def from_placements(cls, placements: Iterable[Placement]) -> "Board":
        cells: dict[Coordinate, AnimalKind] = {}
        for placement in placements:
            for coord in placement.cells:
                if coord in cells:
                    raise ValueError(f"Placements overlap at {coord}")
                cells[coord] = placement.kind
        return cls(cells)

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "Board":
        """Create Board from {"A1": "rabbit", ...}."""
        return cls(data)

    def to_dict(self) -> dict[str, str]:
        """Convert to {"A1": "rabbit", ...} in row-major order."""
        return {coord.key: self._cells[coord].value for coord in sorted(self._cells)}

    def __getitem__(self, coord: CoordLike) -> AnimalKind:
        try:
            key = to_coordinate(coord)
        except (TypeError, ValueError):
            raise KeyError(coord) from None
        return self._cells[key]

    def __contains__(self, coord: object) -> bool:
        try:
            return to_coordinate(coord) in self._cells  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(sorted(self._cells))

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Board({len(self._cells)} tiles, id={self.board_id})"

    @property
    def board_id(self) -> str:
        """Stable fingerprint of the arrangement."""
        text = ";".join(f"{key}={kind}" for key, kind in self.to_dict().items())
        return hashlib.sha1(text.encode()).hexdigest()[:12]

    def kind_counts(self) -> Counter:
        """Number of occupied tiles per kind."""
        return Counter(self._cells.values())

    def components(self) -> list[frozenset[Coordinate]]:
        """Group occupied tiles into 8-connected clusters.

        Different instances never touch, so on a valid board each cluster
        is exactly one placed instance.
        """
        seen: set[Coordinate] = set()
        groups: list[frozenset[Coordinate]] = []
        for start in sorted(self._cells):
            if start in seen:
                continue
            stack = [start]
            group: set[Coordinate] = set()
            seen.add(start)
            while stack:
                current = stack.pop()
                group.add(current)
                for neighbor in current.neighbors():
                    if neighbor in self._cells and neighbor not in seen:
                        seen.add(neighbor)
                        stack.append(neighbor)
            groups.append(frozenset(group))
        return groups

    def instances(self) -> list[Placement]:
        """Recover placed instances, labelled by the kind of their first tile."""
        return [
            Placement(kind=self._cells[min(group)], cells=group)
            for group in self.components()
        ]
