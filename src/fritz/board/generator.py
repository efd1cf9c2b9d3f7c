"""Random board generation under the no-touching rule."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from fritz.board.board import Board, Placement
from fritz.board.coords import GRID_SIZE, Coordinate, in_bounds
from fritz.board.shapes import AnimalKind, Shape, matches_kind, shapes_for
from fritz.errors import GenerationExhaustedError

logger = logging.getLogger(__name__)

# Largest footprints first: single-tile rabbits slot into whatever gaps remain.
DEFAULT_ORDER: tuple[AnimalKind, ...] = (
    AnimalKind.BISON,
    AnimalKind.ZEBRA,
    AnimalKind.LION,
    AnimalKind.EAGLE,
    AnimalKind.DEER,
    AnimalKind.RABBIT,
)


def default_roster() -> dict[AnimalKind, int]:
    """Standard number of instances per kind."""
    return {kind: kind.instance_count for kind in AnimalKind}


@dataclass
class GeneratorConfig:
    """Configuration for board generation."""

    max_attempts: int = 1000  # Random tries per instance before the kind fails
    max_restarts: int = 500  # Full-board restarts before giving up
    order: tuple[AnimalKind, ...] = DEFAULT_ORDER
    roster: dict[AnimalKind, int] = field(default_factory=default_roster)

    def __post_init__(self):
        """Validate bounds and normalize order."""
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")
        if self.max_restarts < 0:
            raise ValueError(f"max_restarts must be non-negative, got {self.max_restarts}")
        if any(count < 0 for count in self.roster.values()):
            raise ValueError("roster counts must be non-negative")
        self.order = tuple(self.order)

    def placement_plan(self) -> list[tuple[AnimalKind, int]]:
        """Kinds to place, in processing order, with their instance counts.

        Kinds present in the roster but missing from ``order`` go last.
        """
        kinds = list(self.order) + [k for k in AnimalKind if k not in self.order]
        return [(kind, self.roster.get(kind, 0)) for kind in kinds if self.roster.get(kind, 0) > 0]

    @property
    def total_tiles(self) -> int:
        return sum(kind.tile_count * count for kind, count in self.roster.items())


def candidate_cells(
    shape: Shape,
    anchor: tuple[int, int],
    occupied: set[Coordinate],
) -> Optional[frozenset[Coordinate]]:
    """Cells *shape* would cover at *anchor*, or None if it cannot go there.

    A placement is rejected when a cell falls off the grid, lands on an
    occupied tile, or touches an occupied tile (diagonals included).
    """
    row, col = anchor
    cells: list[Coordinate] = []
    for d_row, d_col in shape.offsets:
        r, c = row + d_row, col + d_col
        if not in_bounds(r, c):
            return None
        cell = Coordinate(r, c)
        if cell in occupied:
            return None
        cells.append(cell)

    for cell in cells:
        for neighbor in cell.neighbors():
            if neighbor in occupied:
                return None

    return frozenset(cells)


class BoardGenerator:
    """Greedy random placement with full restart on failure.

    Each instance gets up to ``max_attempts`` random (rotation, anchor)
    draws. If any instance cannot be placed the whole board is thrown
    away and generation starts over from an empty grid.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None):
        """Initialize generator.

        Args:
            config: Generation bounds and roster (default: standard game)
            rng: Random source; pass a seeded Random for reproducible boards
        """
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random()

    def generate(self) -> Board:
        """Produce a board satisfying every placement rule.

        Raises:
            GenerationExhaustedError: If no board is found within max_restarts.
        """
        failed_kind: Optional[AnimalKind] = None
        for restart in range(self.config.max_restarts + 1):
            placements, failed_kind = self._fill_board()
            if failed_kind is None:
                if restart:
                    logger.debug(f"Board generated after {restart} restarts")
                return Board.from_placements(placements)
            logger.debug(f"Restart {restart + 1}: could not place {failed_kind.value}")

        logger.error(f"Board generation exhausted after {self.config.max_restarts} restarts")
        raise GenerationExhaustedError(
            restarts=self.config.max_restarts,
            failed_kind=failed_kind.value if failed_kind else None,
        )

    def _fill_board(self) -> tuple[list[Placement], Optional[AnimalKind]]:
        """One pass over the roster. Returns placements and the kind that failed, if any."""
        occupied: set[Coordinate] = set()
        placements: list[Placement] = []

        for kind, count in self.config.placement_plan():
            for _ in range(count):
                placement = self._place_instance(kind, occupied)
                if placement is None:
                    return placements, kind
                occupied.update(placement.cells)
                placements.append(placement)

        return placements, None

    def _place_instance(self, kind: AnimalKind, occupied: set[Coordinate]) -> Optional[Placement]:
        shapes = shapes_for(kind)
        for _ in range(self.config.max_attempts):
            shape = self.rng.choice(shapes)
            anchor = (self.rng.randint(1, GRID_SIZE), self.rng.randint(1, GRID_SIZE))
            cells = candidate_cells(shape, anchor, occupied)
            if cells is not None:
                return Placement(kind=kind, cells=cells)
        return None


def generate_board(
    rng: Optional[random.Random] = None,
    config: Optional[GeneratorConfig] = None,
) -> Board:
    """Generate a fresh random board."""
    return BoardGenerator(config=config, rng=rng).generate()


def validate_board(board: Board, roster: Optional[dict[AnimalKind, int]] = None) -> list[str]:
    """Check a board against the placement rules.

    Returns:
        List of problems (empty if the board is valid)
    """
    roster = roster if roster is not None else default_roster()
    problems: list[str] = []

    expected_tiles = sum(kind.tile_count * count for kind, count in roster.items())
    if len(board) != expected_tiles:
        problems.append(f"Board has {len(board)} animal tiles, expected {expected_tiles}")

    found: dict[AnimalKind, int] = {kind: 0 for kind in AnimalKind}
    for group in board.components():
        keys = ", ".join(c.key for c in sorted(group))
        kinds = {board[c] for c in group}
        if len(kinds) > 1:
            names = "/".join(sorted(k.value for k in kinds))
            problems.append(f"Tiles {keys} touch but hold different animals ({names})")
            continue
        kind = kinds.pop()
        if not matches_kind(kind, ((c.row, c.col) for c in group)):
            problems.append(f"Tiles {keys} do not form a {kind.value}")
            continue
        found[kind] += 1

    for kind in AnimalKind:
        expected = roster.get(kind, 0)
        if found[kind] != expected:
            problems.append(f"Found {found[kind]} {kind.value} instance(s), expected {expected}")

    return problems


def is_valid_board(board: Board) -> bool:
    return not validate_board(board)
