"""Grid, animal shapes and board generation."""

from fritz.board.coords import GRID_SIZE, Coordinate, to_coordinate, all_coordinates
from fritz.board.shapes import AnimalKind, Shape, shapes_for, TOTAL_ANIMAL_TILES
from fritz.board.board import Board, Placement
from fritz.board.generator import (
    BoardGenerator,
    GeneratorConfig,
    generate_board,
    validate_board,
    is_valid_board,
)

__all__ = [
    "GRID_SIZE",
    "Coordinate",
    "to_coordinate",
    "all_coordinates",
    "AnimalKind",
    "Shape",
    "shapes_for",
    "TOTAL_ANIMAL_TILES",
    "Board",
    "Placement",
    "BoardGenerator",
    "GeneratorConfig",
    "generate_board",
    "validate_board",
    "is_valid_board",
]
