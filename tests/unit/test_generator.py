"""Tests for board generation and validation."""

import random

import pytest

from fritz.board.board import Board
from fritz.board.coords import Coordinate
from fritz.board.generator import (
    DEFAULT_ORDER,
    BoardGenerator,
    GeneratorConfig,
    candidate_cells,
    generate_board,
    validate_board,
    is_valid_board,
)
from fritz.board.shapes import AnimalKind, shapes_for
from fritz.errors import GenerationExhaustedError


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.max_attempts == 1000
        assert config.order == DEFAULT_ORDER
        assert config.total_tiles == 28

    def test_largest_first_plan(self):
        plan = GeneratorConfig().placement_plan()
        assert plan[0] == (AnimalKind.BISON, 1)
        assert plan[-1] == (AnimalKind.RABBIT, 4)

    def test_kinds_missing_from_order_go_last(self):
        config = GeneratorConfig(order=(AnimalKind.DEER,))
        plan = config.placement_plan()
        assert plan[0][0] is AnimalKind.DEER
        assert len(plan) == 6

    def test_rejects_bad_bounds(self):
        with pytest.raises(ValueError):
            GeneratorConfig(max_attempts=0)
        with pytest.raises(ValueError):
            GeneratorConfig(max_restarts=-1)


class TestCandidateCells:
    def test_fits_on_empty_grid(self):
        bison = shapes_for(AnimalKind.BISON)[0]
        cells = candidate_cells(bison, (1, 1), set())
        assert cells == frozenset(Coordinate(1, c) for c in range(1, 5))

    def test_off_grid_rejected(self):
        bison = shapes_for(AnimalKind.BISON)[0]
        assert candidate_cells(bison, (1, 7), set()) is None

    def test_touching_rejected(self):
        rabbit = shapes_for(AnimalKind.RABBIT)[0]
        occupied = {Coordinate(5, 5)}
        assert candidate_cells(rabbit, (6, 6), occupied) is None
        assert candidate_cells(rabbit, (5, 5), occupied) is None
        assert candidate_cells(rabbit, (7, 7), occupied) == frozenset({Coordinate(7, 7)})


class TestGenerateBoard:
    def test_generated_board_is_valid(self):
        board = generate_board(rng=random.Random(7))
        assert len(board) == 28
        assert validate_board(board) == []

    def test_seeded_generation_is_reproducible(self):
        a = generate_board(rng=random.Random(1234))
        b = generate_board(rng=random.Random(1234))
        assert a == b
        assert a.board_id == b.board_id

    def test_impossible_roster_exhausts(self):
        config = GeneratorConfig(max_attempts=50, max_restarts=3, roster={AnimalKind.BISON: 30})
        generator = BoardGenerator(config=config, rng=random.Random(0))
        with pytest.raises(GenerationExhaustedError) as exc:
            generator.generate()
        assert exc.value.restarts == 3
        assert exc.value.failed_kind == "bison"
        assert exc.value.code == "generation_exhausted"

    def test_custom_roster(self):
        config = GeneratorConfig(roster={AnimalKind.DEER: 3})
        board = generate_board(rng=random.Random(3), config=config)
        assert len(board) == 6
        assert validate_board(board, roster={AnimalKind.DEER: 3}) == []


class TestValidateBoard:
    def test_sample_board_is_valid(self, sample_board):
        assert is_valid_board(sample_board)

    def test_touching_instances_reported(self, sample_board):
        cells = sample_board.to_dict()
        del cells["E5"]
        cells["D5"] = "rabbit"  # Touches C5
        problems = validate_board(Board(cells))
        assert any("do not form a rabbit" in p for p in problems)

    def test_mixed_kinds_reported(self, sample_board):
        cells = sample_board.to_dict()
        del cells["E5"]
        cells["B2"] = "rabbit"  # Touches the bison and a lion
        problems = validate_board(Board(cells))
        assert any("different animals" in p for p in problems)

    def test_wrong_tile_count_reported(self, sample_board):
        cells = sample_board.to_dict()
        del cells["E5"]
        problems = validate_board(Board(cells))
        assert any("27 animal tiles" in p for p in problems)
        assert any("3 rabbit" in p for p in problems)
