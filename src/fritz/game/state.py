"""Game state records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from fritz.board.board import Board
from fritz.board.coords import Coordinate
from fritz.board.shapes import AnimalKind


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class Outcome(Enum):
    """Top-level game result."""

    NONE = "none"
    WIN = "win"
    LOSE = "lose"


class GuessMark(Enum):
    """Non-animal guess values.

    EMPTY is stored ("I believe this tile has no animal"). CLEAR is an
    instruction to drop whatever guess the tile has and is never stored.
    """

    EMPTY = "empty"
    CLEAR = "clear"


Guess = Union[AnimalKind, GuessMark]


@dataclass(frozen=True)
class Turn:
    """One three-tile search and its aggregate clue."""

    id: str
    turn_number: int
    tiles: tuple[Coordinate, ...]
    result: Mapping[AnimalKind, int]
    timestamp: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        """Freeze tiles and result."""
        object.__setattr__(self, "tiles", tuple(self.tiles))
        object.__setattr__(self, "result", MappingProxyType(dict(self.result)))

    @property
    def hits(self) -> int:
        return sum(self.result.values())


@dataclass(frozen=True)
class FinalResult:
    """Scored guesses for a finished (or hypothetically finished) game."""

    outcome: Outcome
    correct_count: int
    total_guessed: int  # Guesses other than "empty"
    total_animal_tiles: int
    board: Board

    @property
    def accuracy(self) -> float:
        """Percent of non-empty guesses that were right."""
        if self.total_guessed == 0:
            return 0.0
        return round(100.0 * self.correct_count / self.total_guessed, 1)

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WIN


@dataclass
class GameState:
    """Everything about one game in progress.

    The board is hidden ground truth. Mutate through the functions in
    fritz.game.engine rather than assigning fields directly.
    """

    board: Board
    history: list[Turn] = field(default_factory=list)
    selections: list[Coordinate] = field(default_factory=list)
    notes: dict[Coordinate, str] = field(default_factory=dict)
    guesses: dict[Coordinate, Guess] = field(default_factory=dict)
    completed: bool = False
    outcome: Outcome = Outcome.NONE
    game_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)
    completed_at: Optional[datetime] = None

    @property
    def board_id(self) -> str:
        return self.board.board_id

    @property
    def turn_count(self) -> int:
        return len(self.history)

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WIN
