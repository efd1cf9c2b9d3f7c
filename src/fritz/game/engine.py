"""Player actions on a GameState.

Every action validates its input before touching the state, so a rejected
action leaves the game exactly as it was.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable, Optional, Union

from fritz.board.board import Board
from fritz.board.coords import Coordinate, CoordLike, to_coordinate
from fritz.board.shapes import AnimalKind
from fritz.errors import GameCompletedError, InvalidGuessError, InvalidSelectionError
from fritz.game.clues import TILES_PER_TURN, evaluate_turn, normalize_tiles
from fritz.game.scoring import evaluate_guesses
from fritz.game.state import FinalResult, GameState, GuessMark, Turn, utc_now

logger = logging.getLogger(__name__)

GuessInput = Union[AnimalKind, GuessMark, str]


def create_game(board: Board, game_id: Optional[str] = None) -> GameState:
    """Start a fresh game on *board*."""
    state = GameState(board=board)
    if game_id is not None:
        state.game_id = game_id
    logger.debug(f"Created game {state.game_id} on board {state.board_id}")
    return state


def parse_guess(value: GuessInput) -> Union[AnimalKind, GuessMark]:
    """Accept an AnimalKind, a GuessMark, or either's string value."""
    if isinstance(value, (AnimalKind, GuessMark)):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        for enum_type in (AnimalKind, GuessMark):
            try:
                return enum_type(text)
            except ValueError:
                continue
    raise InvalidGuessError(f"Unknown guess {value!r}")


def _require_in_progress(state: GameState) -> None:
    if state.completed:
        raise GameCompletedError(f"Game {state.game_id} is already completed")


def _tile(value: CoordLike) -> Coordinate:
    try:
        return to_coordinate(value)
    except (TypeError, ValueError) as e:
        raise InvalidSelectionError(f"Invalid tile {value!r}: {e}") from e


def toggle_selection(state: GameState, coord: CoordLike) -> tuple[Coordinate, ...]:
    """Select or deselect a tile for the next search.

    Selecting a fourth tile is ignored.
    """
    _require_in_progress(state)
    tile = _tile(coord)

    if tile in state.selections:
        state.selections.remove(tile)
    elif len(state.selections) < TILES_PER_TURN:
        state.selections.append(tile)
    return tuple(state.selections)


def submit_turn(state: GameState, tiles: Iterable[CoordLike]) -> Turn:
    """Search three tiles and record the aggregate clue.

    Raises:
        GameCompletedError: Game already finalized
        InvalidSelectionError: Not exactly three distinct on-grid tiles
    """
    _require_in_progress(state)
    coords = normalize_tiles(tiles)

    turn = Turn(
        id=uuid.uuid4().hex,
        turn_number=len(state.history) + 1,
        tiles=coords,
        result=evaluate_turn(state.board, coords),
    )
    state.history.append(turn)
    state.selections.clear()
    logger.debug(f"Game {state.game_id} turn {turn.turn_number}: {turn.hits} hit(s)")
    return turn


def submit_selection(state: GameState) -> Turn:
    """Search the currently selected tiles."""
    return submit_turn(state, list(state.selections))


def set_note(state: GameState, coord: CoordLike, text: str) -> None:
    """Write a note on a tile; blank text removes it.

    Allowed on finished games.
    """
    tile = _tile(coord)
    if text is None or not text.strip():
        state.notes.pop(tile, None)
    else:
        state.notes[tile] = text


def _apply_guess(state: GameState, tiles: Iterable[Coordinate], guess: Union[AnimalKind, GuessMark]) -> None:
    for tile in tiles:
        if guess is GuessMark.CLEAR:
            state.guesses.pop(tile, None)
        else:
            state.guesses[tile] = guess


def set_guess(state: GameState, coord: CoordLike, value: GuessInput) -> None:
    """Record (or with "clear", remove) a guess for one tile."""
    _require_in_progress(state)
    tile = _tile(coord)
    guess = parse_guess(value)
    _apply_guess(state, [tile], guess)


def apply_guess_to_selection(state: GameState, value: GuessInput) -> None:
    """Apply one guess to every selected tile, then clear the selection."""
    _require_in_progress(state)
    guess = parse_guess(value)
    _apply_guess(state, list(state.selections), guess)
    state.selections.clear()


def ready_to_finalize(state: GameState) -> bool:
    """True once every animal tile has a guess other than "empty"."""
    return all(
        coord in state.guesses and state.guesses[coord] is not GuessMark.EMPTY
        for coord in state.board
    )


def finalize_game(state: GameState) -> FinalResult:
    """Score the guesses and end the game for good.

    Callable at any point of a game in progress; whatever guesses exist
    are scored.
    """
    _require_in_progress(state)
    result = evaluate_guesses(state.board, state.guesses)

    state.completed = True
    state.completed_at = utc_now()
    state.outcome = result.outcome
    logger.info(
        f"Game {state.game_id} finished: {result.outcome.value} "
        f"({result.correct_count}/{result.total_animal_tiles} after {state.turn_count} turns)"
    )
    return result


def final_result(state: GameState) -> Optional[FinalResult]:
    """Score of a finished game, or None while it is still in progress."""
    if not state.completed:
        return None
    return evaluate_guesses(state.board, state.guesses)


def animal_guess_count(state: GameState) -> int:
    """Number of tiles guessed as some animal."""
    return sum(1 for g in state.guesses.values() if g is not GuessMark.EMPTY)
