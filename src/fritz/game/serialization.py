"""JSON serialization for GameState."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from fritz.board.board import Board
from fritz.board.coords import Coordinate
from fritz.board.shapes import AnimalKind
from fritz.errors import CorruptStateError
from fritz.game.clues import evaluate_turn
from fritz.game.engine import animal_guess_count, final_result, parse_guess, ready_to_finalize
from fritz.game.state import FinalResult, GameState, GuessMark, Outcome, Turn

SCHEMA_VERSION = "1.0"


def state_to_dict(state: GameState, include_board: bool = True) -> Dict[str, Any]:
    """Convert GameState to JSON-serializable dict.

    With include_board=False only the board_id is written and the caller
    must supply the board again when loading.
    """
    data: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "game_id": state.game_id,
        "board_id": state.board_id,
        "selections": [c.key for c in state.selections],
        "history": [turn_to_dict(t) for t in state.history],
        "completed": state.completed,
        "outcome": state.outcome.value,
        "notes": {c.key: text for c, text in sorted(state.notes.items())},
        "guesses": {c.key: g.value for c, g in sorted(state.guesses.items())},
        "created_at": state.created_at.isoformat(),
        "completed_at": state.completed_at.isoformat() if state.completed_at else None,
    }
    if include_board:
        data["board"] = state.board.to_dict()
    return data


def state_to_json(state: GameState, indent: Optional[int] = 2, include_board: bool = True) -> str:
    """Serialize GameState to JSON string."""
    return json.dumps(state_to_dict(state, include_board=include_board), indent=indent)


def state_from_dict(data: Dict[str, Any], board: Optional[Board] = None) -> GameState:
    """Create GameState from dict.

    Args:
        data: Output of state_to_dict
        board: Board to attach when the data carries only a board_id

    Raises:
        CorruptStateError: If the data is malformed or inconsistent.
    """
    try:
        board = _board_from_data(data, board)
        state = GameState(
            board=board,
            history=[_turn_from_dict(t) for t in data.get("history", [])],
            selections=[Coordinate.parse(k) for k in data.get("selections", [])],
            notes={Coordinate.parse(k): str(v) for k, v in data.get("notes", {}).items()},
            guesses={Coordinate.parse(k): _stored_guess(v) for k, v in data.get("guesses", {}).items()},
            completed=bool(data.get("completed", False)),
            outcome=Outcome(data.get("outcome", Outcome.NONE.value)),
        )
        if data.get("game_id"):
            state.game_id = str(data["game_id"])
        if data.get("created_at"):
            state.created_at = datetime.fromisoformat(data["created_at"])
        if data.get("completed_at"):
            state.completed_at = datetime.fromisoformat(data["completed_at"])
    except CorruptStateError:
        raise
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise CorruptStateError(f"Malformed game data: {e}") from e

    _check_consistency(state)
    return state


def state_from_json(json_str: str, board: Optional[Board] = None) -> GameState:
    """Deserialize GameState from JSON string."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"Not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CorruptStateError("Game data must be a JSON object")
    return state_from_dict(data, board=board)


def public_snapshot(state: GameState) -> Dict[str, Any]:
    """Read-only view for presentation layers.

    The board is only included once the game is completed.
    """
    snapshot = state_to_dict(state, include_board=False)
    snapshot.update({
        "turn_count": state.turn_count,
        "animal_guesses": animal_guess_count(state),
        "total_animal_tiles": len(state.board),
        "ready_to_finalize": ready_to_finalize(state),
    })
    result = final_result(state)
    if result is not None:
        snapshot["result"] = final_result_to_dict(result)
    return snapshot


def final_result_to_dict(result: FinalResult) -> Dict[str, Any]:
    """Convert FinalResult to dict, revealing the board."""
    return {
        "outcome": result.outcome.value,
        "correct_count": result.correct_count,
        "total_guessed": result.total_guessed,
        "total_animal_tiles": result.total_animal_tiles,
        "accuracy": result.accuracy,
        "board": result.board.to_dict(),
    }


def turn_to_dict(turn: Turn) -> Dict[str, Any]:
    """Convert Turn to dict."""
    return {
        "id": turn.id,
        "turn_number": turn.turn_number,
        "tiles": [c.key for c in turn.tiles],
        "result": {kind.value: count for kind, count in turn.result.items()},
        "timestamp": turn.timestamp.isoformat(),
    }


def _turn_from_dict(data: Dict[str, Any]) -> Turn:
    """Create Turn from dict."""
    return Turn(
        id=str(data["id"]),
        turn_number=int(data["turn_number"]),
        tiles=tuple(Coordinate.parse(k) for k in data["tiles"]),
        result={AnimalKind(k): int(v) for k, v in data.get("result", {}).items()},
        timestamp=datetime.fromisoformat(data["timestamp"]),
    )


def _stored_guess(value: str):
    guess = parse_guess(value)
    if guess is GuessMark.CLEAR:
        raise ValueError("'clear' is not a stored guess")
    return guess


def _board_from_data(data: Dict[str, Any], board: Optional[Board]) -> Board:
    stored_id = data.get("board_id")
    if board is None:
        if "board" not in data:
            raise CorruptStateError("Game data has no board and none was supplied")
        board = Board.from_dict(data["board"])
    if stored_id and stored_id != board.board_id:
        raise CorruptStateError(f"Board mismatch: data is for {stored_id}, got {board.board_id}")
    return board


def _check_consistency(state: GameState) -> None:
    """Reject loaded state that no sequence of actions could produce."""
    problems: List[str] = []

    numbers = [t.turn_number for t in state.history]
    if numbers != list(range(1, len(numbers) + 1)):
        problems.append(f"turn numbers are not 1..N: {numbers}")
    for turn in state.history:
        if len(turn.tiles) != 3 or len(set(turn.tiles)) != 3:
            problems.append(f"turn {turn.turn_number} does not search 3 distinct tiles")
        elif dict(turn.result) != evaluate_turn(state.board, turn.tiles):
            problems.append(f"turn {turn.turn_number} result does not match the board")

    if len(state.selections) > 3 or len(set(state.selections)) != len(state.selections):
        problems.append("selections must be at most 3 distinct tiles")
    if state.completed == (state.outcome is Outcome.NONE):
        problems.append(f"completed={state.completed} conflicts with outcome={state.outcome.value}")

    if problems:
        raise CorruptStateError("Inconsistent game data: " + "; ".join(problems))
