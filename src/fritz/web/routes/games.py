"""Games API routes for play over HTTP.

Every mutation loads the stored GameState, applies one engine action and
writes it back with a bumped ``version``. Clients may send the version they
last saw; a stale one is rejected with 409 so duplicate or out-of-order
requests cannot clobber newer progress.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session as SQLSession

from fritz.board.generator import generate_board
from fritz.errors import CorruptStateError, FritzError, GameCompletedError
from fritz.game.engine import (
    apply_guess_to_selection,
    create_game,
    finalize_game,
    set_guess,
    set_note,
    submit_turn,
    toggle_selection,
)
from fritz.game.serialization import (
    final_result_to_dict,
    public_snapshot,
    state_from_json,
    state_to_json,
    turn_to_dict,
)
from fritz.game.state import GameState
from fritz.web.dependencies import get_db, get_player_id
from fritz.web.models import BoardRecord, GameRecord, utc_now
from fritz.web.routes.boards import load_board, store_board
from fritz.web.routes.stats import record_outcome

logger = logging.getLogger(__name__)

router = APIRouter()

T = TypeVar("T")


# Request/Response models


class CreateGameRequest(BaseModel):
    """Start a game on an existing board, or on a freshly generated one."""

    board_id: Optional[str] = None


class GameResponse(BaseModel):
    """Public view of a game."""

    game_id: str
    board_id: str
    state: dict[str, Any]
    version: int
    completed: bool


class GameSummary(BaseModel):
    game_id: str
    board_id: str
    turn_count: int
    completed: bool
    outcome: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SelectionRequest(BaseModel):
    tile: str
    version: Optional[int] = None


class TurnRequest(BaseModel):
    """Search three tiles."""

    tiles: list[str]
    version: Optional[int] = None


class TurnResponse(BaseModel):
    turn: dict[str, Any]
    state: dict[str, Any]
    version: int


class TurnPage(BaseModel):
    """One page of turn history, newest first."""

    turns: list[dict[str, Any]]
    page: int
    limit: int
    total: int
    has_more: bool


class NotesRequest(BaseModel):
    """Upsert notes; blank text removes a note."""

    notes: dict[str, str]
    version: Optional[int] = None


class GuessesRequest(BaseModel):
    guesses: dict[str, str]
    version: Optional[int] = None


class SelectionGuessRequest(BaseModel):
    guess: str
    version: Optional[int] = None


class SubmitRequest(BaseModel):
    version: Optional[int] = None


class SubmitResponse(BaseModel):
    """Final score with the revealed board."""

    outcome: str
    correct_count: int
    total_guessed: int
    total_animal_tiles: int
    accuracy: float
    board: dict[str, str]
    turn_count: int
    version: int


# Helpers


def _domain_error(e: FritzError) -> HTTPException:
    """Map an engine error to an HTTP status."""
    status = 409 if isinstance(e, GameCompletedError) else 400
    return HTTPException(status_code=status, detail={"code": e.code, "message": str(e)})


def _get_record(db: SQLSession, game_id: str, lock: bool = False) -> GameRecord:
    query = db.query(GameRecord).filter(GameRecord.id == game_id)
    if lock:
        query = query.with_for_update()
    record = query.first()
    if not record:
        raise HTTPException(status_code=404, detail="Game not found")
    return record


def _load_state(record: GameRecord) -> GameState:
    try:
        return state_from_json(record.state_json, board=load_board(record.board))
    except CorruptStateError as e:
        logger.error(f"Stored game {record.id} is unreadable: {e}")
        raise HTTPException(status_code=500, detail={"code": e.code, "message": str(e)})


def _store_state(record: GameRecord, state: GameState) -> None:
    record.state_json = state_to_json(state, indent=None, include_board=False)
    record.version = (record.version or 0) + 1
    record.turn_count = state.turn_count
    record.completed = state.completed
    record.outcome = state.outcome.value
    record.completed_at = state.completed_at
    record.updated_at = utc_now()


def _check_version(record: GameRecord, version: Optional[int]) -> None:
    if version is not None and version != record.version:
        raise HTTPException(
            status_code=409,
            detail=f"Version conflict: expected {record.version}, got {version}",
        )


def _mutate(
    db: SQLSession,
    game_id: str,
    version: Optional[int],
    action: Callable[[GameState], T],
    on_success: Optional[Callable[[GameRecord, GameState, T], None]] = None,
) -> tuple[GameRecord, GameState, T]:
    """Apply *action* to the stored game and persist the new state.

    Uses pessimistic locking (SELECT FOR UPDATE) around the version check
    and the update. Nothing is written when the action raises.
    *on_success* runs before the commit, in the same transaction.
    """
    record = _get_record(db, game_id, lock=True)
    _check_version(record, version)
    state = _load_state(record)

    try:
        value = action(state)
    except FritzError as e:
        db.rollback()
        raise _domain_error(e) from e

    _store_state(record, state)
    if on_success is not None:
        on_success(record, state, value)
    db.commit()
    return record, state, value


def _game_response(record: GameRecord, state: GameState) -> GameResponse:
    return GameResponse(
        game_id=record.id,
        board_id=record.board_id,
        state=public_snapshot(state),
        version=record.version,
        completed=state.completed,
    )


# Endpoints


@router.post("/games", response_model=GameResponse, status_code=201)
async def create(
    request: CreateGameRequest,
    db: SQLSession = Depends(get_db),
    player_id: str = Depends(get_player_id),
):
    """Start a new game.

    With ``board_id`` the game replays a stored board; otherwise a new
    board is generated from server-side randomness.
    """
    if request.board_id is not None:
        board_record = db.query(BoardRecord).filter(BoardRecord.id == request.board_id).first()
        if not board_record:
            raise HTTPException(status_code=404, detail="Board not found")
        board = load_board(board_record)
    else:
        try:
            board = generate_board(rng=random.Random())
        except FritzError as e:
            logger.error(f"Board generation failed: {e}")
            raise HTTPException(status_code=500, detail={"code": e.code, "message": str(e)})
        board_record = store_board(db, board)

    state = create_game(board)
    record = GameRecord(
        id=state.game_id,
        board_id=board_record.id,
        player_id=player_id,
        state_json=state_to_json(state, indent=None, include_board=False),
        version=1,
        turn_count=0,
        completed=False,
        outcome=state.outcome.value,
    )
    db.add(record)

    # Increment play count
    board_record.play_count = (board_record.play_count or 0) + 1
    db.commit()

    logger.info(f"Game {record.id} started on board {board_record.id}")
    return _game_response(record, state)


@router.get("/games", response_model=list[GameSummary])
async def list_games(
    status: Optional[str] = Query(None, pattern="^(in_progress|completed)$"),
    db: SQLSession = Depends(get_db),
    player_id: str = Depends(get_player_id),
):
    """This player's games, most recently updated first."""
    query = db.query(GameRecord).filter(GameRecord.player_id == player_id)
    if status is not None:
        query = query.filter(GameRecord.completed == (status == "completed"))
    records = query.order_by(GameRecord.updated_at.desc()).all()
    return [
        GameSummary(
            game_id=r.id,
            board_id=r.board_id,
            turn_count=r.turn_count or 0,
            completed=bool(r.completed),
            outcome=r.outcome or "none",
            version=r.version,
            created_at=r.created_at,
            updated_at=r.updated_at,
        )
        for r in records
    ]


@router.get("/games/{game_id}", response_model=GameResponse)
async def get_game(game_id: str, db: SQLSession = Depends(get_db)):
    """Get current game state for resuming."""
    record = _get_record(db, game_id)
    return _game_response(record, _load_state(record))


@router.post("/games/{game_id}/selections", response_model=GameResponse)
async def toggle(game_id: str, request: SelectionRequest, db: SQLSession = Depends(get_db)):
    """Toggle one tile in the current selection."""
    record, state, _ = _mutate(db, game_id, request.version, lambda s: toggle_selection(s, request.tile))
    return _game_response(record, state)


@router.post("/games/{game_id}/turns", response_model=TurnResponse, status_code=201)
async def search(game_id: str, request: TurnRequest, db: SQLSession = Depends(get_db)):
    """Search three tiles and record the clue."""
    record, state, turn = _mutate(db, game_id, request.version, lambda s: submit_turn(s, request.tiles))
    return TurnResponse(turn=turn_to_dict(turn), state=public_snapshot(state), version=record.version)


@router.get("/games/{game_id}/turns", response_model=TurnPage)
async def history(
    game_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100),
    db: SQLSession = Depends(get_db),
):
    """Paginated turn history, newest first."""
    state = _load_state(_get_record(db, game_id))
    newest_first = list(reversed(state.history))
    start = (page - 1) * limit
    turns = newest_first[start:start + limit]
    return TurnPage(
        turns=[turn_to_dict(t) for t in turns],
        page=page,
        limit=limit,
        total=len(newest_first),
        has_more=start + limit < len(newest_first),
    )


@router.put("/games/{game_id}/notes", response_model=GameResponse)
async def put_notes(game_id: str, request: NotesRequest, db: SQLSession = Depends(get_db)):
    """Upsert notes. Allowed after the game has ended."""

    def apply(state: GameState) -> None:
        for tile, text in request.notes.items():
            set_note(state, tile, text)

    record, state, _ = _mutate(db, game_id, request.version, apply)
    return _game_response(record, state)


@router.put("/games/{game_id}/guesses", response_model=GameResponse)
async def put_guesses(game_id: str, request: GuessesRequest, db: SQLSession = Depends(get_db)):
    """Upsert guesses; "clear" removes one."""

    def apply(state: GameState) -> None:
        for tile, value in request.guesses.items():
            set_guess(state, tile, value)

    record, state, _ = _mutate(db, game_id, request.version, apply)
    return _game_response(record, state)


@router.post("/games/{game_id}/guesses/selection", response_model=GameResponse)
async def guess_selection(game_id: str, request: SelectionGuessRequest, db: SQLSession = Depends(get_db)):
    """Apply one guess to every selected tile."""
    record, state, _ = _mutate(
        db, game_id, request.version, lambda s: apply_guess_to_selection(s, request.guess)
    )
    return _game_response(record, state)


@router.post("/games/{game_id}/submit", response_model=SubmitResponse)
async def submit(game_id: str, request: SubmitRequest, db: SQLSession = Depends(get_db)):
    """Score the guesses and end the game, revealing the board."""
    def count(record: GameRecord, state: GameState, result) -> None:
        if result.won:
            record.board.win_count = (record.board.win_count or 0) + 1
        record_outcome(db, record.player_id, result.outcome, state.turn_count)

    record, state, result = _mutate(db, game_id, request.version, finalize_game, on_success=count)

    return SubmitResponse(
        **final_result_to_dict(result),
        turn_count=state.turn_count,
        version=record.version,
    )
