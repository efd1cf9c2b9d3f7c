"""Board API routes.

Only metadata leaves the server; the hidden cells stay in the database.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session as SQLSession

from fritz.board.board import Board
from fritz.web.dependencies import get_db
from fritz.web.models import BoardRecord

logger = logging.getLogger(__name__)

router = APIRouter()

BOARD_NAMES = (
    "Enchanted Forest",
    "Misty Meadow",
    "Savanna Edge",
    "Pine Hollow",
    "Riverbank",
    "Granite Ridge",
    "Sunlit Clearing",
    "Badger Woods",
)


def board_name(board_id: str) -> str:
    """Stable display name derived from the board fingerprint."""
    return BOARD_NAMES[int(board_id, 16) % len(BOARD_NAMES)]


def store_board(db: SQLSession, board: Board) -> BoardRecord:
    """Get the record for *board*, adding it if this arrangement is new."""
    record = db.query(BoardRecord).filter(BoardRecord.id == board.board_id).first()
    if record is None:
        record = BoardRecord(
            id=board.board_id,
            name=board_name(board.board_id),
            cells_json=json.dumps(board.to_dict()),
            play_count=0,
            win_count=0,
        )
        db.add(record)
        logger.debug(f"Stored board {record.id} ({record.name})")
    return record


def load_board(record: BoardRecord) -> Board:
    return Board.from_dict(json.loads(record.cells_json))


class BoardResponse(BaseModel):
    """Board metadata."""

    id: str
    name: str
    play_count: int
    win_count: int
    win_rate: float
    created_at: Optional[datetime] = None


def _to_response(record: BoardRecord) -> BoardResponse:
    return BoardResponse(
        id=record.id,
        name=record.name,
        play_count=record.play_count or 0,
        win_count=record.win_count or 0,
        win_rate=record.win_rate,
        created_at=record.created_at,
    )


@router.get("/boards", response_model=list[BoardResponse])
async def list_boards(
    limit: int = Query(50, ge=1, le=200),
    db: SQLSession = Depends(get_db),
):
    """List boards, most played first."""
    records = (
        db.query(BoardRecord)
        .order_by(BoardRecord.play_count.desc(), BoardRecord.created_at.desc())
        .limit(limit)
        .all()
    )
    return [_to_response(r) for r in records]


@router.get("/boards/{board_id}", response_model=BoardResponse)
async def get_board(board_id: str, db: SQLSession = Depends(get_db)):
    record = db.query(BoardRecord).filter(BoardRecord.id == board_id).first()
    if not record:
        raise HTTPException(status_code=404, detail="Board not found")
    return _to_response(record)
