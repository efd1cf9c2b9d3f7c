"""Player statistics routes."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session as SQLSession

from fritz.game.state import Outcome
from fritz.game.stats import GameStats
from fritz.web.dependencies import get_db, get_player_id
from fritz.web.models import PlayerStats

router = APIRouter()

_COUNTERS = tuple(GameStats.__dataclass_fields__)


def stats_for(record: Optional[PlayerStats]) -> GameStats:
    if record is None:
        return GameStats()
    return GameStats.from_dict({name: getattr(record, name) or 0 for name in _COUNTERS})


def record_outcome(db: SQLSession, player_id: str, outcome: Outcome, turns: int) -> GameStats:
    """Add a finished game to the player's counters. Caller commits."""
    record = db.query(PlayerStats).filter(PlayerStats.player_id == player_id).first()
    if record is None:
        record = PlayerStats(player_id=player_id)
        db.add(record)

    stats = stats_for(record)
    stats.record(outcome, turns)
    for name, value in stats.to_dict().items():
        setattr(record, name, value)
    return stats


class StatsResponse(BaseModel):
    """Counters plus derived figures."""

    total_games: int
    total_wins: int
    total_turns_won_games: int
    current_win_streak: int
    longest_win_streak: int
    win_percentage: float
    average_turns_to_win: Optional[float] = None


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    db: SQLSession = Depends(get_db),
    player_id: str = Depends(get_player_id),
):
    record = db.query(PlayerStats).filter(PlayerStats.player_id == player_id).first()
    stats = stats_for(record)
    return StatsResponse(
        **stats.to_dict(),
        win_percentage=stats.win_percentage,
        average_turns_to_win=stats.average_turns_to_win,
    )
