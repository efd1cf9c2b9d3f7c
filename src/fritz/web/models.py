"""SQLAlchemy models for server-side persistence."""

from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    Text,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import declarative_base, relationship


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


Base = declarative_base()


class BoardRecord(Base):
    """A generated board arrangement (hidden cells)."""

    __tablename__ = "boards"

    id = Column(String, primary_key=True)  # Board fingerprint
    name = Column(String, nullable=False)
    cells_json = Column(Text, nullable=False)  # {"A1": "rabbit", ...}
    created_at = Column(DateTime, default=utc_now)
    play_count = Column(Integer, default=0)
    win_count = Column(Integer, default=0)

    games = relationship("GameRecord", back_populates="board")

    @property
    def win_rate(self) -> float:
        played = self.play_count or 0
        if played == 0:
            return 0.0
        return round(100.0 * (self.win_count or 0) / played, 1)


class GameRecord(Base):
    """One player's game on a board."""

    __tablename__ = "games"

    id = Column(String, primary_key=True)  # GameState.game_id
    board_id = Column(String, ForeignKey("boards.id"), nullable=False)
    player_id = Column(String, nullable=False)  # Hashed client IP
    state_json = Column(Text, nullable=False)
    version = Column(Integer, default=1)
    turn_count = Column(Integer, default=0)
    completed = Column(Boolean, default=False)
    outcome = Column(String, default="none")  # none|win|lose
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
    completed_at = Column(DateTime)

    board = relationship("BoardRecord", back_populates="games")

    __table_args__ = (Index("idx_games_player", "player_id", "completed"),)


class PlayerStats(Base):
    """Outcome counters per player."""

    __tablename__ = "player_stats"

    player_id = Column(String, primary_key=True)
    total_games = Column(Integer, default=0)
    total_wins = Column(Integer, default=0)
    total_turns_won_games = Column(Integer, default=0)
    current_win_streak = Column(Integer, default=0)
    longest_win_streak = Column(Integer, default=0)
