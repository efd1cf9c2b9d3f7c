"""Win/loss counters across games."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from fritz.game.state import Outcome


@dataclass
class GameStats:
    """Simple per-player counters."""

    total_games: int = 0
    total_wins: int = 0
    total_turns_won_games: int = 0
    current_win_streak: int = 0
    longest_win_streak: int = 0

    def record(self, outcome: Outcome, turns: int) -> None:
        """Count one finished game."""
        if outcome is Outcome.NONE:
            raise ValueError("Cannot record a game that has not finished")

        self.total_games += 1
        if outcome is Outcome.WIN:
            self.total_wins += 1
            self.total_turns_won_games += turns
            self.current_win_streak += 1
            self.longest_win_streak = max(self.longest_win_streak, self.current_win_streak)
        else:
            self.current_win_streak = 0

    @property
    def win_percentage(self) -> float:
        if self.total_games == 0:
            return 0.0
        return round(100.0 * self.total_wins / self.total_games, 1)

    @property
    def average_turns_to_win(self) -> Optional[float]:
        if self.total_wins == 0:
            return None
        return round(self.total_turns_won_games / self.total_wins, 1)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GameStats":
        """Create GameStats from dict; missing counters default to zero."""
        data = data or {}
        return cls(**{name: int(data.get(name, 0)) for name in cls.__dataclass_fields__})
