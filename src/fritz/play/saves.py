"""Save file for the terminal game."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fritz.errors import CorruptStateError
from fritz.game.serialization import state_from_dict, state_to_dict
from fritz.game.state import GameState
from fritz.game.stats import GameStats

logger = logging.getLogger(__name__)

DEFAULT_SAVE_PATH = Path.home() / ".fritz" / "save.json"


class SaveStore:
    """Keeps one saved game and the player's stats in a JSON file.

    Layout: {"game": <state dict or null>, "stats": <stats dict>}
    """

    def __init__(self, path: Path | str = DEFAULT_SAVE_PATH):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"Save file {self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise CorruptStateError(f"Save file {self.path} is not a JSON object")
        return data

    def _read_for_update(self) -> Dict[str, Any]:
        try:
            return self._read()
        except CorruptStateError as e:
            logger.warning(f"Replacing unreadable save file: {e}")
            return {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump(data, f, indent=2)
        tmp.replace(self.path)

    def save(self, state: GameState, stats: Optional[GameStats] = None) -> None:
        """Write the game (and stats, if given) to disk."""
        data = self._read_for_update()
        data["game"] = state_to_dict(state)
        if stats is not None:
            data["stats"] = stats.to_dict()
        self._write(data)
        logger.debug(f"Saved game {state.game_id} to {self.path}")

    def load(self) -> Optional[GameState]:
        """Load the saved game, or None if there is none."""
        game = self._read().get("game")
        if not game:
            return None
        return state_from_dict(game)

    def load_stats(self) -> GameStats:
        try:
            return GameStats.from_dict(self._read().get("stats"))
        except (AttributeError, TypeError, ValueError) as e:
            raise CorruptStateError(f"Save file {self.path} has malformed stats: {e}") from e

    def save_stats(self, stats: GameStats) -> None:
        data = self._read_for_update()
        data["stats"] = stats.to_dict()
        self._write(data)

    def clear(self) -> None:
        """Forget the saved game; stats are kept."""
        data = self._read_for_update()
        if data.pop("game", None) is not None:
            self._write(data)
            logger.debug(f"Cleared saved game in {self.path}")
