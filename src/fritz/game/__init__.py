"""Game state, player actions and scoring."""

from fritz.game.state import GameState, Turn, FinalResult, Outcome, GuessMark
from fritz.game.engine import (
    create_game,
    toggle_selection,
    submit_turn,
    submit_selection,
    set_note,
    set_guess,
    apply_guess_to_selection,
    ready_to_finalize,
    finalize_game,
    final_result,
)
from fritz.game.clues import evaluate_turn
from fritz.game.scoring import evaluate_guesses
from fritz.game.stats import GameStats
from fritz.game.serialization import (
    state_to_dict,
    state_from_dict,
    state_to_json,
    state_from_json,
    public_snapshot,
)

__all__ = [
    "GameState",
    "Turn",
    "FinalResult",
    "Outcome",
    "GuessMark",
    "create_game",
    "toggle_selection",
    "submit_turn",
    "submit_selection",
    "set_note",
    "set_guess",
    "apply_guess_to_selection",
    "ready_to_finalize",
    "finalize_game",
    "final_result",
    "evaluate_turn",
    "evaluate_guesses",
    "GameStats",
    "state_to_dict",
    "state_from_dict",
    "state_to_json",
    "state_from_json",
    "public_snapshot",
]
