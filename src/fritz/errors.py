"""Errors raised by the board generator and game engine.

Every error carries a stable ``code`` so collaborators (the web layer, the
terminal session) can report a reason without parsing messages.
"""

from __future__ import annotations


class FritzError(Exception):
    """Base class for all game errors."""

    code = "fritz_error"


class InvalidSelectionError(FritzError, ValueError):
    """Search needs exactly three distinct on-grid tiles."""

    code = "invalid_selection"


class InvalidGuessError(FritzError, ValueError):
    """Guess value is not an animal kind, "empty" or "clear"."""

    code = "invalid_guess"


class GameCompletedError(FritzError):
    """Mutation attempted on a finished game."""

    code = "game_completed"


class GenerationExhaustedError(FritzError):
    """Board generation ran out of restarts.

    Means the roster is too dense for the grid; not expected with the
    standard animal counts.
    """

    code = "generation_exhausted"

    def __init__(self, restarts: int, failed_kind: str | None = None):
        self.restarts = restarts
        self.failed_kind = failed_kind
        detail = f" (last failure: {failed_kind})" if failed_kind else ""
        super().__init__(f"No valid board after {restarts} restarts{detail}")


class CorruptStateError(FritzError, ValueError):
    """Persisted game data could not be reconstituted."""

    code = "corrupt_state"
