"""Terminal display for boards, clues and results."""

from __future__ import annotations

from typing import Mapping, Optional

from fritz.board.board import Board
from fritz.board.coords import GRID_SIZE, Coordinate
from fritz.board.shapes import AnimalKind
from fritz.game.engine import animal_guess_count, ready_to_finalize
from fritz.game.state import FinalResult, GameState, GuessMark, Turn
from fritz.game.stats import GameStats


ANIMAL_EMOJI = {
    AnimalKind.RABBIT: "\U0001F430",
    AnimalKind.DEER: "\U0001F98C",
    AnimalKind.LION: "\U0001F981",
    AnimalKind.EAGLE: "\U0001F985",
    AnimalKind.BISON: "\U0001F9AC",
    AnimalKind.ZEBRA: "\U0001F993",
}

# Single-width symbols keep the grid aligned
ANIMAL_LETTERS = {
    AnimalKind.RABBIT: "R",
    AnimalKind.DEER: "D",
    AnimalKind.LION: "L",
    AnimalKind.EAGLE: "E",
    AnimalKind.BISON: "B",
    AnimalKind.ZEBRA: "Z",
}
EMPTY_GUESS_SYMBOL = "x"
UNKNOWN_SYMBOL = "."
SEARCHED_SYMBOL = "o"


def format_result(result: Mapping[AnimalKind, int]) -> str:
    """Format a clue like "🦌 1 deer, 🐰 2 rabbits"."""
    parts = []
    for kind in AnimalKind:
        count = result.get(kind, 0)
        if count > 0:
            plural = "s" if count > 1 else ""
            parts.append(f"{ANIMAL_EMOJI[kind]} {count} {kind.value}{plural}")
    return ", ".join(parts) if parts else "All Miss"


def format_turn(turn: Turn) -> str:
    tiles = " ".join(c.key for c in turn.tiles)
    return f"Turn {turn.turn_number}: {tiles} -> {format_result(turn.result)}"


class BoardRenderer:
    """Renders the player's view of the grid."""

    def render(self, state: GameState, debug: bool = False) -> str:
        """Render grid with selections, guesses and note markers.

        Selected tiles are bracketed, tiles with notes get a trailing '*'
        and unguessed tiles already searched show 'o'.
        With debug=True the hidden animals are drawn in lowercase under
        any unguessed tile.
        """
        searched = {c for turn in state.history for c in turn.tiles}
        lines: list[str] = []
        header = "    " + "".join(f" {chr(ord('A') + c)}  " for c in range(GRID_SIZE))
        lines.append(header.rstrip())

        for row in range(1, GRID_SIZE + 1):
            cells = []
            for col in range(1, GRID_SIZE + 1):
                coord = Coordinate(row, col)
                symbol = self._symbol(state, coord, debug, coord in searched)
                left, right = ("[", "]") if coord in state.selections else (" ", " ")
                marker = "*" if coord in state.notes else " "
                cells.append(f"{left}{symbol}{right}{marker}")
            lines.append(f"{row:>2}  " + "".join(cells).rstrip())

        lines.append("")
        lines.append(
            f"Turns: {state.turn_count}  |  Animal guesses: {animal_guess_count(state)}/{len(state.board)}"
            + ("  |  Ready for final submit" if ready_to_finalize(state) and not state.completed else "")
        )
        return "\n".join(lines)

    def render_board(self, board: Board) -> str:
        """Render a bare board (solution view)."""
        lines = ["   " + " ".join(chr(ord("A") + c) for c in range(GRID_SIZE))]
        for row in range(1, GRID_SIZE + 1):
            symbols = []
            for col in range(1, GRID_SIZE + 1):
                kind = board.get(Coordinate(row, col))
                symbols.append(ANIMAL_LETTERS[kind] if kind else UNKNOWN_SYMBOL)
            lines.append(f"{row:>2} " + " ".join(symbols))
        return "\n".join(lines)

    def _symbol(self, state: GameState, coord: Coordinate, debug: bool, searched: bool = False) -> str:
        guess = state.guesses.get(coord)
        if guess is GuessMark.EMPTY:
            return EMPTY_GUESS_SYMBOL
        if isinstance(guess, AnimalKind):
            return ANIMAL_LETTERS[guess]
        if debug and coord in state.board:
            return ANIMAL_LETTERS[state.board[coord]].lower()
        if searched:
            return SEARCHED_SYMBOL
        return UNKNOWN_SYMBOL


def render_history(history: list[Turn], limit: Optional[int] = None) -> str:
    """Most recent turn first."""
    if not history:
        return "No moves yet"
    turns = list(reversed(history))
    if limit is not None:
        turns = turns[:limit]
    return "\n".join(format_turn(t) for t in turns)


def render_notes(state: GameState) -> str:
    if not state.notes:
        return "No notes"
    return "\n".join(f"{coord.key}: {text}" for coord, text in sorted(state.notes.items()))


def render_final(result: FinalResult, renderer: Optional[BoardRenderer] = None) -> str:
    """Final results text, with the solution on a loss."""
    renderer = renderer or BoardRenderer()
    lines = [
        "Final Results:",
        f"{result.correct_count}/{result.total_animal_tiles} correct animal guesses! "
        f"(accuracy {result.accuracy:.1f}%)",
        "",
    ]
    if result.won:
        lines.append("Perfect! You found all animals!")
    else:
        lines.append("You lost! Here's the correct board layout:")
        lines.append("")
        lines.append(renderer.render_board(result.board))
    return "\n".join(lines)


def render_stats(stats: GameStats) -> str:
    average = stats.average_turns_to_win
    return "\n".join([
        f"Games played: {stats.total_games}",
        f"Win rate: {stats.win_percentage:.1f}%",
        f"Average turns to win: {average if average is not None else 'N/A'}",
        f"Current streak: {stats.current_win_streak}  |  Longest streak: {stats.longest_win_streak}",
    ])
