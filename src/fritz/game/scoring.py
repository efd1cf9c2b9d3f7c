"""Final guess scoring."""

from __future__ import annotations

from typing import Mapping

from fritz.board.board import Board
from fritz.board.coords import Coordinate
from fritz.game.state import FinalResult, Guess, GuessMark, Outcome


def evaluate_guesses(board: Board, guesses: Mapping[Coordinate, Guess]) -> FinalResult:
    """Score guesses against the board.

    The game is won when every animal tile carries the right kind; guesses
    on empty tiles never decide win or loss. Accuracy covers every guess
    that is not "empty", so naming an animal on an empty tile counts as a
    wrong guess.
    """
    all_correct = all(guesses.get(coord) == kind for coord, kind in board.items())

    correct = 0
    guessed = 0
    for coord, guess in guesses.items():
        if guess is GuessMark.EMPTY:
            continue
        guessed += 1
        if coord in board and board[coord] == guess:
            correct += 1

    return FinalResult(
        outcome=Outcome.WIN if all_correct else Outcome.LOSE,
        correct_count=correct,
        total_guessed=guessed,
        total_animal_tiles=len(board),
        board=board,
    )
