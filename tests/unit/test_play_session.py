"""Tests for PlaySession."""

import pytest

from fritz.board.shapes import AnimalKind
from fritz.game.engine import create_game
from fritz.play.input import Command, InteractionMode, parse_command
from fritz.play.saves import SaveStore
from fritz.play.session import PlaySession, SessionConfig


class ScriptedReader:
    """Feeds prepared lines to the session."""

    def __init__(self, lines, confirm=True):
        self.lines = list(lines)
        self.answer = confirm

    def read(self, mode, prompt="> "):
        if not self.lines:
            return Command(action="quit")
        return parse_command(self.lines.pop(0), mode)

    def confirm(self, prompt):
        return self.answer


def make_session(sample_board, lines, tmp_path=None, confirm=True):
    config = SessionConfig(seed=42, show_rules=False, save_path=tmp_path / "save.json" if tmp_path else None)
    session = PlaySession(config, reader=ScriptedReader(lines, confirm))
    session.state = create_game(sample_board)
    session.start = lambda: session.state
    return session


class TestSessionConfig:
    def test_seed_generation(self):
        config = SessionConfig(save_path=None)
        assert config.seed is not None

    def test_explicit_seed_kept(self):
        assert SessionConfig(seed=5, save_path=None).seed == 5


class TestPlaySession:
    def test_start_generates_board_from_seed(self):
        a = PlaySession(SessionConfig(seed=9, save_path=None))
        b = PlaySession(SessionConfig(seed=9, save_path=None))
        assert a.start().board == b.start().board

    def test_search_and_history(self, sample_board):
        session = make_session(sample_board, ["search A1 E5 C5", "history"])
        output = []
        assert session.run(output_fn=output.append) is None
        assert session.state.turn_count == 1
        assert any("Turn 1: A1 E5 C5" in line for line in output)

    def test_errors_are_reported_not_raised(self, sample_board):
        session = make_session(sample_board, ["search A1 B1", "guess A1 dragon"])
        output = []
        session.run(output_fn=output.append)
        assert sum(1 for line in output if line.startswith("[!]")) == 2
        assert session.state.turn_count == 0

    def test_guess_mode_uses_current_type(self, sample_board):
        session = make_session(sample_board, ["mode guess lion", "F1", "G1"])
        session.run(output_fn=lambda s: None)
        assert session.mode is InteractionMode.GUESS
        assert set(session.state.guesses.values()) == {AnimalKind.LION}
        assert len(session.state.guesses) == 2

    def test_bad_guess_type_keeps_mode(self, sample_board):
        session = make_session(sample_board, ["mode guess unicorn"])
        output = []
        session.run(output_fn=output.append)
        assert any(line.startswith("[!]") for line in output)
        assert session.mode is InteractionMode.SEARCH
        assert session.guess_type is AnimalKind.RABBIT

    def test_submit_requires_all_animal_tiles(self, sample_board):
        session = make_session(sample_board, ["submit"])
        output = []
        assert session.run(output_fn=output.append) is None
        assert any("Guess all 28" in line for line in output)
        assert not session.state.completed

    def test_submit_win_records_stats(self, sample_board, winning_guesses, tmp_path):
        lines = [f"guess {tile} {kind}" for tile, kind in winning_guesses.items()] + ["submit"]
        session = make_session(sample_board, lines, tmp_path=tmp_path)
        result = session.run(output_fn=lambda s: None)

        assert result is not None and result.won
        assert session.stats.total_wins == 1
        store = SaveStore(tmp_path / "save.json")
        assert store.load() is None
        assert store.load_stats().total_wins == 1

    def test_declined_submit_keeps_playing(self, sample_board, winning_guesses):
        lines = [f"guess {tile} {kind}" for tile, kind in winning_guesses.items()] + ["submit"]
        session = make_session(sample_board, lines, confirm=False)
        assert session.run(output_fn=lambda s: None) is None
        assert not session.state.completed

    def test_quit_saves_progress(self, sample_board, tmp_path):
        session = make_session(sample_board, ["search A1 B1 C1", "quit"], tmp_path=tmp_path)
        session.run(output_fn=lambda s: None)

        resumed = PlaySession(
            SessionConfig(seed=1, show_rules=False, save_path=tmp_path / "save.json"),
            reader=ScriptedReader([]),
        )
        state = resumed.start()
        assert resumed.resumed
        assert state.turn_count == 1
        assert state.board == sample_board

    def test_rules_for_one_animal(self, sample_board):
        session = make_session(sample_board, ["rules zebra"])
        output = []
        session.run(output_fn=output.append)
        assert any("Zebra: x1" in line for line in output)

    @pytest.mark.parametrize("line", ["notes", "board", "stats", "help", "mode"])
    def test_info_commands_do_not_change_state(self, sample_board, line):
        session = make_session(sample_board, [line])
        session.run(output_fn=lambda s: None)
        assert session.state.turn_count == 0
        assert session.state.guesses == {}

    def test_unreadable_save_falls_back_to_new_game(self, tmp_path):
        save = tmp_path / "save.json"
        save.write_text('{"game": {"history": "?"}, "stats": [1, 2]}')
        session = PlaySession(SessionConfig(seed=4, show_rules=False, save_path=save))
        assert session.stats.total_games == 0

        state = session.start()
        assert not session.resumed
        assert state.turn_count == 0
