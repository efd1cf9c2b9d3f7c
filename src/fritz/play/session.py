"""Terminal play session."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from fritz.board.generator import GeneratorConfig, generate_board
from fritz.board.shapes import AnimalKind
from fritz.errors import CorruptStateError, FritzError
from fritz.game.engine import (
    apply_guess_to_selection,
    create_game,
    finalize_game,
    parse_guess,
    ready_to_finalize,
    set_guess,
    set_note,
    submit_selection,
    submit_turn,
    toggle_selection,
)
from fritz.game.state import FinalResult, GameState, GuessMark
from fritz.game.stats import GameStats
from fritz.play.display import BoardRenderer, format_turn, render_final, render_history, render_notes, render_stats
from fritz.play.input import HELP_TEXT, Command, CommandReader, InteractionMode
from fritz.play.rules import RuleExplainer
from fritz.play.saves import DEFAULT_SAVE_PATH, SaveStore

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Configuration for a terminal session."""

    seed: Optional[int] = None
    debug: bool = False  # Draw hidden animals on the grid
    show_rules: bool = True
    new_game: bool = False  # Ignore any saved game
    save_path: Optional[Path] = field(default_factory=lambda: DEFAULT_SAVE_PATH)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)


class PlaySession:
    """Runs one game at the terminal."""

    def __init__(
        self,
        config: SessionConfig,
        reader: Optional[CommandReader] = None,
        store: Optional[SaveStore] = None,
    ):
        """Initialize session."""
        self.config = config
        self.seed = config.seed
        self.rng = random.Random(self.seed)

        self.reader = reader or CommandReader()
        if store is None and config.save_path is not None:
            store = SaveStore(config.save_path)
        self.store = store
        self.renderer = BoardRenderer()
        self.explainer = RuleExplainer()

        self.mode = InteractionMode.SEARCH
        self.guess_type: Union[AnimalKind, GuessMark] = AnimalKind.RABBIT
        self.stats = self._load_stats()
        self.state: Optional[GameState] = None
        self.result: Optional[FinalResult] = None
        self.resumed = False

    def start(self) -> GameState:
        """Resume the saved game or deal a new board."""
        if self.store and not self.config.new_game:
            try:
                saved = self.store.load()
            except CorruptStateError as e:
                logger.warning(f"Ignoring unreadable saved game: {e}")
                saved = None
            if saved is not None and not saved.completed:
                self.state = saved
                self.resumed = True
                return saved

        board = generate_board(rng=self.rng, config=self.config.generator)
        self.state = create_game(board)
        return self.state

    def _load_stats(self) -> GameStats:
        if self.store is None:
            return GameStats()
        try:
            return self.store.load_stats()
        except CorruptStateError as e:
            logger.warning(f"Starting with fresh stats: {e}")
            return GameStats()

    def run(self, output_fn: Callable[[str], None] = print) -> Optional[FinalResult]:
        """Run the session until the game is submitted or the player quits.

        Returns:
            FinalResult if the game was submitted, else None
        """
        self.start()
        out = output_fn

        if self.config.show_rules:
            out(self.explainer.explain_rules())
            out("")
        if self.resumed:
            out(f"Resumed saved game ({self.state.turn_count} turns so far)")
        else:
            out(f"Seed: {self.seed} (use --seed {self.seed} to replay)")
        out("Type 'help' for commands.")

        while True:
            out("")
            out(self.renderer.render(self.state, self.config.debug))
            out(f"Mode: {self.mode.value}" + (f" ({self.guess_type.value})" if self.mode is InteractionMode.GUESS else ""))

            command = self.reader.read(self.mode)
            if command.error:
                out(command.error)
                continue
            if command.quit:
                self.save_progress(out)
                return None

            try:
                done = self.handle(command, out)
            except FritzError as e:
                out(f"[!] {e}")
                continue
            if done:
                return self.result

    def handle(self, command: Command, out: Callable[[str], None] = print) -> bool:
        """Apply one command. Returns True when the game has ended."""
        handler = getattr(self, f"_do_{command.action}", None)
        if handler is None:
            out(f"Unknown command: {command.action}")
            return False
        return bool(handler(command, out))

    def _do_search(self, command: Command, out) -> None:
        if command.args:
            turn = submit_turn(self.state, command.args)
        else:
            turn = submit_selection(self.state)
        out(format_turn(turn))

    def _do_select(self, command: Command, out) -> None:
        for tile in command.args:
            toggle_selection(self.state, tile)

    def _do_note(self, command: Command, out) -> None:
        set_note(self.state, command.args[0], command.text)

    def _do_guess(self, command: Command, out) -> None:
        args = command.args
        if not args:
            out("Usage: guess A1 deer  |  guess deer")
        elif len(args) == 1 and self.mode is InteractionMode.GUESS and not _looks_like_guess(args[0]):
            set_guess(self.state, args[0], self.guess_type)
        elif len(args) == 1:
            apply_guess_to_selection(self.state, args[0])
        else:
            for tile in args[:-1]:
                set_guess(self.state, tile, args[-1])

    def _do_mode(self, command: Command, out) -> None:
        if not command.args:
            out(f"Current mode: {self.mode.value}")
            return
        try:
            mode = InteractionMode(command.args[0].lower())
        except ValueError:
            out("Modes: search, notes, guess")
            return
        if len(command.args) > 1:
            self.guess_type = parse_guess(command.args[1])
        self.mode = mode

    def _do_history(self, command: Command, out) -> None:
        out(render_history(self.state.history))

    def _do_notes(self, command: Command, out) -> None:
        out(render_notes(self.state))

    def _do_board(self, command: Command, out) -> None:
        # Grid is redrawn every loop iteration
        pass

    def _do_rules(self, command: Command, out) -> None:
        if not command.args:
            out(self.explainer.explain_rules())
            return
        try:
            kind = AnimalKind(command.args[0].lower())
        except ValueError:
            out(f"Unknown animal: {command.args[0]}")
            return
        out(self.explainer.describe_kind(kind))
        out(self.explainer.draw_shapes(kind))

    def _do_stats(self, command: Command, out) -> None:
        out(render_stats(self.stats))

    def _do_help(self, command: Command, out) -> None:
        out(HELP_TEXT)

    def _do_save(self, command: Command, out) -> None:
        if self.store is None:
            out("Saving is disabled")
            return
        self.store.save(self.state, self.stats)
        out(f"Game saved to {self.store.path}")

    def _do_submit(self, command: Command, out) -> bool:
        if not ready_to_finalize(self.state):
            out(f"Guess all {len(self.state.board)} animal tiles before the final submit.")
            return False
        if not self.reader.confirm("Submit final guesses? [y/n]: "):
            return False

        self.result = finalize_game(self.state)
        self.stats.record(self.result.outcome, self.state.turn_count)
        if self.store is not None:
            self.store.clear()
            self.store.save_stats(self.stats)
        out("")
        out(render_final(self.result, self.renderer))
        out("")
        out(render_stats(self.stats))
        return True

    def save_progress(self, out) -> None:
        if self.store is None or self.state is None or self.state.completed:
            return
        self.store.save(self.state, self.stats)
        logger.info(f"Progress saved to {self.store.path}")
        out(f"Progress saved to {self.store.path}")


def _looks_like_guess(token: str) -> bool:
    try:
        parse_guess(token)
    except FritzError:
        return False
    return True
