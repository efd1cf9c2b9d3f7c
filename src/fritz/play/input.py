"""Human input handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from fritz.board.coords import Coordinate


class InteractionMode(Enum):
    """What a bare tile entry means at the prompt.

    Only the terminal session consults this; game actions themselves are
    always invoked by name.
    """

    SEARCH = "search"  # Toggle the tile in the current selection
    NOTES = "notes"  # Write the rest of the line as the tile's note
    GUESS = "guess"  # Apply the current guess type to the tile


COMMAND_ALIASES = {
    "s": "search",
    "search": "search",
    "sel": "select",
    "select": "select",
    "n": "note",
    "note": "note",
    "g": "guess",
    "guess": "guess",
    "m": "mode",
    "mode": "mode",
    "h": "history",
    "history": "history",
    "notes": "notes",
    "b": "board",
    "board": "board",
    "rules": "rules",
    "stats": "stats",
    "save": "save",
    "submit": "submit",
    "?": "help",
    "help": "help",
    "q": "quit",
    "quit": "quit",
    "exit": "quit",
}

HELP_TEXT = """Commands:
  search A1 B2 C3     Search three tiles (or just 'search' for the current selection)
  select A1           Toggle a tile in the selection
  note A1 text        Write a note (empty text removes it)
  guess A1 deer       Guess a tile: an animal, 'empty' or 'clear'
  guess deer          Apply a guess to every selected tile
  mode search|notes|guess [animal]
                      Change what typing a bare tile does
  rules [animal]      Show the rules, or one animal's shapes
  history | notes | board | stats
  save | submit | quit"""


@dataclass
class Command:
    """Parsed line of input."""

    action: str = ""
    args: list[str] = field(default_factory=list)
    text: str = ""  # Free text (note body)
    error: Optional[str] = None

    @property
    def quit(self) -> bool:
        return self.action == "quit"


def _is_tile(token: str) -> bool:
    try:
        Coordinate.parse(token)
    except ValueError:
        return False
    return True


def parse_command(raw: str, mode: InteractionMode = InteractionMode.SEARCH) -> Command:
    """Turn a line of input into a Command.

    A line starting with a tile key is interpreted according to *mode*.
    """
    raw = raw.strip()
    if not raw:
        return Command(error="Enter a command (type 'help' for the list)")

    head, _, rest = raw.partition(" ")
    rest = rest.strip()

    if _is_tile(head):
        if mode is InteractionMode.NOTES:
            return Command(action="note", args=[head], text=rest)
        if mode is InteractionMode.GUESS:
            return Command(action="guess", args=[head] + rest.split())
        return Command(action="select", args=[head] + rest.split())

    action = COMMAND_ALIASES.get(head.lower())
    if action is None:
        return Command(error=f"Unknown command: {head}")

    if action == "note":
        tile, _, text = rest.partition(" ")
        if not tile:
            return Command(error="Usage: note A1 text")
        return Command(action="note", args=[tile], text=text.strip())

    return Command(action=action, args=rest.split())


class CommandReader:
    """Reads commands from the terminal."""

    def __init__(self, input_fn: Callable[[str], str] = input):
        self.input_fn = input_fn

    def read(self, mode: InteractionMode, prompt: str = "> ") -> Command:
        try:
            raw = self.input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            return Command(action="quit")
        return parse_command(raw, mode)

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; anything but y/yes is no."""
        try:
            answer = self.input_fn(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            return False
        return answer in ("y", "yes")
