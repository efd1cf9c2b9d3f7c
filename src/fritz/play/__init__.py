"""Terminal play for Fritz."""

from fritz.play.display import BoardRenderer, format_result, format_turn
from fritz.play.rules import RuleExplainer
from fritz.play.input import CommandReader, Command, InteractionMode, parse_command
from fritz.play.saves import SaveStore
from fritz.play.session import PlaySession, SessionConfig

__all__ = [
    "BoardRenderer",
    "format_result",
    "format_turn",
    "RuleExplainer",
    "CommandReader",
    "Command",
    "InteractionMode",
    "parse_command",
    "SaveStore",
    "PlaySession",
    "SessionConfig",
]
