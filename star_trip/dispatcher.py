"""
Command dispatch.

Splits a command line on whitespace, looks the first word up
case-insensitively in the alias table and hands the numeric arguments to
the matching GameState command. Non-numeric arguments are quietly
dropped, so `MOVE fast 5 2 2` is the same as `MOVE 5 2 2`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

if TYPE_CHECKING:
    from .state import GameState


class Status(IntEnum):
    """Outcome of a command, as returned by `process_command`."""
    CONTINUE = 0
    VICTORY = 1
    DEFEAT = 2


Handler = Callable[["GameState", Sequence[int]], None]

COMMANDS: dict[str, Handler] = {}


def _register(handler: Handler, *names: str) -> None:
    for name in names:
        COMMANDS[name] = handler


_register(lambda state, args: state.help(), "help", "h")
_register(lambda state, args: state.move(args), "move", "m")
_register(lambda state, args: state.laser(args), "laser", "l")
_register(lambda state, args: state.torpedo(args), "torpedo", "t")
_register(lambda state, args: state.shields(args), "shields", "sh")
_register(lambda state, args: state.scan(), "scan", "sc")
_register(lambda state, args: state.survey(), "survey", "su")
_register(lambda state, args: state.investigate(), "investigate", "i")
_register(lambda state, args: state.dock(), "dock", "d")
_register(lambda state, args: state.log(args), "log")
_register(lambda state, args: state.quit(), "quit", "q")


def parse_number(token: str) -> int | None:
    """Parse a non-negative decimal integer, or return None."""
    digits = token[1:] if token.startswith("+") else token
    if digits.isascii() and digits.isdigit():
        return int(digits)
    return None


def numeric_arguments(tokens: Iterable[str]) -> list[int]:
    """
    Keep the tokens that parse as non-negative integers, in order.

    Note: this will quietly ignore any non-numeric arguments that are
    interspersed with the numeric ones, shifting later numbers left.
    """
    numbers = (parse_number(token) for token in tokens)
    return [n for n in numbers if n is not None]


def status(state: GameState) -> Status:
    """Victory once the mission is complete, defeat once energy is gone."""
    if state.mission >= state.config.mission:
        return Status.VICTORY
    if state.player.energy == 0:
        return Status.DEFEAT
    return Status.CONTINUE


def process_command(state: GameState, command: str | bytes) -> int:
    """
    Parse user input and dispatch to the relevant command.

    Args:
        state: The game to act on.
        command: One command line.

    Returns:
        0 to continue, 1 on victory, 2 on defeat.
    """
    if isinstance(command, bytes):
        command = command.decode("utf-8", errors="replace")

    words = command.split()
    if not words:
        return Status.CONTINUE

    handler = COMMANDS.get(words[0].lower())
    if handler is None:
        state.display.message(
            f"Unrecognised command:\n\n    '{words[0]}'\n\n"
            f"Try the HELP command for a list of possible\ncommands!".encode("cp437", errors="replace")
        )
        state.display.update_console()
    else:
        handler(state, numeric_arguments(words[1:]))

    return status(state)
