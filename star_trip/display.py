"""
Rendering boundary.

The game core hands finished byte messages (code page 437) to a display
and never reads anything back except submitted command lines, which the
front end passes to `GameState.process_command`. Any object with the two
methods of `Display` can stand in for the screen.
"""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO, runtime_checkable

# Code page 437 draws these control bytes as glyphs; Python's codec does not.
CP437_GLYPHS: dict[int, str] = {
    0x01: "☺",  # player
    0x02: "☻",  # player, low energy
    0x03: "♥",
    0x04: "♦",
    0x05: "♣",
    0x06: "♠",
    0x07: "•",
    0x08: "◘",
    0x09: "○",
    0x0B: "♂",
}


@runtime_checkable
class Display(Protocol):
    """Interface the game core uses to show messages."""

    def message(self, msg: bytes) -> None:
        """
        Replace the screen contents with a message.

        Args:
            msg: Pre-formatted code page 437 bytes; newlines separate rows.
        """
        ...

    def update_console(self) -> None:
        """Redraw the command line after a message."""
        ...


def to_text(msg: bytes) -> str:
    """Decode code page 437 bytes, drawing display codes as their glyphs."""
    return "".join(
        CP437_GLYPHS[c] if c in CP437_GLYPHS else bytes([c]).decode("cp437")
        for c in msg
    )


class TextDisplay:
    """
    Plain-text display.

    Keeps every message it is given and, when a stream is supplied, writes
    each one out as decoded text.

    Attributes:
        messages: Messages received, oldest first.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.messages: list[bytes] = []
        self._stream = stream

    @classmethod
    def stdout(cls) -> TextDisplay:
        return cls(stream=sys.stdout)

    @property
    def last(self) -> Optional[bytes]:
        """Most recent message, if any."""
        return self.messages[-1] if self.messages else None

    @property
    def last_text(self) -> str:
        return to_text(self.last) if self.last is not None else ""

    def message(self, msg: bytes) -> None:
        self.messages.append(bytes(msg))
        if self._stream is not None:
            self._stream.write(to_text(msg) + "\n")

    def update_console(self) -> None:
        if self._stream is not None:
            self._stream.flush()
