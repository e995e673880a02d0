"""
The captain's logbook: a paginated, append-only narrative record.
"""

from __future__ import annotations

from typing import Optional

from .constants import LOG_PAGE_LINES, NO_ENTRY


class Logbook:
    """
    Ordered pages of log text.

    Entries are appended a byte at a time. Once the current page holds
    `page_lines` newlines a fresh page is started, so a single entry may
    straddle two pages. Pages are never removed.

    Attributes:
        pages: Page contents, oldest first.
        page: Index of the page currently being written.
        last_entry: The most recent entry, for the end-of-game summary.
    """

    def __init__(self, page_lines: int = LOG_PAGE_LINES) -> None:
        self.page_lines = page_lines
        self.pages: list[bytearray] = [bytearray()]
        self.page = 0
        self.last_entry: bytes = NO_ENTRY
        self._newlines = 0

    def __len__(self) -> int:
        return len(self.pages)

    def record(self, entry: bytes) -> None:
        """Append an entry, starting new pages as the current one fills."""
        self.last_entry = bytes(entry)
        latest = self.pages[self.page]
        for c in entry:
            if self._newlines >= self.page_lines:
                latest = bytearray()
                self.pages.append(latest)
                self.page += 1
                self._newlines = 0
            latest.append(c)
            if c == 0x0A:
                self._newlines += 1

    def current(self) -> bytes:
        """The page currently being written."""
        return bytes(self.pages[self.page])

    def get(self, number: Optional[int] = None) -> Optional[bytes]:
        """
        Fetch a page.

        Args:
            number: 1-indexed page number, or None for the current page.

        Returns:
            Page contents, or None if no such page exists.
        """
        if number is None:
            return self.current()
        if 1 <= number <= len(self.pages):
            return bytes(self.pages[number - 1])
        return None

    def render(self, number: Optional[int] = None) -> bytes:
        """Page with a "Captain's Log [n / total]" header, or a not-found notice."""
        page = self.get(number)
        if page is None:
            return b"Log page not found!"
        shown = self.page + 1 if number is None else number
        header = f"Captain's Log [{shown} / {len(self.pages)}]\n\n".encode("ascii")
        return header + page
