#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/parsers/_scanner.py
"""Scanning primitives shared by the EML and markup parsers.

The ``Scanner`` is a cursor over an in-memory source string. Every read is
bounded by the end of the text, so callers never index past EOF; at EOF
``peek`` returns the empty string.
"""

from __future__ import annotations

from typing import Callable

# ASCII whitespace as recognized by both grammars.
WHITESPACE_CHARS = " \t\n\r\f\v"


def is_ident_start(char: str) -> bool:
    """Return True if ``char`` can begin an identifier (letter or underscore)."""
    return char != "" and (char.isalpha() or char == "_")


def is_ident_part(char: str) -> bool:
    """Return True if ``char`` can continue an identifier.

    Identifiers continue with letters, digits, ``-``, ``_``, ``.`` and ``:``
    so dotted FXML names (``fx:id``, ``javafx.scene.Node``) and dashed HTML
    names (``data-role``) scan as one token.
    """
    return char != "" and (char.isalnum() or char in "-_.:")


def is_whitespace(char: str) -> bool:
    """Return True for ASCII whitespace characters."""
    return char != "" and char in WHITESPACE_CHARS


def strip_whitespace(text: str) -> str:
    """Trim ASCII whitespace from both ends of ``text``."""
    return text.strip(WHITESPACE_CHARS)


class Scanner:
    """Bounded cursor over source text.

    Parameters
    ----------
    text : str
        Complete source text
    pos : int, default 0
        Starting offset

    Attributes
    ----------
    text : str
        The source text
    pos : int
        Current offset; always between 0 and ``len(text)``

    Examples
    --------
        >>> s = Scanner("div (id=x)")
        >>> s.read_while(is_ident_part)
        'div'
        >>> s.skip_whitespace()
        1
        >>> s.peek()
        '('

    """

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.length = len(text)
        self.pos = min(max(pos, 0), self.length)

    def eof(self) -> bool:
        """Return True when the cursor is at the end of the text."""
        return self.pos >= self.length

    def peek(self, offset: int = 0) -> str:
        """Return the character ``offset`` positions ahead, or ``""`` past EOF."""
        index = self.pos + offset
        if 0 <= index < self.length:
            return self.text[index]
        return ""

    def advance(self, count: int = 1) -> str:
        """Consume up to ``count`` characters and return them."""
        end = min(self.pos + count, self.length)
        consumed = self.text[self.pos : end]
        self.pos = end
        return consumed

    def startswith(self, prefix: str) -> bool:
        """Return True if the text at the cursor starts with ``prefix``."""
        return self.text.startswith(prefix, self.pos)

    def startswith_ignorecase(self, prefix: str) -> bool:
        """Case-insensitive variant of ``startswith``."""
        return self.slice(self.pos, self.pos + len(prefix)).lower() == prefix.lower()

    def skip_whitespace(self) -> int:
        """Skip whitespace at the cursor and return the number of characters skipped."""
        start = self.pos
        while self.pos < self.length and self.text[self.pos] in WHITESPACE_CHARS:
            self.pos += 1
        return self.pos - start

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while ``predicate`` holds and return them."""
        start = self.pos
        while self.pos < self.length and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def read_whitespace(self) -> str:
        """Consume and return the whitespace run at the cursor."""
        start = self.pos
        self.skip_whitespace()
        return self.text[start : self.pos]

    def find(self, needle: str, start: int | None = None) -> int:
        """Return the offset of the next ``needle`` at or after ``start`` (cursor by default), or -1."""
        return self.text.find(needle, self.pos if start is None else start)

    def read_until(self, terminator: str) -> tuple[str, bool]:
        """Consume text up to the next ``terminator``.

        The terminator itself is consumed too. When it does not occur, the
        rest of the text is consumed.

        Returns
        -------
        tuple[str, bool]
            The text before the terminator and whether the terminator was found

        """
        end = self.text.find(terminator, self.pos)
        if end == -1:
            content = self.text[self.pos :]
            self.pos = self.length
            return content, False
        content = self.text[self.pos : end]
        self.pos = end + len(terminator)
        return content, True

    def slice(self, start: int, end: int | None = None) -> str:
        """Return ``text[start:end]`` clamped to the text bounds."""
        start = min(max(start, 0), self.length)
        end = self.length if end is None else min(max(end, start), self.length)
        return self.text[start:end]

    def rest(self) -> str:
        """Return the unconsumed text without moving the cursor."""
        return self.text[self.pos :]
