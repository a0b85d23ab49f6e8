"""
Character stream for the Mython lexer.

A cursor over a character sequence with peek, get and a single-character
pushback. Keeps line/column bookkeeping so every position can be turned
into a SourceLocation.

Author: xwest
"""

from typing import TextIO, Union

from .tokens import SourceLocation


# Returned by peek() and get() once the input is exhausted
EOF = ""


class CharStream:
    """Cursor over source text."""

    def __init__(self, source: Union[str, TextIO], filename: str = "<string>"):
        if not isinstance(source, str):
            filename = getattr(source, "name", filename)
            source = source.read()
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.line_start = 0  # Offset of the first character of the current line

        # State before the last get(), for unget()
        self._can_unget = False
        self._prev_line = 1
        self._prev_line_start = 0

    def peek(self) -> str:
        """Return the next character without consuming it, or EOF."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return EOF

    def get(self) -> str:
        """Consume and return the next character, or EOF."""
        if self.pos >= len(self.source):
            self._can_unget = False
            return EOF

        char = self.source[self.pos]
        self._prev_line = self.line
        self._prev_line_start = self.line_start
        self._can_unget = True

        self.pos += 1
        if char == "\n":
            self.line += 1
            self.line_start = self.pos
        return char

    def unget(self) -> None:
        """
        Push the last consumed character back.

        Only one character can be pushed back, and only right after get().
        """
        if not self._can_unget:
            raise RuntimeError("unget() is only allowed once, directly after get()")
        self._can_unget = False
        self.pos -= 1
        self.line = self._prev_line
        self.line_start = self._prev_line_start

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def column(self) -> int:
        return self.pos - self.line_start + 1

    def location(self) -> SourceLocation:
        """Location of the next character to be read."""
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def __repr__(self) -> str:
        return f"CharStream({self.filename!r}, pos={self.pos}, line={self.line})"
