"""
Lexical analyzer for vector clock input lines.

Tokenizes lines such as ``(eventA) 1, 0, 2`` into a label, integer
components and separators that can be consumed by the parser.
"""

from __future__ import annotations

import sly


class LexerError(Exception):
    """
    Exception raised for lexical analysis errors.

    Attributes:
        index: Offset of the offending character in the line.
    """

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index


class ClockLexer(sly.Lexer):
    """
    Lexical analyzer for vector clock lines.

    Token Types:
        LABEL   - Parenthesized free-text label, value without parentheses
        NUMBER  - Non-negative decimal integer
        COMMA   - Component separator
    """

    tokens = {LABEL, NUMBER, COMMA}

    # Ignored characters
    ignore = " \t\r"

    # Ignore trailing comments (# to end of line)
    ignore_comment = r"\#[^\n]*"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    COMMA = r","

    @_(r"\([^()\n]*\)")
    def LABEL(self, t):
        t.value = t.value[1:-1].strip()
        return t

    @_(r"\d+")
    def NUMBER(self, t):
        t.value = int(t.value)
        return t

    def error(self, t):
        """Handle invalid characters (signs, decimal points, stray text)."""
        raise LexerError(
            f"Invalid character '{t.value[0]}' at index {self.index}", self.index
        )
