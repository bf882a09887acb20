"""
Parser for vector clock input lines.

Grammar::

    clock      : LABEL components
               | components
    components : components COMMA NUMBER
               | NUMBER
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import sly

from drawvclocks.core.vector_clock import VectorClock
from drawvclocks.parser.lexer import ClockLexer


class ParseError(Exception):
    """Exception raised for parsing errors."""

    pass


@dataclass(frozen=True)
class ClockLine:
    """
    One parsed input line.

    Attributes:
        label: The optional label, None when absent or empty.
        values: The integer components in order.
    """

    label: Optional[str]
    values: Tuple[int, ...]

    def to_clock(self) -> VectorClock:
        return VectorClock(self.values)


class _SLYParser(sly.Parser):
    """SLY-based parser for a single vector clock line."""

    tokens = ClockLexer.tokens

    @_("LABEL components")
    def clock(self, p):
        return ClockLine(p.LABEL or None, tuple(p.components))

    @_("components")
    def clock(self, p):
        return ClockLine(None, tuple(p.components))

    @_("components COMMA NUMBER")
    def components(self, p):
        p.components.append(p.NUMBER)
        return p.components

    @_("NUMBER")
    def components(self, p):
        return [p.NUMBER]

    def error(self, token):
        if token:
            raise ParseError(
                f"Syntax error at '{token.value}' " f"(type: {token.type}, index: {token.index})"
            )
        raise ParseError("Syntax error: unexpected end of line")


class ClockLineParser:
    """
    Parser for vector clock lines.

    Wraps the SLY-based parser with a clean public interface.
    """

    def __init__(self) -> None:
        self._lexer = ClockLexer()
        self._parser = _SLYParser()

    def parse(self, text: str) -> ClockLine:
        """
        Parse a line such as ``(eventA) 1, 0, 2``.

        Args:
            text: The line to parse.

        Returns:
            The parsed :class:`ClockLine`.

        Raises:
            LexerError: If the line contains an invalid character.
            ParseError: If the line is syntactically invalid or empty.
        """
        text = text.strip()
        if not text:
            raise ParseError("Syntax error: empty clock line")

        result = self._parser.parse(self._lexer.tokenize(text))
        if result is None:
            raise ParseError("Syntax error: could not parse clock line")
        return result
