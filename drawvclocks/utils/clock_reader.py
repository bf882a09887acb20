"""
Vector clock input file parser.

Reads one clock per line, with an optional parenthesized label::

    # Optional: dimension directive
    # dimension: 3

    (start) 1, 0, 0
    (send)  2, 0, 0
            2, 1, 0

Blank lines and ``#`` comment lines are skipped. All clocks must share one
dimension; a mismatch is reported before any graph is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from drawvclocks.core.vector_clock import DimensionMismatch, VectorClock
from drawvclocks.parser.grammar import ClockLine, ClockLineParser, ParseError
from drawvclocks.parser.lexer import LexerError
from drawvclocks.utils.logger import BuildLogger, LogLevel


class ClockFileError(ValueError):
    """
    A clock line could not be parsed.

    Attributes:
        lineno: 1-based line number of the offending line.
        text: The offending line.
    """

    def __init__(self, lineno: int, text: str, reason: str) -> None:
        self.lineno = lineno
        self.text = text
        self.reason = reason
        super().__init__(f"line {lineno}: {reason}: {text!r}")


@dataclass
class ClockMetadata:
    """
    Metadata extracted from a clock file.

    Attributes:
        dimension: Common clock dimension (0 when there are no clocks).
        clock_count: Number of clock lines.
        distinct_count: Number of distinct clocks.
    """

    dimension: int
    clock_count: int
    distinct_count: int


@dataclass
class ClockData:
    """
    Complete contents of a clock file.

    Attributes:
        clocks: Clocks in file order, duplicates included.
        labels: Canonical clock key to label. Labels of equal clocks are
            joined with ``", "`` in file order.
        metadata: File metadata.
    """

    clocks: List[VectorClock]
    labels: Dict[str, str] = field(default_factory=dict)
    metadata: Optional[ClockMetadata] = None


_parser = ClockLineParser()


def _data_lines(lines: Iterable[str]) -> List[Tuple[int, str]]:
    """Return ``(lineno, text)`` for every non-blank, non-comment line."""
    out: List[Tuple[int, str]] = []
    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            out.append((lineno, stripped))
    return out


def _parse_directives(lines: Iterable[str]) -> dict:
    """Extract ``# key: value`` directives from comment lines."""
    directives: dict = {}
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line.startswith("#"):
            continue
        content = line.lstrip("#").strip()
        if content.startswith("dimension:"):
            val = content.split(":", 1)[1].strip()
            try:
                directives["dimension"] = int(val)
            except ValueError as exc:
                raise ClockFileError(lineno, line, "invalid dimension directive") from exc
    return directives


def parse_clocks(
    text: str,
    logger: Optional[BuildLogger] = None,
) -> ClockData:
    """
    Parse clock lines from a string.

    Args:
        text: The whole input.
        logger: Optional logger for per-line debug output.

    Returns:
        ClockData with clocks, labels and metadata.

    Raises:
        ClockFileError: If a line is malformed.
        DimensionMismatch: If a clock's dimension differs from the
            ``dimension`` directive or from the first clock.
    """
    log = logger or BuildLogger(LogLevel.SILENT)
    lines = text.splitlines()
    directives = _parse_directives(lines)
    expected: Optional[int] = directives.get("dimension")

    clocks: List[VectorClock] = []
    labels: Dict[str, str] = {}
    for lineno, line in _data_lines(lines):
        parsed = ClockReader.parse_line(line, lineno)
        if expected is None:
            expected = len(parsed.values)
        elif len(parsed.values) != expected:
            raise DimensionMismatch(expected, len(parsed.values), lineno=lineno)

        clock = parsed.to_clock()
        clocks.append(clock)
        if parsed.label:
            key = str(clock)
            labels[key] = f"{labels[key]}, {parsed.label}" if key in labels else parsed.label
        log.clock_read(lineno, clock, parsed.label)

    metadata = ClockMetadata(
        dimension=expected if clocks else 0,
        clock_count=len(clocks),
        distinct_count=len(set(clocks)),
    )
    log.info("Read clocks", clocks=metadata.clock_count, distinct=metadata.distinct_count)
    return ClockData(clocks=clocks, labels=labels, metadata=metadata)


class ClockReader:
    """
    Parses clock files into VectorClock objects.

    Attributes:
        filepath: Path to the clock file.
    """

    def __init__(self, filepath: Path, logger: Optional[BuildLogger] = None) -> None:
        """
        Initialize reader with file path.

        Args:
            filepath: Path to the clock file.
            logger: Optional logger for progress output.
        """
        self.filepath: Path = Path(filepath)
        self.logger: BuildLogger = logger or BuildLogger(LogLevel.SILENT)

    def read_all(self) -> ClockData:
        """
        Read every clock in the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            ClockFileError: If a line is malformed.
            DimensionMismatch: If clocks differ in dimension.
        """
        if not self.filepath.exists():
            raise FileNotFoundError(f"Clock file not found: {self.filepath}")
        return parse_clocks(self.filepath.read_text(encoding="utf-8"), logger=self.logger)

    def read_clocks(self) -> List[VectorClock]:
        """Read only the clocks, in file order."""
        return self.read_all().clocks

    def validate(self) -> List[str]:
        """
        Validate the clock file and return a list of error strings.

        Unlike :meth:`read_all`, this reports every malformed line rather
        than stopping at the first.

        Returns:
            List of error messages (empty if valid).
        """
        errors: List[str] = []

        if not self.filepath.exists():
            errors.append(f"File not found: {self.filepath}")
            return errors

        lines = self.filepath.read_text(encoding="utf-8").splitlines()
        try:
            expected: Optional[int] = _parse_directives(lines).get("dimension")
        except ClockFileError as exc:
            errors.append(str(exc))
            expected = None

        data = _data_lines(lines)
        if not data:
            errors.append("No clock lines found in file")
            return errors

        for lineno, line in data:
            try:
                parsed = self.parse_line(line, lineno)
            except ClockFileError as exc:
                errors.append(str(exc))
                continue
            if expected is None:
                expected = len(parsed.values)
            elif len(parsed.values) != expected:
                errors.append(str(DimensionMismatch(expected, len(parsed.values), lineno=lineno)))

        return errors

    # ------------------------------------------------------------------ #
    # Static helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def parse_line(text: str, lineno: int = 1) -> ClockLine:
        """
        Parse one clock line such as ``(eventA) 1, 0, 2``.

        Args:
            text: The line.
            lineno: Line number reported in errors.

        Raises:
            ClockFileError: If the line cannot be tokenized or parsed.
        """
        try:
            return _parser.parse(text)
        except (LexerError, ParseError) as exc:
            raise ClockFileError(lineno, text.strip(), str(exc)) from exc
