"""
Structured logging for graph construction.

Provides configurable log levels (silent, normal, verbose, debug) with
consistent formatting for progress updates, per-clock details, and
build statistics.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Dict, Iterable, Optional, TextIO


class LogLevel(Enum):
    """
    Logging levels for the builder and CLI.

    SILENT:  No output at all.
    NORMAL:  Warnings only.
    VERBOSE: Progress information and statistics.
    DEBUG:   Detailed per-clock processing output.
    """

    SILENT = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class BuildLogger:
    """
    Structured logger for clock reading and Hasse diagram construction.

    Output is filtered by the configured log level. The CLI points it at
    stderr so that stdout carries only the rendered graph.

    Attributes:
        level: The minimum log level to display.
        stream: The output stream (defaults to stderr).
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        stream: Optional[TextIO] = None,
    ) -> None:
        """
        Initialize logger with level and output stream.

        Args:
            level: Minimum log level to display.
            stream: Output stream (default: sys.stderr at write time).
        """
        self.level: LogLevel = level
        self.stream: Optional[TextIO] = stream

    def enabled(self, level: LogLevel) -> bool:
        return self.level.value >= level.value

    def debug(self, message: str, **kwargs: Any) -> None:
        """
        Log a debug message (only shown at DEBUG level).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.enabled(LogLevel.DEBUG):
            self._write(f"[DEBUG] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log an info message (shown at VERBOSE and DEBUG levels).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.enabled(LogLevel.VERBOSE):
            self._write(f"[INFO] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def warning(self, message: str) -> None:
        """Log a warning (shown at NORMAL level and above)."""
        if self.enabled(LogLevel.NORMAL):
            self._write(f"[WARNING] {message}")

    def statistics(self, stats: Dict[str, Any]) -> None:
        """
        Log build statistics (shown at VERBOSE level and above).

        Args:
            stats: Dictionary of statistic names to values.
        """
        if self.enabled(LogLevel.VERBOSE):
            self._write("=== Statistics ===")
            for key, value in stats.items():
                label = key.replace("_", " ").title()
                self._write(f"  {label}: {value}")

    def clock_read(self, lineno: int, clock: Any, label: Optional[str]) -> None:
        """Log one parsed input clock (DEBUG level)."""
        if self.enabled(LogLevel.DEBUG):
            suffix = f" ({label})" if label else ""
            self._write(f"[DEBUG] line {lineno}: {clock}{suffix}")

    def clock_linked(self, clock: Any, predecessors: Iterable[Any]) -> None:
        """
        Log the immediate predecessors found for a clock (DEBUG level).

        Args:
            clock: The clock whose node was linked.
            predecessors: Its covering predecessors.
        """
        if self.enabled(LogLevel.DEBUG):
            preds = ", ".join(sorted(str(p) for p in predecessors)) or "(none)"
            self._write(f"[DEBUG] {clock} <- {preds}")

    def _write(self, message: str) -> None:
        """Write a line to the output stream."""
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(message + "\n")
