"""
Tests for the structured build logger.

Tests cover log level filtering, output formatting, statistics
formatting, and the default stderr stream.
"""

from io import StringIO

import pytest

from drawvclocks.utils.logger import BuildLogger, LogLevel


# ---------------------------------------------------------------------------
# Tests: Log Level Filtering
# ---------------------------------------------------------------------------


class TestLogLevelFiltering:
    """Test that log levels filter messages correctly."""

    def test_silent_suppresses_all(self) -> None:
        """SILENT level produces no output."""
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.SILENT, stream=buf)
        logger.debug("debug msg")
        logger.info("info msg")
        logger.warning("warn msg")
        assert buf.getvalue() == ""

    def test_normal_shows_warnings_only(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.NORMAL, stream=buf)
        logger.debug("debug msg")
        logger.info("info msg")
        logger.warning("careful")
        assert buf.getvalue() == "[WARNING] careful\n"

    def test_verbose_shows_info(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.VERBOSE, stream=buf)
        logger.info("progress update")
        assert "progress update" in buf.getvalue()

    def test_verbose_hides_debug(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.VERBOSE, stream=buf)
        logger.debug("detailed debug info")
        assert buf.getvalue() == ""

    def test_debug_shows_everything(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.DEBUG, stream=buf)
        logger.debug("d")
        logger.info("i")
        out = buf.getvalue()
        assert "[DEBUG] d" in out
        assert "[INFO] i" in out

    @pytest.mark.parametrize(
        "level,expected",
        [
            (LogLevel.SILENT, False),
            (LogLevel.NORMAL, False),
            (LogLevel.VERBOSE, True),
            (LogLevel.DEBUG, True),
        ],
    )
    def test_enabled(self, level: LogLevel, expected: bool) -> None:
        assert BuildLogger(level=level).enabled(LogLevel.VERBOSE) is expected


# ---------------------------------------------------------------------------
# Tests: Formatting
# ---------------------------------------------------------------------------


class TestFormatting:
    """Test message formatting."""

    def test_info_kwargs(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.VERBOSE, stream=buf)
        logger.info("Read clocks", clocks=3, distinct=2)
        assert buf.getvalue() == "[INFO] Read clocks\n  clocks: 3\n  distinct: 2\n"

    def test_statistics_titles(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.VERBOSE, stream=buf)
        logger.statistics({"distinct_clocks": 4, "edges": 3})
        lines = buf.getvalue().splitlines()
        assert lines == ["=== Statistics ===", "  Distinct Clocks: 4", "  Edges: 3"]

    def test_statistics_hidden_at_normal(self) -> None:
        buf = StringIO()
        BuildLogger(level=LogLevel.NORMAL, stream=buf).statistics({"edges": 1})
        assert buf.getvalue() == ""

    def test_clock_linked_sorted(self) -> None:
        buf = StringIO()
        logger = BuildLogger(level=LogLevel.DEBUG, stream=buf)
        logger.clock_linked("[2, 2]", ["[1, 0]", "[0, 1]"])
        assert buf.getvalue() == "[DEBUG] [2, 2] <- [0, 1], [1, 0]\n"

    def test_clock_read_without_label(self) -> None:
        buf = StringIO()
        BuildLogger(level=LogLevel.DEBUG, stream=buf).clock_read(3, "[1]", None)
        assert buf.getvalue() == "[DEBUG] line 3: [1]\n"

    def test_default_stream_is_stderr(self, capsys) -> None:
        BuildLogger(level=LogLevel.NORMAL).warning("to stderr")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "to stderr" in captured.err
