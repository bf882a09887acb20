"""
Shared pytest fixtures for the drawvclocks test suite.

Provides the reusable clock sets from the worked examples and paths to
the clock file fixtures used across unit and integration tests.
"""

from pathlib import Path

import pytest

from drawvclocks.core.vector_clock import VectorClock


def vc(*values: int) -> VectorClock:
    """Shorthand for ``VectorClock.with_values``."""
    return VectorClock.with_values(*values)


@pytest.fixture
def diamond_clocks() -> dict[str, VectorClock]:
    """
    Two-process example: (c1 c4) -> c2 -> (c3 c5).
    """
    return {
        "c1": vc(0, 1),
        "c2": vc(1, 2),
        "c3": vc(1, 3),
        "c4": vc(1, 0),
        "c5": vc(2, 2),
    }


@pytest.fixture
def layered_clocks() -> dict[str, VectorClock]:
    """
    Three-process sequence (0 (1a 1b) (2c 2d)) (3e 3f) 4.

    op0 is concurrent with everything up to layer 2; 1a and 1b both
    precede 2c and 2d; 3e and 3f are concurrent and both precede 4.
    """
    return {
        "op0": vc(0, 0, 1),
        "op1a": vc(1, 0, 0),
        "op1b": vc(0, 1, 0),
        "op2c": vc(2, 1, 0),
        "op2d": vc(1, 2, 0),
        "op3e": vc(3, 2, 1),
        "op3f": vc(2, 3, 1),
        "op4": vc(4, 3, 1),
    }


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def clocks_dir(fixtures_dir: Path) -> Path:
    """Path to the clock file fixtures directory."""
    return fixtures_dir / "clocks"


@pytest.fixture
def tmp_clock_file(tmp_path: Path) -> Path:
    """Path for a temporary clock file."""
    return tmp_path / "clocks.txt"
