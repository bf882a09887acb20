"""
Positional vector clock value type.

A vector clock carries one logical counter per process, with component
``i`` always belonging to the same process across every clock being
compared. The causal ordering is the strict componentwise ordering:

    a ≺ b  ⟺  a ≤ b componentwise and a ≠ b

Clocks are immutable values. Comparing clocks of different dimensions is
rejected with :class:`DimensionMismatch` rather than truncated.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple


class DimensionMismatch(ValueError):
    """
    Raised when vector clocks of different lengths are compared.

    Attributes:
        expected: Dimension of the reference clock.
        actual: Dimension of the offending clock.
        lineno: Input line of the offending clock, when known.
    """

    def __init__(self, expected: int, actual: int, lineno: Optional[int] = None) -> None:
        self.expected = expected
        self.actual = actual
        self.lineno = lineno
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(
            f"{where}vector clock has {actual} components, expected {expected}"
        )


class VectorClock:
    """
    Immutable vector clock of non-negative integer components.

    Attributes:
        values: The components as a tuple.
        dimension: Number of components (tracked processes).
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[int]) -> None:
        """
        Build a clock from its components.

        Args:
            values: Non-empty sequence of non-negative integers.

        Raises:
            ValueError: If *values* is empty or holds a negative or
                non-integer component.
        """
        vals = tuple(values)
        if not vals:
            raise ValueError("VectorClock requires at least one component")
        for v in vals:
            # bool is an int subclass but never a meaningful counter
            if not isinstance(v, int) or isinstance(v, bool):
                raise ValueError(f"Vector clock components must be integers, got {v!r}")
            if v < 0:
                raise ValueError(f"Vector clock components must be non-negative, got {v}")
        self._values: Tuple[int, ...] = vals

    @classmethod
    def with_values(cls, *values: int) -> VectorClock:
        """Shorthand constructor: ``VectorClock.with_values(1, 0, 2)``."""
        return cls(values)

    # ------------------------------------------------------------------ #
    # Properties
    # ------------------------------------------------------------------ #

    @property
    def values(self) -> Tuple[int, ...]:
        return self._values

    @property
    def dimension(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    # ------------------------------------------------------------------ #
    # Ordering
    # ------------------------------------------------------------------ #

    def _check_dimension(self, other: VectorClock) -> None:
        if len(self._values) != len(other._values):
            raise DimensionMismatch(len(self._values), len(other._values))

    def __le__(self, other: object) -> bool:
        """
        True when every component of *self* is ≤ the corresponding
        component of *other*.
        """
        if not isinstance(other, VectorClock):
            return NotImplemented
        self._check_dimension(other)
        return all(a <= b for a, b in zip(self._values, other._values))

    def happens_before(self, other: VectorClock) -> bool:
        """
        Strict causal ordering: ``self ≤ other`` componentwise and at
        least one component is strictly less.

        Raises:
            DimensionMismatch: If the clocks have different lengths.
        """
        self._check_dimension(other)
        strictly_less = False
        for a, b in zip(self._values, other._values):
            if a > b:
                return False
            if a < b:
                strictly_less = True
        return strictly_less

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VectorClock):
            return NotImplemented
        return self.happens_before(other)

    def concurrent_with(self, other: VectorClock) -> bool:
        """
        True when neither clock happens before the other.

        Equal clocks are concurrent with each other. Use :meth:`equals`
        to detect equality.
        """
        return not self.happens_before(other) and not other.happens_before(self)

    def equals(self, other: VectorClock) -> bool:
        return self._values == other._values

    # ------------------------------------------------------------------ #
    # Equality / hashing / repr
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorClock):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __str__(self) -> str:
        """Canonical key, e.g. ``[1, 0, 2]``."""
        return "[" + ", ".join(str(v) for v in self._values) + "]"

    def __repr__(self) -> str:
        return f"VectorClock({', '.join(str(v) for v in self._values)})"


def check_dimensions(clocks: Sequence[VectorClock]) -> int:
    """
    Verify that all *clocks* share one dimension.

    Args:
        clocks: The clocks to validate.

    Returns:
        The common dimension, or 0 for an empty sequence.

    Raises:
        DimensionMismatch: Naming the first clock whose length differs
            from the first clock's.
    """
    if not clocks:
        return 0
    expected = len(clocks[0])
    for clock in clocks:
        if len(clock) != expected:
            raise DimensionMismatch(expected, len(clock))
    return expected
