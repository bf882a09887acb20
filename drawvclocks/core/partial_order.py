"""
Happens-before partial order over a set of vector clocks.

Provides the two building blocks of the Hasse diagram construction:
partitioning a clock set around a pivot, and reducing a clock set to its
maximal elements (the "latest" clocks, an antichain).
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, NamedTuple

from drawvclocks.core.vector_clock import VectorClock


class Partition(NamedTuple):
    """
    A clock set split relative to a pivot clock.

    Attributes:
        before: Clocks that happen before the pivot.
        concurrent: Clocks concurrent with the pivot, including clocks
            equal to it.
        after: Clocks the pivot happens before.
    """

    before: List[VectorClock]
    concurrent: List[VectorClock]
    after: List[VectorClock]


def partition_clocks(clocks: Iterable[VectorClock], pivot: VectorClock) -> Partition:
    """
    Split *clocks* into before / concurrent / after relative to *pivot*.

    Single pass; each bucket keeps the input order.

    Args:
        clocks: The clocks to partition.
        pivot: The reference clock.

    Returns:
        A :class:`Partition` whose buckets are disjoint and together hold
        every input clock.
    """
    before: List[VectorClock] = []
    concurrent: List[VectorClock] = []
    after: List[VectorClock] = []

    for c in clocks:
        if c.happens_before(pivot):
            before.append(c)
        elif pivot.happens_before(c):
            after.append(c)
        else:
            concurrent.append(c)
    return Partition(before, concurrent, after)


def _swap_remove(items: List[VectorClock], index: int) -> None:
    """Remove ``items[index]`` by swapping it with the last element."""
    last = len(items) - 1
    if index < last:
        items[index], items[last] = items[last], items[index]
    items.pop()


def latest_clocks(clocks: Iterable[VectorClock]) -> FrozenSet[VectorClock]:
    """
    Return the maximal elements of *clocks* under happens-before.

    Every returned clock is concurrent with the others, and every
    discarded clock happens before at least one returned clock: if
    ``c1 ≺ c2`` then ``c2`` is kept. The result does not depend on the
    order of *clocks*.

    O(n²) comparisons.

    Args:
        clocks: The clocks to reduce.

    Returns:
        The maximal antichain of *clocks*.
    """
    latest: List[VectorClock] = []
    for c in clocks:
        keep = True
        i = 0
        while i < len(latest):
            if c.happens_before(latest[i]):
                # dominated by a clock already kept
                keep = False
                break
            if latest[i].happens_before(c):
                # swap-remove moves an unchecked clock into slot i
                _swap_remove(latest, i)
                continue
            i += 1
        if keep:
            latest.append(c)
    return frozenset(latest)


maximal_clocks = latest_clocks


def is_antichain(clocks: Iterable[VectorClock]) -> bool:
    """True when no two clocks in *clocks* are ordered by happens-before."""
    items = list(clocks)
    for i, a in enumerate(items):
        for b in items[i + 1:]:
            if not a.concurrent_with(b):
                return False
    return True
