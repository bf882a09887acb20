"""
Tests for clock partitioning and the latest-clocks reduction.

Tests cover stable partitioning around a pivot, the equal-pivot case,
the maximal antichain reduction, and order independence of both over
every permutation of an eight-clock execution.
"""

import itertools
from collections import Counter

import pytest

from drawvclocks.core.partial_order import (
    Partition,
    is_antichain,
    latest_clocks,
    maximal_clocks,
    partition_clocks,
)
from drawvclocks.core.vector_clock import DimensionMismatch, VectorClock


def _vc(*values: int) -> VectorClock:
    return VectorClock.with_values(*values)


class TestPartitionClocks:
    """Test partitioning relative to a pivot."""

    def test_diamond_partition(self, diamond_clocks) -> None:
        c = diamond_clocks
        clocks = [c["c1"], c["c2"], c["c3"], c["c4"], c["c5"]]
        before, concurrent, after = partition_clocks(clocks, c["c2"])
        assert set(before) == {c["c1"], c["c4"]}
        assert concurrent == [c["c2"]]
        assert set(after) == {c["c3"], c["c5"]}

    def test_returns_named_partition(self) -> None:
        result = partition_clocks([_vc(1)], _vc(2))
        assert isinstance(result, Partition)
        assert result.before == [_vc(1)]

    def test_stable_order(self) -> None:
        """Each bucket keeps the input order."""
        clocks = [_vc(0, 2), _vc(3, 3), _vc(1, 0), _vc(0, 1), _vc(4, 4)]
        before, _, after = partition_clocks(clocks, _vc(2, 2))
        assert before == [_vc(0, 2), _vc(1, 0), _vc(0, 1)]
        assert after == [_vc(3, 3), _vc(4, 4)]

    def test_equal_clocks_land_in_concurrent(self) -> None:
        pivot = _vc(1, 1)
        _, concurrent, _ = partition_clocks([_vc(1, 1), _vc(1, 1), _vc(0, 2)], pivot)
        assert concurrent == [_vc(1, 1), _vc(1, 1), _vc(0, 2)]

    def test_empty_input(self) -> None:
        assert partition_clocks([], _vc(1)) == Partition([], [], [])

    def test_dimension_mismatch_raises(self) -> None:
        with pytest.raises(DimensionMismatch):
            partition_clocks([_vc(1, 2)], _vc(1))

    def test_disjoint_and_complete(self, layered_clocks) -> None:
        clocks = list(layered_clocks.values()) + [layered_clocks["op2c"]]
        for pivot in clocks:
            before, concurrent, after = partition_clocks(clocks, pivot)
            assert Counter(before) + Counter(concurrent) + Counter(after) == Counter(clocks)


class TestLatestClocks:
    """Test the maximal antichain reduction."""

    def test_diamond(self, diamond_clocks) -> None:
        c = diamond_clocks
        latest = latest_clocks([c["c1"], c["c2"], c["c3"], c["c4"], c["c5"]])
        assert latest == {c["c3"], c["c5"]}

    def test_empty(self) -> None:
        assert latest_clocks([]) == frozenset()

    def test_single(self) -> None:
        assert latest_clocks([_vc(1, 2)]) == {_vc(1, 2)}

    def test_chain_keeps_last(self) -> None:
        assert latest_clocks([_vc(3), _vc(1), _vc(2)]) == {_vc(3)}

    def test_antichain_kept_whole(self) -> None:
        clocks = [_vc(1, 0, 0), _vc(0, 1, 0), _vc(0, 0, 1)]
        assert latest_clocks(clocks) == set(clocks)

    def test_duplicates_collapse(self) -> None:
        assert latest_clocks([_vc(1, 1), _vc(1, 1), _vc(0, 1)]) == {_vc(1, 1)}

    def test_candidate_evicts_several(self) -> None:
        """Evicting by swap-with-last still checks the moved clock."""
        clocks = [_vc(1, 0), _vc(0, 3), _vc(2, 1), _vc(2, 4)]
        assert latest_clocks(clocks) == {_vc(2, 4)}

    def test_later_clock_dominated(self) -> None:
        clocks = [_vc(1, 0), _vc(3, 3), _vc(2, 0)]
        assert latest_clocks(clocks) == {_vc(3, 3)}

    def test_maximal_alias(self) -> None:
        assert maximal_clocks is latest_clocks

    def test_result_is_antichain_and_dominates(self, layered_clocks) -> None:
        clocks = list(layered_clocks.values())
        latest = latest_clocks(clocks)
        assert is_antichain(latest)
        for c in clocks:
            if c not in latest:
                assert any(c.happens_before(m) for m in latest)


class TestLayeredExecution:
    """
    Sequence (0 (1a 1b) (2c 2d)) (3e 3f) 4, examined at 3e.

    0 is before 3e and concurrent with 1a, 1b, 2c, 2d: keep it.
    1a and 1b are before 2c and 2d: discard them.
    4 happens after 3e.
    """

    def test_partition_and_reduce_every_permutation(self, layered_clocks) -> None:
        c = layered_clocks
        expected_before = {c["op0"], c["op1a"], c["op1b"], c["op2c"], c["op2d"]}
        expected_latest = {c["op0"], c["op2c"], c["op2d"]}

        count = 0
        for ordering in itertools.permutations(c.values()):
            before, concurrent, after = partition_clocks(ordering, c["op3e"])
            assert set(before) == expected_before
            assert len(before) == len(expected_before)
            assert set(concurrent) == {c["op3e"], c["op3f"]}
            assert after == [c["op4"]]
            assert latest_clocks(before) == expected_latest
            count += 1
        assert count == 40320


class TestIsAntichain:
    """Test the antichain predicate."""

    def test_true_for_concurrent(self) -> None:
        assert is_antichain([_vc(1, 0), _vc(0, 1)])

    def test_false_for_ordered(self) -> None:
        assert not is_antichain([_vc(1, 0), _vc(0, 1), _vc(1, 1)])

    def test_empty(self) -> None:
        assert is_antichain([])
