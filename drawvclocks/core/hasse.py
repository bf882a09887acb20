"""
Hasse diagram construction over vector clocks.

Builds the minimal graph whose edges are the covering relation of the
happens-before order: ``p -> c`` exists iff ``p ≺ c`` and no input clock
lies strictly between them. Equal input clocks collapse to one node.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from drawvclocks.core.graph import Graph, InvariantViolation
from drawvclocks.core.partial_order import latest_clocks, partition_clocks
from drawvclocks.core.vector_clock import VectorClock, check_dimensions
from drawvclocks.utils.logger import BuildLogger, LogLevel


class HasseBuilder:
    """
    Builds the transitive reduction of a set of vector clocks.

    For every clock ``c``: partition the input around ``c``, reduce the
    ``before`` bucket to its maximal elements, and link each of those to
    ``c``. O(n) partitions of O(n) plus O(n) reductions of O(n²) give
    O(n³) comparisons, which is fine for the small sets this renders.

    Attributes:
        logger: Logger for progress and debug output.
        statistics: Counters from the last :meth:`build`.
    """

    def __init__(self, logger: Optional[BuildLogger] = None) -> None:
        self.logger: BuildLogger = logger or BuildLogger(LogLevel.SILENT)
        self.statistics: Dict[str, Any] = {}

    def build(self, clocks: Iterable[VectorClock]) -> Graph:
        """
        Build the Hasse diagram of *clocks*.

        Args:
            clocks: The input clocks; all must share one dimension.

        Returns:
            A graph with one node per distinct clock and one edge per
            covering pair.

        Raises:
            DimensionMismatch: If the clocks differ in length. Checked
                before any node is created.
        """
        clock_list: List[VectorClock] = list(clocks)
        dimension = check_dimensions(clock_list)
        self.logger.info(
            "Building Hasse diagram", clocks=len(clock_list), dimension=dimension
        )

        # equal clocks share one node, so each distinct clock is linked once
        distinct_clocks = list(dict.fromkeys(clock_list))

        graph = Graph()
        for c in distinct_clocks:
            before = partition_clocks(clock_list, c).before
            immediately_before = latest_clocks(before)

            node = graph.find_or_add(c)
            # iterate in input order so the edge order is deterministic
            for p in _in_input_order(immediately_before, before):
                graph.add_edge(graph.find_or_add(p), node)
            self.logger.clock_linked(c, immediately_before)

        distinct = len(distinct_clocks)
        if len(graph) != distinct:
            raise InvariantViolation(
                f"graph has {len(graph)} nodes for {distinct} distinct clocks"
            )

        self.statistics = {
            "clocks": len(clock_list),
            "distinct_clocks": distinct,
            "duplicates": len(clock_list) - distinct,
            "dimension": dimension,
            "nodes": len(graph),
            "edges": graph.edge_count,
        }
        self.logger.statistics(self.statistics)
        return graph


def _in_input_order(
    chosen: Iterable[VectorClock],
    ordered: List[VectorClock],
) -> List[VectorClock]:
    """Return the distinct members of *chosen* in the order they appear in *ordered*."""
    remaining = set(chosen)
    out: List[VectorClock] = []
    for c in ordered:
        if c in remaining:
            remaining.discard(c)
            out.append(c)
    return out


def clocks_to_graph(
    clocks: Iterable[VectorClock],
    logger: Optional[BuildLogger] = None,
) -> Graph:
    """
    Convert *clocks* into the graph with the minimum number of edges
    representing their happens-before relationships.

    Convenience wrapper around :meth:`HasseBuilder.build`.
    """
    return HasseBuilder(logger=logger).build(clocks)
