"""
Directed graph store for Hasse diagrams.

Nodes live in an append-only arena and are addressed by index; edges are
stored as arena indices on the source node. A separate mapping from each
node's canonical key (``str(value)``) to its index backs lookups and
relabeling, so relabeling a node never invalidates edges pointing at it.

Mutation is not thread-safe. A caller sharing a graph across threads must
hold one lock for the whole build-then-read lifecycle.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


class InvariantViolation(AssertionError):
    """
    Raised when the graph reaches a state that valid input cannot produce.

    This signals a defect in the caller or in the graph itself, not bad
    user input, and is never meant to be caught and recovered from.
    """

    pass


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvariantViolation(message)


@dataclass(eq=False)
class Node:
    """
    A node in a :class:`Graph`.

    Attributes:
        index: Position of this node in its graph's arena.
        value: The node's value; ``str(value)`` is its identity key.
        points_to: Arena indices of the nodes this node has edges to.
    """

    index: int
    value: Any
    points_to: List[int] = field(default_factory=list)

    @property
    def key(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Node({self.index}, {self.key!r}, points_to={self.points_to})"


class _Mark(Enum):
    UNVISITED = 0
    ON_STACK = 1
    DONE = 2


class Graph:
    """
    Node/edge store keyed by the canonical string of each node's value.

    Attributes:
        nodes: All nodes in insertion order.
    """

    def __init__(self) -> None:
        self._nodes: List[Node] = []
        self._index: Dict[str, int] = {}

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def add_node(self, value: Any) -> Node:
        """
        Create a node for *value*.

        Raises:
            InvariantViolation: If a node with the same key exists.
        """
        key = str(value)
        _require(key not in self._index, f"duplicate node key {key!r}")
        node = Node(index=len(self._nodes), value=value)
        self._nodes.append(node)
        self._index[key] = node.index
        return node

    def find_or_add(self, value: Any) -> Node:
        """Return the node for *value*, creating it if absent."""
        node = self.find(value)
        if node is None:
            node = self.add_node(value)
        return node

    def find(self, value: Any) -> Optional[Node]:
        """Return the node whose key is ``str(value)``, or None."""
        idx = self._index.get(str(value))
        if idx is None:
            return None
        return self._nodes[idx]

    def owns(self, node: Optional[Node]) -> bool:
        """True when *node* is a member of this graph's arena."""
        return (
            node is not None
            and 0 <= node.index < len(self._nodes)
            and self._nodes[node.index] is node
        )

    def add_edge(self, source: Node, target: Node) -> None:
        """
        Add a directed edge ``source -> target``.

        Raises:
            InvariantViolation: If either node is None or belongs to
                another graph.
        """
        _require(self.owns(source), f"edge source {source!r} is not in this graph")
        _require(self.owns(target), f"edge target {target!r} is not in this graph")
        source.points_to.append(target.index)

    def relabel(self, node: Node, new_value: Any) -> None:
        """
        Replace *node*'s value, keeping its position and edges.

        Raises:
            InvariantViolation: If *node*'s current key no longer maps to
                it, or if the new key already belongs to another node.
        """
        _require(self.owns(node), f"relabel of foreign node {node!r}")
        old_key = node.key
        _require(
            self._index.get(old_key) == node.index,
            f"stale key {old_key!r} for node {node.index}",
        )
        new_key = str(new_value)
        existing = self._index.get(new_key)
        _require(
            existing is None or existing == node.index,
            f"relabel to {new_key!r} collides with node {existing}",
        )
        del self._index[old_key]
        node.value = new_value
        self._index[new_key] = node.index

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, value: object) -> bool:
        return str(value) in self._index

    @property
    def edge_count(self) -> int:
        return sum(len(n.points_to) for n in self._nodes)

    def edges(self) -> Iterator[Tuple[Node, Node]]:
        """Yield every ``(source, target)`` pair in arena order."""
        for node in self._nodes:
            for idx in node.points_to:
                yield node, self._nodes[idx]

    def successors(self, node: Node) -> List[Node]:
        """Return the nodes *node* has edges to."""
        return [self._nodes[idx] for idx in node.points_to]

    def incoming(self, value: Any) -> List[Node]:
        """
        Return the nodes with an edge to the node for *value*.

        Scans every edge (O(V + E)); there is no reverse index. Returns an
        empty list when *value* has no node.
        """
        target = self.find(value)
        if target is None:
            return []
        return [
            node
            for node in self._nodes
            for idx in node.points_to
            if idx == target.index
        ]

    def contains_cycle(self) -> bool:
        """
        Detect a directed cycle with a three-colour depth-first search.

        The search restarts from every node still unvisited, so
        disconnected components are all explored. Returns True as soon as
        an edge reaches a node on the current DFS stack.
        """
        marks = [_Mark.UNVISITED] * len(self._nodes)

        for root in range(len(self._nodes)):
            if marks[root] is not _Mark.UNVISITED:
                continue
            marks[root] = _Mark.ON_STACK
            # (node index, position of the next child to explore)
            stack: List[List[int]] = [[root, 0]]
            while stack:
                frame = stack[-1]
                children = self._nodes[frame[0]].points_to
                if frame[1] == len(children):
                    marks[frame[0]] = _Mark.DONE
                    stack.pop()
                    continue
                child = children[frame[1]]
                frame[1] += 1
                if marks[child] is _Mark.ON_STACK:
                    return True
                if marks[child] is _Mark.UNVISITED:
                    marks[child] = _Mark.ON_STACK
                    stack.append([child, 0])
        return False

    # ------------------------------------------------------------------ #
    # Serialization
    # ------------------------------------------------------------------ #

    def serialize(self) -> str:
        """
        Describe the graph in DOT (Graphviz) format.

        Lists one line per edge and one line per isolated node (no edges
        in or out) so that it still appears in the rendering.
        """
        has_incoming = [False] * len(self._nodes)
        for node in self._nodes:
            for idx in node.points_to:
                has_incoming[idx] = True

        lines: List[str] = ["digraph {"]
        lines.append("  graph [rankdir=LR]")
        lines.append("  node [shape=plaintext]")
        for node in self._nodes:
            for idx in node.points_to:
                lines.append(f"  {quote(node.key)} -> {quote(self._nodes[idx].key)}")
            if not node.points_to and not has_incoming[node.index]:
                lines.append(f"  {quote(node.key)}")
        lines.append("}")
        return "\n".join(lines) + "\n"

    to_dot = serialize

    def __repr__(self) -> str:
        return f"Graph({len(self._nodes)} nodes, {self.edge_count} edges)"


def quote(key: str) -> str:
    """Quote *key* as a DOT string literal, escaping quotes and control characters."""
    return json.dumps(key, ensure_ascii=False)
