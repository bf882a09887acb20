"""
Visualization utilities for Hasse diagrams.

Relabels graph nodes with their input labels, exports the graph as DOT or
JSON, and renders it through the Graphviz ``dot`` command.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from drawvclocks.core.graph import Graph


class RenderError(RuntimeError):
    """
    Raised when Graphviz fails to render a graph.

    Attributes:
        returncode: Exit status of ``dot`` (1 when it could not be run).
    """

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


def apply_labels(graph: Graph, labels: Mapping[str, str]) -> int:
    """
    Prefix each labelled node's displayed value with its label.

    A node keyed ``[1, 0]`` with label ``send`` becomes ``send\\n[1, 0]``.

    Args:
        graph: The graph to relabel in place.
        labels: Canonical clock key to label.

    Returns:
        The number of nodes relabelled.
    """
    count = 0
    for node in graph.nodes:
        key = node.key
        label = labels.get(key)
        if label:
            graph.relabel(node, f"{label}\n{key}")
            count += 1
    return count


class GraphVisualizer:
    """
    Renders a Hasse diagram in DOT and JSON formats.

    Attributes:
        graph: The graph to visualize.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def to_dot(self) -> str:
        return self.graph.serialize()

    def to_json(self) -> str:
        """
        Generate JSON representation of the graph.

        Returns:
            A JSON string with nodes (keys) and edges (key pairs).
        """
        nodes: List[Dict[str, Any]] = []
        for node in self.graph.nodes:
            nodes.append(
                {
                    "id": node.index,
                    "key": node.key,
                    "successors": list(node.points_to),
                }
            )

        edges: List[Dict[str, Any]] = []
        for source, target in self.graph.edges():
            edges.append({"source": source.key, "target": target.key})

        return json.dumps({"nodes": nodes, "edges": edges}, indent=2)

    def save_dot(self, filepath: Path) -> None:
        """
        Save DOT format to a file.

        Args:
            filepath: Path to write the DOT file.
        """
        Path(filepath).write_text(self.to_dot(), encoding="utf-8")

    def render(self, fmt: str, filepath: Optional[Path] = None) -> bytes:
        """
        Render the graph with Graphviz ``dot -T<fmt>``.

        Args:
            fmt: Graphviz output format, e.g. ``png`` or ``svg``.
            filepath: Optional path ``dot`` writes to directly.

        Returns:
            The rendered bytes, or empty bytes when *filepath* is given.

        Raises:
            RenderError: If ``dot`` is missing, times out or exits
                non-zero; the error carries ``dot``'s exit status.
        """
        cmd = ["dot", f"-T{fmt}"]
        if filepath is not None:
            cmd += ["-o", str(filepath)]
        try:
            result = subprocess.run(
                cmd,
                input=self.to_dot().encode("utf-8"),
                capture_output=True,
                timeout=60,
            )
        except FileNotFoundError:
            raise RenderError(
                "Graphviz 'dot' command not found. " "Install Graphviz to render graphs."
            )
        except subprocess.TimeoutExpired as exc:
            raise RenderError(f"Graphviz 'dot' timed out after {exc.timeout} seconds")
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise RenderError(f"Graphviz error: {stderr}", result.returncode)
        return result.stdout
