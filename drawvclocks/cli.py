"""
Command-line interface for drawvclocks.

Reads vector clocks from a file and writes the Hasse diagram of their
happens-before order in DOT (Graphviz) format, optionally rendered by the
``dot`` command.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import drawvclocks
from drawvclocks.core.hasse import HasseBuilder
from drawvclocks.core.graph import InvariantViolation
from drawvclocks.core.vector_clock import DimensionMismatch
from drawvclocks.utils.clock_reader import ClockFileError, ClockReader
from drawvclocks.utils.logger import BuildLogger, LogLevel
from drawvclocks.utils.visualization import GraphVisualizer, RenderError, apply_labels


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the drawvclocks CLI."""
    parser = argparse.ArgumentParser(
        prog="drawvclocks",
        description=(
            "Reads vector clocks from INPUT, writing the minimal happens-before "
            "graph in dot (graphviz) format to stdout"
        ),
        epilog="Input format: one clock per line: (optional label) n1, n2, ...",
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Path to the vector clock file",
    )
    parser.add_argument(
        "-T",
        "--format",
        default=None,
        metavar="FORMAT",
        help="If set, runs dot with this output format (e.g. png, svg, pdf)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write output to FILE instead of stdout",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Write the graph as JSON instead of dot",
    )
    parser.add_argument(
        "--no-labels",
        action="store_true",
        help="Show bare clocks, ignoring input labels",
    )
    parser.add_argument(
        "--check-cycles",
        action="store_true",
        help="Verify that the generated graph is acyclic",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print graph statistics to stderr",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress information to stderr",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress warnings",
    )
    parser.add_argument(
        "-d",
        "--debug",
        type=int,
        choices=[0, 1, 2, 3],
        default=0,
        help="Debug level 0-3 (default: 0)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"drawvclocks {drawvclocks.__version__}",
    )

    return parser


def _resolve_log_level(verbose: bool, quiet: bool, debug: int) -> LogLevel:
    """Determine the effective log level from verbosity and debug settings."""
    if debug >= 3:
        return LogLevel.DEBUG
    if verbose or debug >= 1:
        return LogLevel.VERBOSE
    if quiet:
        return LogLevel.SILENT
    return LogLevel.NORMAL


def main(argv: Optional[list] = None) -> None:
    """Entry point for the ``drawvclocks`` CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    sys.exit(_run(args))


def _run(args: argparse.Namespace) -> int:
    """Execute the read, build, render pipeline and return the exit code."""
    if args.json and args.format:
        print("Error: --json cannot be combined with -T/--format", file=sys.stderr)
        return 2

    log_level = _resolve_log_level(args.verbose, args.quiet, args.debug)
    logger = BuildLogger(level=log_level, stream=sys.stderr)

    try:
        data = ClockReader(args.input, logger=logger).read_all()
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (ClockFileError, DimensionMismatch) as exc:
        print(f"Error parsing vector clocks: {exc}", file=sys.stderr)
        return 1

    if not data.clocks:
        logger.warning(f"No vector clocks in {args.input}")

    builder = HasseBuilder(logger=logger)
    graph = builder.build(data.clocks)

    if args.check_cycles:
        if graph.contains_cycle():
            raise InvariantViolation("happens-before graph contains a cycle")
        logger.info("Graph is acyclic")

    if not args.no_labels:
        relabelled = apply_labels(graph, data.labels)
        logger.info("Applied labels", nodes=relabelled)

    if args.stats and log_level.value < LogLevel.VERBOSE.value:
        BuildLogger(LogLevel.VERBOSE, stream=sys.stderr).statistics(builder.statistics)

    viz = GraphVisualizer(graph)

    if args.format:
        try:
            rendered = viz.render(args.format, filepath=args.output)
        except RenderError as exc:
            print(f"Error from dot: {exc}", file=sys.stderr)
            return exc.returncode
        if args.output is None:
            sys.stdout.buffer.write(rendered)
            sys.stdout.flush()
        return 0

    text = viz.to_json() + "\n" if args.json else viz.to_dot()
    if args.output is not None:
        try:
            args.output.write_text(text, encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot write {args.output}: {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(text)
    return 0
