#!/usr/bin/env python3
"""
BFS Routing CLI - Run a breadth-first search on the demo graph.

Usage:
    python scripts/run_search.py --start A --end F
    python scripts/run_search.py --start A --end F --delay 0.5
    python scripts/run_search.py --start A --end F --add-edge A-F
    python scripts/run_search.py --start A --end G --add-node G:E
    python scripts/run_search.py --start A --end F --remove-node D --stats

Graph edits are applied in this order before the search:
    --add-node, --add-edge, --remove-node

Exit codes:
    0   path found
    1   destination not reachable
    2   invalid node or edge
    130 interrupted
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.benchmark import summarize  # noqa: E402
from src.config import LOG_DATEFMT, LOG_FORMAT, STEP_DELAY_SECONDS  # noqa: E402
from src.errors import GraphError  # noqa: E402
from src.graph import GraphStore, default_graph  # noqa: E402
from src.search import SearchEngine, TraversalEvent  # noqa: E402


def parse_edge(value: str) -> tuple[str, str]:
    """Parse 'A-F' into ('A', 'F')."""
    a, sep, b = value.partition("-")
    if not sep or not a or not b:
        raise argparse.ArgumentTypeError(f"Edge must look like A-F, got '{value}'")
    return a, b


def parse_node(value: str) -> tuple[str, str | None]:
    """Parse 'G' or 'G:E' into (label, connect_to)."""
    label, sep, connect_to = value.partition(":")
    if not label:
        raise argparse.ArgumentTypeError(f"Node must look like G or G:E, got '{value}'")
    return label, connect_to or None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a breadth-first search on the demo graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--start",
        type=str,
        required=True,
        help="Start node label",
    )
    parser.add_argument(
        "--end",
        type=str,
        required=True,
        help="Destination node label",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help=f"Seconds between steps (default 0; {STEP_DELAY_SECONDS} for a watchable pace)",
    )
    parser.add_argument(
        "--add-node",
        type=parse_node,
        action="append",
        default=[],
        metavar="LABEL[:CONNECT_TO]",
        help="Add a node, optionally connected to an existing one (repeatable)",
    )
    parser.add_argument(
        "--add-edge",
        type=parse_edge,
        action="append",
        default=[],
        metavar="A-B",
        help="Add an edge (repeatable)",
    )
    parser.add_argument(
        "--remove-node",
        type=str,
        action="append",
        default=[],
        metavar="LABEL",
        help="Remove a node and its edges (repeatable)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print graph statistics before searching",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    if args.delay < 0:
        parser.error("--delay must be >= 0")
    return args


def apply_edits(graph: GraphStore, args: argparse.Namespace) -> None:
    """Apply the requested graph edits in order."""
    for label, connect_to in args.add_node:
        graph.add_node(label, connect_to=connect_to)
    for a, b in args.add_edge:
        if not graph.add_edge(a, b):
            print(f"Edge {a}-{b} already present")
    for label in args.remove_node:
        graph.remove_node(label)


def print_event(event: TraversalEvent) -> None:
    print(f"[LOG] {event.describe()}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    graph = default_graph()

    try:
        apply_edits(graph, args)
    except GraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.stats:
        summary = summarize(graph)
        print("Graph:")
        for key, value in summary.to_dict().items():
            print(f"  {key}: {value}")
        print()

    engine = SearchEngine(step_delay=args.delay, on_event=print_event)

    try:
        result = engine.run(graph, args.start, args.end)
    except GraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\n\nSearch interrupted by user")
        return 130  # Standard exit code for Ctrl+C

    print()
    if result.found:
        print(f"Shortest path ({result.hops} hops): {' -> '.join(result.path)}")
        return 0

    print(f"No path from '{args.start}' to '{args.end}'")
    return 1


if __name__ == "__main__":
    sys.exit(main())
