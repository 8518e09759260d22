"""Command-line interface for pathgraph."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from pathgraph.io import read_graph, write_graph
from pathgraph.lib.algorithms.base import Weight
from pathgraph.lib.generate import random_graph
from pathgraph.lib.graph import Graph
from pathgraph.logging import get_logger, set_global_log_level

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[str]], min_width: int = 8) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string, empty when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = [
        max(max(len(str(row[i])) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise duration: 0.123 -> "123.0 ms"; 1.234 -> "1.23 s"."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _node_label(graph: Graph, node_id: int) -> str:
    state = graph.state(node_id)
    if isinstance(state, dict) and "name" in state:
        return str(state["name"])
    return str(node_id)


def _resolve_node(graph: Graph, token: str) -> int:
    """Map a CLI node token to a node ID.

    A token matching a node state's ``name`` wins; otherwise it must be an
    integer node ID.

    Raises:
        ValueError: If the token names no node.
    """
    for node in graph.nodes():
        state = graph.state(node.id)
        if isinstance(state, dict) and str(state.get("name")) == token:
            return node.id
    try:
        node_id = int(token)
    except ValueError:
        raise ValueError(f"Unknown node: '{token}'") from None
    graph.node(node_id)
    return node_id


def _load(path: Path) -> Graph:
    return read_graph(path, props_factory=Weight.from_dict)


def _find_path(path: Path, source: str, targets: List[str]) -> None:
    """Load a graph document, run one best-path query and print the result as JSON."""
    _start_time = perf_counter()
    try:
        graph = _load(path)
        source_id = _resolve_node(graph, source)
        target_ids = [_resolve_node(graph, t) for t in targets]
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except (ValueError, IndexError) as e:
        logger.error(f"Failed to load query: {type(e).__name__}: {e}")
        print(f"❌ ERROR: {type(e).__name__}: {e}")
        sys.exit(1)

    edge_path = graph.best_path(source_id, target_ids)
    result: Dict[str, Any] = {
        "source": source_id,
        "targets": target_ids,
        "path": edge_path,
        "cost": None,
    }
    if edge_path is None:
        logger.warning(f"No path from {source} to any of {targets}")
    else:
        result["cost"] = graph.cost(edge_path)
        result["nodes"] = [_node_label(graph, source_id)] + [
            _node_label(graph, graph.edge(e).dst) for e in edge_path
        ]

    print(json.dumps(result, indent=2))
    logger.info(
        f"Path query completed in {_format_duration(perf_counter() - _start_time)}"
    )


def _inspect_graph(path: Path) -> None:
    """Print node and edge counts plus self-loop and parallel-edge statistics."""
    try:
        graph = _load(path)
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Failed to load graph: {e}")
        print(f"❌ ERROR: {type(e).__name__}: {e}")
        sys.exit(1)

    self_loops = sum(1 for edge in graph.edges() if edge.src == edge.dst)
    seen_pairs: Dict[tuple, int] = {}
    for edge in graph.edges():
        pair = (edge.src, edge.dst)
        seen_pairs[pair] = seen_pairs.get(pair, 0) + 1
    parallel = sum(count - 1 for count in seen_pairs.values() if count > 1)
    isolated = sum(
        1 for node in graph.nodes() if not node.incoming and not node.outgoing
    )

    rows = [
        ["nodes", str(graph.num_nodes)],
        ["edges", str(graph.num_edges)],
        ["self-loops", str(self_loops)],
        ["parallel edges", str(parallel)],
        ["isolated nodes", str(isolated)],
    ]
    print(f"Graph: {path}")
    print(_format_table(["Metric", "Value"], rows))


def _write_sample(
    path: Path, nodes: int, edges: int, seed: Optional[int], max_cost: float
) -> None:
    """Write a random sample graph document."""
    try:
        graph = random_graph(nodes, edges, seed=seed, max_cost=max_cost)
        write_graph(path, graph)
    except ValueError as e:
        logger.error(f"Failed to write sample graph: {e}")
        print(f"❌ ERROR: {e}")
        sys.exit(1)
    print(f"✅ Sample graph written to: {path}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``pathgraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="pathgraph",
        description="Query shortest paths in weighted graph documents.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{path,inspect,sample}",
        help="Available commands",
    )

    path_parser = subparsers.add_parser(
        "path", help="Find the cheapest path to the nearest target"
    )
    path_parser.add_argument("graph", type=Path, help="Graph document (.json/.yaml)")
    path_parser.add_argument(
        "--source", "-s", required=True, help="Source node name or id"
    )
    path_parser.add_argument(
        "--target",
        "-t",
        required=True,
        nargs="+",
        help="One or more target node names or ids",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a graph document")
    inspect_parser.add_argument("graph", type=Path, help="Graph document (.json/.yaml)")

    sample_parser = subparsers.add_parser(
        "sample", help="Write a random sample graph document"
    )
    sample_parser.add_argument("output", type=Path, help="Output file (.json/.yaml)")
    sample_parser.add_argument("--nodes", type=int, default=26, help="Node count")
    sample_parser.add_argument("--edges", type=int, default=100, help="Edge count")
    sample_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    sample_parser.add_argument(
        "--max-cost", type=float, default=1.0, help="Upper bound of edge costs"
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "path":
        _find_path(args.graph, args.source, args.target)
    elif args.command == "inspect":
        _inspect_graph(args.graph)
    elif args.command == "sample":
        _write_sample(args.output, args.nodes, args.edges, args.seed, args.max_cost)


if __name__ == "__main__":
    main()
