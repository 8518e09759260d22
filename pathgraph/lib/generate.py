"""Seeded random graphs for demos and tests."""

from __future__ import annotations

import random
import string
from typing import Any, Dict, Optional

from pathgraph.lib.algorithms.base import Weight
from pathgraph.lib.graph import Graph


def node_name(index: int) -> str:
    """Spreadsheet-style name for a node index: a..z, aa, ab, ..."""
    letters = string.ascii_lowercase
    name = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, len(letters))
        name = letters[rem] + name
    return name


def random_graph(
    num_nodes: int = 26,
    num_edges: int = 100,
    seed: Optional[int] = None,
    max_cost: float = 1.0,
    integer_costs: bool = False,
) -> Graph[Dict[str, Any], Weight]:
    """
    Build a graph with named nodes and uniformly random directed edges.

    Endpoints are drawn independently, so the result may contain self-loops
    and parallel edges.

    Args:
        num_nodes: Number of nodes, named a, b, ..., z, aa, ab, ...
        num_edges: Number of edges.
        seed: Seed for a private random.Random; None for a nondeterministic graph.
        max_cost: Upper bound of edge costs, drawn from [0, max_cost].
        integer_costs: Draw integer costs in [0, max_cost] instead of floats.

    Returns:
        Graph with ``{"name": ...}`` node states and Weight edge props.

    Raises:
        ValueError: If counts are negative, or edges are requested without nodes.
    """
    if num_nodes < 0 or num_edges < 0:
        raise ValueError("num_nodes and num_edges must be non-negative.")
    if num_edges and not num_nodes:
        raise ValueError("Cannot place edges in a graph without nodes.")
    if max_cost < 0:
        raise ValueError("max_cost must be non-negative.")

    rng = random.Random(seed)
    graph: Graph[Dict[str, Any], Weight] = Graph()
    for index in range(num_nodes):
        graph.insert_node({"name": node_name(index)})

    for _ in range(num_edges):
        src = rng.randrange(num_nodes)
        dst = rng.randrange(num_nodes)
        if integer_costs:
            cost = rng.randint(0, int(max_cost))
        else:
            cost = rng.uniform(0.0, max_cost)
        graph.insert_edge(src, dst, Weight(value=cost))

    return graph
