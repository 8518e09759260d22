"""Shared fixtures: small graphs built from (from, to, cost) edge lists."""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

import pytest

from pathgraph import Graph, Weight

EdgeSpec = Tuple[str, str, int]


def graph_from_edges(
    edges: List[EdgeSpec], nodes: str = ""
) -> Tuple[Graph, Dict[str, int], List[int]]:
    """Build a graph from named edges.

    Nodes listed in ``nodes`` are inserted first, then any other endpoint in
    order of first appearance. Returns (graph, node ids by name, edge ids in
    the order given).
    """
    graph: Graph = Graph()
    ids: Dict[str, int] = {}

    def node(name: str) -> int:
        if name not in ids:
            ids[name] = graph.insert_node({"name": name})
        return ids[name]

    for name in nodes:
        node(name)
    edge_ids = [graph.insert_edge(node(u), node(v), Weight(cost)) for u, v, cost in edges]
    return graph, ids, edge_ids


@pytest.fixture
def build_graph() -> Callable[..., Tuple[Graph, Dict[str, int], List[int]]]:
    return graph_from_edges


@pytest.fixture
def diamond():
    # Metric:
    #        [1]          [10]
    #   a ────────► b ────────► d
    #   │           ▲           ▲
    #   │ [2]   [3] │       [8] │
    #   └─────────► c ──────────┘
    return graph_from_edges(
        [
            ("a", "b", 1),
            ("b", "d", 10),
            ("a", "c", 2),
            ("c", "b", 3),
            ("c", "d", 8),
        ]
    )


@pytest.fixture
def fork():
    return graph_from_edges([("a", "b", 2), ("a", "c", 1)])


@pytest.fixture
def chain():
    return graph_from_edges([("a", "b", 2), ("b", "c", 1)])


@pytest.fixture
def multi_edge():
    return graph_from_edges([("a", "b", 3), ("a", "b", 2), ("a", "b", 1)])


@pytest.fixture
def loopy_edge():
    return graph_from_edges([("a", "a", 1), ("a", "b", 2)])


@pytest.fixture
def disconnected():
    return graph_from_edges([], nodes="ab")


@pytest.fixture
def square():
    # Two equal-cost routes a->b->d and a->c->d.
    return graph_from_edges(
        [
            ("a", "b", 1),
            ("b", "d", 1),
            ("a", "c", 1),
            ("c", "d", 1),
        ]
    )
