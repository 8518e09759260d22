"""pathgraph: append-only weighted graphs with a shortest-path engine.

Callers choose their own node-state and edge-props types, insert nodes and
edges, and ask for the cheapest path from a source to the nearest of several
targets.

Example:
    from pathgraph import Graph, Weight

    graph = Graph()
    a = graph.insert_node({"name": "a"})
    b = graph.insert_node({"name": "b"})
    ab = graph.insert_edge(a, b, Weight(2))

    graph.best_path(a, [b])   # [ab]
    graph.cost([ab])          # 2
"""

from __future__ import annotations

from pathgraph import logging
from pathgraph._version import __version__
from pathgraph.lib.algorithms.base import (
    Advance,
    Cost,
    CostModel,
    EdgeID,
    HasCost,
    NodeID,
    Weight,
    edge_cost,
)
from pathgraph.lib.algorithms.priority_queue import Heap
from pathgraph.lib.graph import Edge, Graph, Node

__all__ = [
    # Version
    "__version__",
    # Graph store
    "Graph",
    "Node",
    "Edge",
    # Cost models
    "CostModel",
    "Cost",
    "NodeID",
    "EdgeID",
    "HasCost",
    "Advance",
    "Weight",
    "edge_cost",
    # Engine building blocks
    "Heap",
    # Utilities
    "logging",
]
