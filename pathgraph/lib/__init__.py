"""Graph store, path-finding algorithms and integrations."""

from pathgraph.lib.graph import Edge, Graph, Node

__all__ = [
    "Edge",
    "Graph",
    "Node",
]
