"""NetworkX graph conversion utilities.

Converts between NetworkX graphs and pathgraph's Graph.

Example:
    >>> import networkx as nx
    >>> from pathgraph.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", cost=10)
    >>> G.add_edge("B", "C", cost=5)
    >>>
    >>> graph, node_map, edge_map = from_networkx(G)
    >>> path = graph.cheapest_path(node_map.to_index["A"], node_map.to_index["C"])
    >>> [edge_map.to_ref[e] for e in path]
    [('A', 'B', 0), ('B', 'C', 0)]
    >>>
    >>> G_out = to_networkx(graph, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Tuple

import networkx as nx

from pathgraph.lib.algorithms.base import Cost, EdgeID, Weight
from pathgraph.lib.graph import Graph


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and integer node IDs.

    Attributes:
        to_index: Maps original node names to node IDs.
        to_name: Maps node IDs back to original node names.

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from node names listed in ID order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)


# (source_node, target_node, edge_key) in the NetworkX graph
EdgeRef = Tuple[Hashable, Hashable, Any]


@dataclass
class EdgeMap:
    """Mapping between edge IDs and original NetworkX edge references.

    Attributes:
        to_ref: Maps an edge ID to its (u, v, key) reference.
        from_ref: Maps a (u, v, key) reference to its edge IDs (two IDs when
            the edge was added in both directions).
    """

    to_ref: Dict[EdgeID, EdgeRef] = field(default_factory=dict)
    from_ref: Dict[EdgeRef, List[EdgeID]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.to_ref)


def from_networkx(
    G: Any,
    *,
    cost_attr: str = "cost",
    default_cost: Cost = 1,
    bidirectional: bool = False,
    **graph_kwargs: Any,
) -> Tuple[Graph, NodeMap, EdgeMap]:
    """Convert a NetworkX graph to a pathgraph Graph.

    Nodes are inserted in NetworkX iteration order, so node IDs follow the
    order the nodes were added to G. Node states are dicts holding the node
    name under ``"name"`` plus the NetworkX node attributes. Edge props are
    Weight instances holding the cost and the remaining edge attributes.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph or MultiGraph).
        cost_attr: Edge attribute holding the cost.
        default_cost: Cost used when the attribute is missing.
        bidirectional: Also add the reverse of every edge. Always on for
            undirected graphs.
        **graph_kwargs: Forwarded to the Graph constructor.

    Returns:
        (graph, node_map, edge_map).

    Raises:
        TypeError: If G is not a NetworkX graph.
    """
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    graph: Graph = Graph(**graph_kwargs)
    node_map = NodeMap.from_names(list(G.nodes()))
    for name, attrs in G.nodes(data=True):
        graph.insert_node({"name": name, **attrs})

    both_ways = bidirectional or not G.is_directed()
    if G.is_multigraph():
        edges_iter = G.edges(keys=True, data=True)
    else:
        edges_iter = ((u, v, 0, d) for u, v, d in G.edges(data=True))

    edge_map = EdgeMap()
    for u, v, key, data in edges_iter:
        ref: EdgeRef = (u, v, key)
        cost = data.get(cost_attr, default_cost)
        attr = {k: val for k, val in data.items() if k != cost_attr}
        src, dst = node_map.to_index[u], node_map.to_index[v]

        pairs = [(src, dst)]
        if both_ways and src != dst:
            pairs.append((dst, src))
        for a, b in pairs:
            edge_id = graph.insert_edge(a, b, Weight(value=cost, attr=dict(attr)))
            edge_map.to_ref[edge_id] = ref
            edge_map.from_ref.setdefault(ref, []).append(edge_id)

    return graph, node_map, edge_map


def to_networkx(
    graph: Graph,
    node_map: Optional[NodeMap] = None,
    *,
    cost_attr: str = "cost",
) -> nx.MultiDiGraph:
    """Convert a pathgraph Graph to a NetworkX MultiDiGraph.

    Edge keys are the pathgraph edge IDs and each edge carries its cost under
    ``cost_attr``. Nodes are named through node_map when given, otherwise by ID.

    Args:
        graph: Graph to convert.
        node_map: Optional NodeMap restoring original node names.
        cost_attr: Edge attribute name for the cost.

    Returns:
        nx.MultiDiGraph with one edge per pathgraph edge.
    """
    G = nx.MultiDiGraph()

    def name_of(node_id: int) -> Hashable:
        if node_map is None:
            return node_id
        return node_map.to_name.get(node_id, node_id)

    for node in graph.nodes():
        G.add_node(name_of(node.id))

    for edge in graph.edges():
        G.add_edge(
            name_of(edge.src),
            name_of(edge.dst),
            key=edge.id,
            **{cost_attr: graph.edge_cost(edge.id)},
        )

    return G
