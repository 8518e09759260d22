from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

from pathgraph.lib.algorithms import spf
from pathgraph.lib.algorithms.base import Cost, CostModel, EdgeID, NodeID
from pathgraph.lib.algorithms.cost_model import LabelOps, cost_model_fabric

NodeState = TypeVar("NodeState")
EdgeProps = TypeVar("EdgeProps")


@dataclass
class Node:
    """
    Structural record of a node.

    Attributes:
        id: Node ID, equal to the insertion index.
        incoming: IDs of edges ending at this node, in insertion order.
        outgoing: IDs of edges starting at this node, in insertion order.
    """

    id: NodeID
    incoming: List[EdgeID] = field(default_factory=list)
    outgoing: List[EdgeID] = field(default_factory=list)


@dataclass(frozen=True)
class Edge:
    """
    Structural record of a directed edge.

    Attributes:
        id: Edge ID, equal to the insertion index.
        src: Node the edge starts at.
        dst: Node the edge ends at.
    """

    id: EdgeID
    src: NodeID
    dst: NodeID


class Graph(Generic[NodeState, EdgeProps]):
    """
    Append-only directed multigraph with caller-defined node and edge payloads.

    Nodes and edges live in four parallel lists (nodes, states, edges, props)
    indexed by their IDs. IDs are assigned in insertion order and are never
    reused, since nothing is ever removed; an ID stays valid for the lifetime of
    the graph. Self-loops and parallel edges are allowed and are told apart by ID.

    Payloads are opaque to the store. Shortest-path queries read them through a
    cost model:
      - CostModel.ADDITIVE: edge payloads carry a cost (``props.cost()`` or a
        plain number, or whatever ``edge_cost`` extracts); path cost is the sum.
      - CostModel.ADVANCE: node states implement ``advance(props)``,
        ``update(state)`` and ``cost()``; the cost lives in the state.

    Not safe for concurrent insertion. Queries only read the graph, so several
    may run against a graph that is no longer growing.
    """

    def __init__(
        self,
        cost_model: CostModel = CostModel.ADDITIVE,
        zero_cost: Cost = 0,
        edge_cost: Optional[Callable[[EdgeProps], Cost]] = None,
    ) -> None:
        """
        Initialize an empty Graph.

        Args:
            cost_model: Default cost model used by path queries.
            zero_cost: Identity cost; the cost of an empty path.
            edge_cost: Extracts the cost of an edge payload. Defaults to
                ``pathgraph.lib.algorithms.base.edge_cost``.
        """
        self._nodes: List[Node] = []
        self._states: List[NodeState] = []
        self._edges: List[Edge] = []
        self._props: List[EdgeProps] = []
        self.cost_model = CostModel(cost_model)
        self.zero_cost = zero_cost
        self._edge_cost = edge_cost

    #
    # Insertion
    #
    def insert_node(self, state: NodeState) -> NodeID:
        """Append a node with no edges and return its ID."""
        node_id = len(self._nodes)
        self._nodes.append(Node(id=node_id))
        self._states.append(state)
        return node_id

    def insert_edge(self, src: NodeID, dst: NodeID, props: EdgeProps) -> EdgeID:
        """
        Append a directed edge from src to dst and return its ID.

        Raises:
            IndexError: If src or dst is not a node of this graph. The graph is
                left unchanged.
        """
        src_node = self.node(src)
        dst_node = self.node(dst)
        edge_id = len(self._edges)
        self._edges.append(Edge(id=edge_id, src=src, dst=dst))
        self._props.append(props)
        src_node.outgoing.append(edge_id)
        dst_node.incoming.append(edge_id)
        return edge_id

    #
    # Accessors
    #
    def node(self, node_id: NodeID) -> Node:
        return self._nodes[self._check_node_id(node_id)]

    def state(self, node_id: NodeID) -> NodeState:
        return self._states[self._check_node_id(node_id)]

    def edge(self, edge_id: EdgeID) -> Edge:
        return self._edges[self._check_edge_id(edge_id)]

    def props(self, edge_id: EdgeID) -> EdgeProps:
        return self._props[self._check_edge_id(edge_id)]

    @property
    def num_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def nodes(self) -> Iterator[Node]:
        return iter(self._nodes)

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def edges_between(self, src: NodeID, dst: NodeID) -> List[EdgeID]:
        """List the IDs of all edges from src to dst, in insertion order."""
        self._check_node_id(dst)
        return [
            edge_id
            for edge_id in self.node(src).outgoing
            if self._edges[edge_id].dst == dst
        ]

    def _check_node_id(self, node_id: NodeID) -> NodeID:
        if not _is_index(node_id) or not 0 <= node_id < len(self._nodes):
            raise IndexError(f"Node id {node_id!r} does not exist.")
        return node_id

    def _check_edge_id(self, edge_id: EdgeID) -> EdgeID:
        if not _is_index(edge_id) or not 0 <= edge_id < len(self._edges):
            raise IndexError(f"Edge id {edge_id!r} does not exist.")
        return edge_id

    #
    # Costs
    #
    def edge_cost(self, edge_id: EdgeID) -> Cost:
        """Return the cost of a single edge."""
        return self._ops(CostModel.ADDITIVE).extend(
            self.zero_cost, self.props(edge_id)
        )

    def cost(self, path: Sequence[EdgeID]) -> Cost:
        """
        Sum the edge costs along a path.

        An empty path costs ``zero_cost``.

        Raises:
            IndexError: If the path contains an unknown edge ID.
        """
        ops = self._ops(CostModel.ADDITIVE)
        total = self.zero_cost
        for edge_id in path:
            total = ops.extend(total, self.props(edge_id))
        return total

    def path_state(self, path: Sequence[EdgeID]) -> NodeState:
        """
        Fold ``advance`` along a path, starting from the state of its first node.

        Raises:
            ValueError: If the path is empty or its edges are not consecutive.
            IndexError: If the path contains an unknown edge ID.
        """
        if not path:
            raise ValueError("Cannot advance along an empty path.")
        ops = self._ops(CostModel.ADVANCE)
        first = self.edge(path[0])
        label = ops.start(self, first.src)
        at_node = first.src
        for edge_id in path:
            edge = self.edge(edge_id)
            if edge.src != at_node:
                raise ValueError(
                    f"Edge {edge_id} starts at node {edge.src}, not at node {at_node}."
                )
            label = ops.extend(label, self.props(edge_id))
            at_node = edge.dst
        return label

    #
    # Path queries
    #
    def best_path(
        self,
        source: NodeID,
        targets: Sequence[NodeID],
        cost_model: Optional[CostModel] = None,
    ) -> Optional[List[EdgeID]]:
        """
        Find the cheapest path from source to whichever target is cheapest to reach.

        Args:
            source: Source node ID.
            targets: Candidate target node IDs. Ties go to the first listed.
            cost_model: Overrides the graph's cost model for this query.

        Returns:
            Edge IDs ordered from source to the chosen target, an empty list if
            source is one of the targets, or None if no target is reachable.

        Raises:
            IndexError: If source or a target is not a node of this graph.
        """
        return spf.best_path(self, source, targets, self._ops(cost_model))

    def cheapest_path(
        self,
        source: NodeID,
        target: NodeID,
        cost_model: Optional[CostModel] = None,
    ) -> Optional[List[EdgeID]]:
        """Single-target form of best_path()."""
        return spf.cheapest_path(self, source, target, self._ops(cost_model))

    def best_states(
        self, source: NodeID, cost_model: Optional[CostModel] = None
    ) -> List[Any]:
        """
        Return the best label of every node as seen from source.

        The label is the path cost under CostModel.ADDITIVE and the advanced
        node state under CostModel.ADVANCE; unreachable nodes map to None.
        """
        return spf.best_states(self, source, self._ops(cost_model))

    def costs(
        self, source: NodeID, cost_model: Optional[CostModel] = None
    ) -> List[Optional[Cost]]:
        """Return the cheapest path cost from source to every node (None if unreachable)."""
        return spf.search(self, source, self._ops(cost_model)).best_cost

    def settle(self, source: NodeID) -> List[NodeID]:
        """
        Commit best states reachable from source into the graph's node states.

        Runs a full CostModel.ADVANCE search and calls ``update(best_state)`` on
        the stored state of every reached node except the source.

        Returns:
            IDs of the updated nodes, ascending.

        Raises:
            ValueError: If the graph is not configured with CostModel.ADVANCE.
        """
        if self.cost_model != CostModel.ADVANCE:
            raise ValueError(
                f"settle() requires {CostModel.ADVANCE!r}, graph uses {self.cost_model!r}."
            )
        best = spf.best_states(self, source, self._ops(CostModel.ADVANCE))
        updated: List[NodeID] = []
        for node_id, best_state in enumerate(best):
            if node_id == source or best_state is None:
                continue
            self._states[node_id].update(best_state)
            updated.append(node_id)
        return updated

    def _ops(self, cost_model: Optional[CostModel] = None) -> LabelOps:
        return cost_model_fabric(
            self.cost_model if cost_model is None else CostModel(cost_model),
            zero_cost=self.zero_cost,
            edge_cost_func=self._edge_cost,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(nodes={len(self._nodes)}, "
            f"edges={len(self._edges)}, cost_model={self.cost_model.name})"
        )


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
