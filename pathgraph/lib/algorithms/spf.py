from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from pathgraph.lib.algorithms.base import Cost, EdgeID, NodeID
from pathgraph.lib.algorithms.cost_model import LabelOps
from pathgraph.lib.algorithms.priority_queue import Heap
from pathgraph.logging import get_logger

if TYPE_CHECKING:
    from pathgraph.lib.graph import Graph

logger = get_logger(__name__)


@dataclass
class SearchState:
    """
    Per-query scratch tables, indexed by NodeID.

    Owned by a single search and never written back into the Graph.

    Attributes:
        best_label: Best label found so far (cost or node state), None if unreached.
        best_cost: Rank of best_label, None if unreached.
        best_incoming: Edge through which best_label was reached. None for the
            source and for unreached nodes.
        closed: True once a node's best label is final.
        pops: Number of entries extracted from the queue.
        stale_pops: Extracted entries discarded because their node was closed.
        relaxations: Number of strict improvements recorded.
        reached: Nodes holding a best cost when the search stopped.
    """

    best_label: List[Any]
    best_cost: List[Optional[Cost]]
    best_incoming: List[Optional[EdgeID]]
    closed: List[bool]
    pops: int = 0
    stale_pops: int = 0
    relaxations: int = 0
    reached: int = 0

    @classmethod
    def allocate(cls, num_nodes: int) -> "SearchState":
        return cls(
            best_label=[None] * num_nodes,
            best_cost=[None] * num_nodes,
            best_incoming=[None] * num_nodes,
            closed=[False] * num_nodes,
        )


def search(
    graph: "Graph",
    source: NodeID,
    ops: LabelOps,
    targets: Optional[Sequence[NodeID]] = None,
) -> SearchState:
    """
    Label-correcting (lazy-deletion Dijkstra) search from a source node.

    Nodes move Unvisited -> Tentative -> Closed. A node is closed the first time
    it is extracted from the queue; later extractions of the same node are stale
    duplicates left behind by earlier relaxations and are discarded. Only strict
    improvements overwrite a tentative label, so among equal-cost paths the
    first one discovered is kept. Self-loops are never relaxed.

    Costs must be non-negative; with negative costs the result is undefined.

    Args:
        graph: The graph to search.
        source: Source node ID.
        ops: Label operations of the cost model to use.
        targets: If given, stop once every target is closed. Results for the
            targets are identical to a full search.

    Returns:
        The SearchState of the finished search.

    Raises:
        IndexError: If source or a target is not a node of the graph.
    """
    graph.node(source)
    pending = None
    if targets is not None:
        pending = {graph.node(target).id for target in targets}

    state = SearchState.allocate(graph.num_nodes)
    start = ops.start(graph, source)
    state.best_label[source] = start
    state.best_cost[source] = ops.rank(start)

    queue = Heap()
    queue.insert(source, state.best_cost[source])

    while not queue.is_empty():
        node_id, _ = queue.extract_min()
        state.pops += 1
        if state.closed[node_id]:
            state.stale_pops += 1
            continue
        state.closed[node_id] = True

        if pending is not None:
            pending.discard(node_id)
            if not pending:
                break

        node_label = state.best_label[node_id]
        for edge_id in graph.node(node_id).outgoing:
            neighbor_id = graph.edge(edge_id).dst
            if neighbor_id == node_id or state.closed[neighbor_id]:
                # self-loops only add cost; closed nodes are already final
                continue

            new_label = ops.extend(node_label, graph.props(edge_id))
            new_cost = ops.rank(new_label)
            known_cost = state.best_cost[neighbor_id]
            if known_cost is None or new_cost < known_cost:
                state.best_label[neighbor_id] = new_label
                state.best_cost[neighbor_id] = new_cost
                state.best_incoming[neighbor_id] = edge_id
                state.relaxations += 1
                queue.insert(neighbor_id, new_cost)

    state.reached = sum(1 for cost in state.best_cost if cost is not None)
    logger.debug(
        f"SPF from node {source} ({ops.model.name}): {state.pops} pops, "
        f"{state.stale_pops} stale, {state.relaxations} relaxations, "
        f"{state.reached}/{graph.num_nodes} nodes reached"
    )
    return state


def resolve_path(
    graph: "Graph",
    source: NodeID,
    target: NodeID,
    best_incoming: Sequence[Optional[EdgeID]],
) -> List[EdgeID]:
    """
    Walk best incoming edges back from target to source.

    Returns:
        Edge IDs ordered from source to target.

    Raises:
        AssertionError: If a node other than the source has no incoming edge,
            which a finished search never produces for a reached node.
    """
    path: List[EdgeID] = []
    node_id = target
    while node_id != source:
        edge_id = best_incoming[node_id]
        if edge_id is None:
            raise AssertionError(
                f"Node {node_id} has a best cost but no incoming edge "
                f"on the way back to source {source}."
            )
        path.append(edge_id)
        node_id = graph.edge(edge_id).src
    path.reverse()
    return path


def best_path(
    graph: "Graph",
    source: NodeID,
    targets: Sequence[NodeID],
    ops: LabelOps,
) -> Optional[List[EdgeID]]:
    """
    Find the cheapest path from source to whichever target is reached most cheaply.

    Among targets with equal cost, the one listed first in ``targets`` wins.

    Args:
        graph: The graph to search.
        source: Source node ID.
        targets: Candidate target node IDs.
        ops: Label operations of the cost model to use.

    Returns:
        Edge IDs from source to the chosen target; an empty list if source is
        itself a target; None if no target is reachable (or targets is empty).

    Raises:
        IndexError: If source or a target is not a node of the graph.
    """
    graph.node(source)
    for target in targets:
        graph.node(target)
    if source in targets:
        return []
    if not targets:
        return None

    state = search(graph, source, ops, targets)

    reached = [target for target in targets if state.best_cost[target] is not None]
    if not reached:
        return None
    # min() keeps the first of equal keys, i.e. the first listed target.
    best_target = min(reached, key=lambda target: state.best_cost[target])
    return resolve_path(graph, source, best_target, state.best_incoming)


def cheapest_path(
    graph: "Graph",
    source: NodeID,
    target: NodeID,
    ops: LabelOps,
) -> Optional[List[EdgeID]]:
    """Single-target form of best_path()."""
    return best_path(graph, source, [target], ops)


def best_states(graph: "Graph", source: NodeID, ops: LabelOps) -> List[Any]:
    """
    Run a full search and return the best label of every node.

    Returns:
        A list indexed by NodeID: the best cost (ADDITIVE) or best node state
        (ADVANCE) reachable from source, None for unreachable nodes. The source
        entry holds its starting label.
    """
    return search(graph, source, ops).best_label
