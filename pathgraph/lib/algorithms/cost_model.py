from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from pathgraph.lib.algorithms.base import Cost, CostModel, NodeID, edge_cost

if TYPE_CHECKING:
    from pathgraph.lib.graph import Graph


@dataclass(frozen=True)
class LabelOps:
    """
    The operations the path-finding engine needs from a cost model.

    A label is whatever the engine accumulates along a path: a bare cost for
    CostModel.ADDITIVE, a node state for CostModel.ADVANCE.

    Attributes:
        model: The cost model these operations implement.
        start: (graph, source) -> label at the source node.
        extend: (label, edge_props) -> label after traversing the edge.
        rank: label -> comparable cost used as the queue priority.
    """

    model: CostModel
    start: Callable[["Graph", NodeID], Any]
    extend: Callable[[Any, Any], Any]
    rank: Callable[[Any], Cost]


def cost_model_fabric(
    cost_model: CostModel,
    zero_cost: Cost = 0,
    edge_cost_func: Optional[Callable[[Any], Cost]] = None,
) -> LabelOps:
    """
    Creates the label operations for the given cost model.

    Args:
        cost_model: A CostModel enum selecting how costs accumulate.
        zero_cost: Identity cost. Used as the source label for ADDITIVE, and as
            the rank of a source state whose cost() is None for ADVANCE.
        edge_cost_func: Extracts the cost of an edge payload (ADDITIVE only).
            Defaults to ``edge_cost``.

    Returns:
        A LabelOps instance.

    Raises:
        ValueError: If cost_model is not a known CostModel.
    """
    if cost_model == CostModel.ADDITIVE:
        get_cost = edge_cost_func or edge_cost

        def start_additive(graph: "Graph", source: NodeID) -> Cost:
            return zero_cost

        def extend_additive(label: Cost, edge_props: Any) -> Cost:
            return label + get_cost(edge_props)

        def rank_additive(label: Cost) -> Cost:
            return label

        return LabelOps(
            model=CostModel.ADDITIVE,
            start=start_additive,
            extend=extend_additive,
            rank=rank_additive,
        )

    if cost_model == CostModel.ADVANCE:

        def start_advance(graph: "Graph", source: NodeID) -> Any:
            return graph.state(source)

        def extend_advance(label: Any, edge_props: Any) -> Any:
            advanced = label.advance(edge_props)
            if advanced.cost() is None:
                raise ValueError(
                    f"advance() returned a state without a cost: {advanced!r}"
                )
            return advanced

        def rank_advance(label: Any) -> Cost:
            value = label.cost()
            # Only the source state can be unranked; extend rejects the rest.
            return zero_cost if value is None else value

        return LabelOps(
            model=CostModel.ADVANCE,
            start=start_advance,
            extend=extend_advance,
            rank=rank_advance,
        )

    raise ValueError(f"Unsupported cost model: {cost_model!r}")
