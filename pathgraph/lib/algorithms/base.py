from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

#: Node identifier. Equal to the node's insertion index in its Graph.
NodeID = int

#: Edge identifier. Equal to the edge's insertion index in its Graph.
EdgeID = int

#: Represents numeric cost accumulated along a path (e.g. distance, latency, etc.).
#: Costs must be non-negative; behavior with negative costs is undefined.
Cost = Union[int, float]


class CostModel(IntEnum):
    """
    Ways the path-finding engine accumulates cost along a path.
    """

    #: Path cost is the sum of edge costs (``props.cost()`` or a numeric payload).
    ADDITIVE = 1
    #: Path cost lives inside node state: ``state.advance(props)`` produces the
    #: state after traversing an edge and ``state.cost()`` ranks it.
    ADVANCE = 2


@runtime_checkable
class HasCost(Protocol):
    """Edge payload exposing a scalar cost."""

    def cost(self) -> Cost: ...


@runtime_checkable
class Advance(Protocol):
    """
    Node state that can be carried along a path.

    advance() must not mutate ``self``; update() commits a better state into an
    existing node state in place; cost() returns the comparable scalar, or None
    for a state that has not accumulated anything yet.
    """

    def advance(self, edge_props: Any) -> Any: ...

    def update(self, node_state: Any) -> None: ...

    def cost(self) -> Optional[Cost]: ...


@dataclass
class Weight:
    """
    Ready-made edge payload holding a numeric cost and free-form attributes.

    Attributes:
        value: Non-negative edge cost.
        attr: Extra attributes carried alongside the cost.
    """

    value: Cost
    attr: Dict[str, Any] = field(default_factory=dict)

    def cost(self) -> Cost:
        return self.value

    @classmethod
    def from_dict(cls, data: Any) -> "Weight":
        """Build a Weight from a serialized payload (a mapping or a bare number)."""
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            return cls(value=data)
        if not isinstance(data, dict) or "value" not in data:
            raise ValueError(f"Cannot build Weight from {data!r}: expected 'value'.")
        value = data["value"]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError(
                f"Cannot build Weight from {data!r}: 'value' must be a number."
            )
        attr = data.get("attr") or {}
        if not isinstance(attr, dict):
            raise ValueError(
                f"Cannot build Weight from {data!r}: 'attr' must be a mapping."
            )
        return cls(value=value, attr=dict(attr))


def edge_cost(props: Any) -> Cost:
    """
    Default cost extraction for an edge payload.

    Plain numbers are their own cost; anything else must implement ``cost()``.
    """
    if isinstance(props, (int, float)) and not isinstance(props, bool):
        return props
    return props.cost()
