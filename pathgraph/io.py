"""Reading and writing graphs as structured documents.

A document holds the four index-aligned sequences of a Graph::

    {
        "nodes":  [{"id": 0, "incoming": [...], "outgoing": [...]}, ...],
        "states": [<node state>, ...],
        "edges":  [{"id": 0, "src": <node id>, "dst": <node id>}, ...],
        "props":  [<edge props>, ...],
    }

Graphs are always rebuilt through the public insertion API, so a loaded graph
satisfies the same invariants as one built in memory.
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from pathgraph.config import DOCUMENT_CONFIG, DocumentConfig
from pathgraph.lib.graph import Graph
from pathgraph.logging import get_logger

logger = get_logger(__name__)

Encoder = Callable[[Any], Any]
Factory = Callable[[Any], Any]


def encode_payload(value: Any) -> Any:
    """Dataclass payloads become dicts; anything else is stored as is."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def graph_to_dict(
    graph: Graph,
    encode_state: Optional[Encoder] = None,
    encode_props: Optional[Encoder] = None,
    config: DocumentConfig = DOCUMENT_CONFIG,
) -> Dict[str, List[Any]]:
    """
    Convert a Graph into a document dict suitable for JSON or YAML.

    Args:
        graph: The graph to convert.
        encode_state: Converts a node state to plain data. Defaults to encode_payload.
        encode_props: Converts edge props to plain data. Defaults to encode_payload.
        config: Document key names.

    Returns:
        A dict with the nodes, states, edges and props sequences.
    """
    encode_state = encode_state or encode_payload
    encode_props = encode_props or encode_payload
    return {
        config.nodes_key: [
            {
                "id": node.id,
                "incoming": list(node.incoming),
                "outgoing": list(node.outgoing),
            }
            for node in graph.nodes()
        ],
        config.states_key: [encode_state(graph.state(n)) for n in range(graph.num_nodes)],
        config.edges_key: [
            {"id": edge.id, "src": edge.src, "dst": edge.dst} for edge in graph.edges()
        ],
        config.props_key: [encode_props(graph.props(e)) for e in range(graph.num_edges)],
    }


def dict_to_graph(
    data: Dict[str, Any],
    state_factory: Optional[Factory] = None,
    props_factory: Optional[Factory] = None,
    config: DocumentConfig = DOCUMENT_CONFIG,
    **graph_kwargs: Any,
) -> Graph:
    """
    Rebuild a Graph from a document dict.

    The ``nodes`` sequence may be omitted; when present its adjacency lists must
    agree with the ones implied by ``edges``.

    Args:
        data: Document dict.
        state_factory: Builds a node state from plain data. Defaults to identity.
        props_factory: Builds edge props from plain data. Defaults to identity.
        config: Document key names.
        **graph_kwargs: Forwarded to the Graph constructor.

    Returns:
        The rebuilt Graph.

    Raises:
        ValueError: If the document is malformed or inconsistent.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Graph document must be a mapping, got {type(data).__name__}.")

    _, *required_keys = config.keys()
    for key in required_keys:
        if key not in data:
            raise ValueError(f"Graph document is missing required key '{key}'.")

    states = _sequence(data, config.states_key)
    edges = _sequence(data, config.edges_key)
    props = _sequence(data, config.props_key)
    nodes = _sequence(data, config.nodes_key) if config.nodes_key in data else None

    if nodes is not None and len(nodes) != len(states):
        raise ValueError(
            f"'{config.nodes_key}' has {len(nodes)} entries but "
            f"'{config.states_key}' has {len(states)}."
        )
    if len(edges) != len(props):
        raise ValueError(
            f"'{config.edges_key}' has {len(edges)} entries but "
            f"'{config.props_key}' has {len(props)}."
        )

    state_factory = state_factory or _identity
    props_factory = props_factory or _identity

    graph: Graph = Graph(**graph_kwargs)
    for state in states:
        graph.insert_node(state_factory(state))

    for index, edge_obj in enumerate(edges):
        _check_record_id(edge_obj, index, config.edges_key)
        try:
            src, dst = edge_obj["src"], edge_obj["dst"]
        except KeyError as exc:
            raise ValueError(
                f"Edge record {index} is missing field {exc.args[0]!r}."
            ) from exc
        try:
            graph.insert_edge(src, dst, props_factory(props[index]))
        except IndexError as exc:
            raise ValueError(f"Edge record {index}: {exc}") from exc

    if nodes is not None:
        for index, node_obj in enumerate(nodes):
            _check_record_id(node_obj, index, config.nodes_key)
            node = graph.node(index)
            for field_name in ("incoming", "outgoing"):
                stored = node_obj.get(field_name)
                if stored is None:
                    continue
                if not isinstance(stored, list):
                    raise ValueError(
                        f"Node record {index}: '{field_name}' must be a list."
                    )
                if stored != getattr(node, field_name):
                    raise ValueError(
                        f"Node record {index}: '{field_name}' {stored} does not "
                        f"match edges {getattr(node, field_name)}."
                    )

    logger.debug(
        f"Loaded graph document with {graph.num_nodes} nodes and {graph.num_edges} edges"
    )
    return graph


def to_json(graph: Graph, config: DocumentConfig = DOCUMENT_CONFIG, **kwargs: Any) -> str:
    """Serialize a Graph to a JSON string. Extra kwargs go to graph_to_dict."""
    return json.dumps(
        graph_to_dict(graph, config=config, **kwargs), indent=config.json_indent
    )


def from_json(text: str, config: DocumentConfig = DOCUMENT_CONFIG, **kwargs: Any) -> Graph:
    """Rebuild a Graph from a JSON string. Extra kwargs go to dict_to_graph."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON graph document: {exc}") from exc
    return dict_to_graph(data, config=config, **kwargs)


def to_yaml(graph: Graph, config: DocumentConfig = DOCUMENT_CONFIG, **kwargs: Any) -> str:
    """Serialize a Graph to a YAML string. Extra kwargs go to graph_to_dict."""
    return yaml.safe_dump(
        graph_to_dict(graph, config=config, **kwargs), sort_keys=False
    )


def from_yaml(text: str, config: DocumentConfig = DOCUMENT_CONFIG, **kwargs: Any) -> Graph:
    """Rebuild a Graph from a YAML string. Extra kwargs go to dict_to_graph."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML graph document: {exc}") from exc
    return dict_to_graph(data, config=config, **kwargs)


def write_graph(path: Union[str, Path], graph: Graph, **kwargs: Any) -> Path:
    """
    Write a Graph document, choosing JSON or YAML from the file suffix.

    Raises:
        ValueError: If the suffix is not .json, .yaml or .yml.
    """
    path = Path(path)
    dump = _DUMPERS.get(path.suffix.lower())
    if dump is None:
        raise ValueError(f"Unsupported graph file type: '{path.suffix}'")
    path.write_text(dump(graph, **kwargs))
    logger.info(f"Wrote graph with {graph.num_nodes} nodes to: {path}")
    return path


def read_graph(path: Union[str, Path], **kwargs: Any) -> Graph:
    """
    Read a Graph document, choosing JSON or YAML from the file suffix.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is unsupported or the document is malformed.
    """
    path = Path(path)
    load = _LOADERS.get(path.suffix.lower())
    if load is None:
        raise ValueError(f"Unsupported graph file type: '{path.suffix}'")
    logger.info(f"Loading graph from: {path}")
    return load(path.read_text(), **kwargs)


def _sequence(data: Dict[str, Any], key: str) -> List[Any]:
    value = data[key]
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}.")
    return value


def _check_record_id(record: Any, index: int, key: str) -> None:
    if not isinstance(record, dict):
        raise ValueError(f"'{key}' entry {index} must be a mapping.")
    if "id" in record and record["id"] != index:
        raise ValueError(
            f"'{key}' entry {index} has id {record['id']!r}; ids must equal positions."
        )


def _identity(value: Any) -> Any:
    return value


_DUMPERS = {".json": to_json, ".yaml": to_yaml, ".yml": to_yaml}
_LOADERS = {".json": from_json, ".yaml": from_yaml, ".yml": from_yaml}
