"""Configuration classes for pathgraph components."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class DocumentConfig:
    """Layout of serialized graph documents."""

    # Keys of the four index-aligned sequences
    nodes_key: str = "nodes"
    states_key: str = "states"
    edges_key: str = "edges"
    props_key: str = "props"

    # Indentation for JSON output; None writes a single line
    json_indent: Optional[int] = 2

    def keys(self) -> Tuple[str, str, str, str]:
        """Return the sequence keys in document order."""
        return (self.nodes_key, self.states_key, self.edges_key, self.props_key)


# Global configuration instance
DOCUMENT_CONFIG = DocumentConfig()
