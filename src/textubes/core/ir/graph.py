"""
Graph-side IR types for Textubes.

This module contains the node/edge representation handed to the editor,
plus the flow document used when a graph is saved to disk. Attribute names
are snake_case in Python and camelCase in the serialised JSON.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .grammar import Modifier

FLOW_FORMAT_VERSION = 1

TEMPLATE_HANDLE = "template"


def token_handle(slot_name: str) -> str:
    """Handle id of the template side input for slot ``slot_name``."""
    return f"token-{slot_name}"


class NodeType(str, Enum):
    """Node types emitted by the grammar compiler."""

    SOURCE = "source"
    RANDOM_SELECTION = "randomselection"
    TEMPLATE = "template"
    CAPITALIZE = "capitalize"
    PLURALIZE = "pluralize"
    ARTICLE = "article"
    PAST_TENSE = "pasttense"
    RESULT = "result"


MODIFIER_NODE_TYPES: dict[str, NodeType] = {
    Modifier.CAPITALIZE.value: NodeType.CAPITALIZE,
    Modifier.PLURAL.value: NodeType.PLURALIZE,
    Modifier.ARTICLE.value: NodeType.ARTICLE,
    Modifier.PAST_TENSE.value: NodeType.PAST_TENSE,
}


class Position(BaseModel):
    """Canvas coordinates in pixels."""

    x: float = 0
    y: float = 0


class NodeData(BaseModel):
    """
    Per-node payload.

    Attributes:
        value: Current text value (content for sources, output otherwise)
        is_dark_mode: Display theme flag
        locked_in_published: Hide the node from the published end-user form
        mode: Selection mode for random selection nodes ("line")
        initial_tokens: Slot names a template node should expose before any
            text has flowed into it
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    value: str = ""
    is_dark_mode: bool = Field(default=False, alias="isDarkMode")
    locked_in_published: bool | None = Field(default=None, alias="lockedInPublished")
    mode: str | None = None
    initial_tokens: list[str] | None = Field(default=None, alias="initialTokens")


class FlowNode(BaseModel):
    """A node on the editor canvas."""

    id: str
    type: str
    position: Position = Field(default_factory=Position)
    data: NodeData = Field(default_factory=NodeData)


class FlowEdge(BaseModel):
    """A directed connection, optionally into a named input handle."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str
    target: str
    target_handle: str | None = Field(default=None, alias="targetHandle")


class CompiledGraph(BaseModel):
    """Nodes and edges produced by one compile call."""

    nodes: list[FlowNode] = Field(default_factory=list)
    edges: list[FlowEdge] = Field(default_factory=list)

    def get_node(self, node_id: str) -> FlowNode | None:
        """Get node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_type(self, node_type: str) -> list[FlowNode]:
        """All nodes of the given type, in emission order."""
        return [n for n in self.nodes if n.type == node_type]

    def incoming(self, node_id: str) -> list[FlowEdge]:
        """Edges whose target is ``node_id``."""
        return [e for e in self.edges if e.target == node_id]

    def outgoing(self, node_id: str) -> list[FlowEdge]:
        """Edges whose source is ``node_id``."""
        return [e for e in self.edges if e.source == node_id]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready ``{nodes, edges}`` using the editor's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FlowDocument(BaseModel):
    """
    A saved editor flow.

    The ``version``/``nodes``/``edges`` key triple is also what the grammar
    validator uses to recognise a flow file passed in by mistake.
    """

    model_config = ConfigDict(populate_by_name=True)

    version: int = FLOW_FORMAT_VERSION
    name: str | None = None
    nodes: list[FlowNode] = Field(default_factory=list)
    edges: list[FlowEdge] = Field(default_factory=list)
    dark_mode: bool = Field(default=False, alias="darkMode")
