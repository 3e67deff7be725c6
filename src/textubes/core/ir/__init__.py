"""
Textubes Intermediate Representation (IR) types.

Grammar analysis types live in ``grammar``; the node/edge graph handed to
the editor lives in ``graph``. Everything is re-exported here.
"""

from .grammar import (
    ORIGIN_RULE,
    SUPPORTED_MODIFIERS,
    Grammar,
    Modifier,
    NormalizedGrammar,
    TraceryReference,
    ValidationResult,
)
from .graph import (
    FLOW_FORMAT_VERSION,
    MODIFIER_NODE_TYPES,
    TEMPLATE_HANDLE,
    CompiledGraph,
    FlowDocument,
    FlowEdge,
    FlowNode,
    NodeData,
    NodeType,
    Position,
    token_handle,
)

__all__ = [
    # Grammar
    "ORIGIN_RULE",
    "SUPPORTED_MODIFIERS",
    "Grammar",
    "Modifier",
    "NormalizedGrammar",
    "TraceryReference",
    "ValidationResult",
    # Graph
    "FLOW_FORMAT_VERSION",
    "MODIFIER_NODE_TYPES",
    "TEMPLATE_HANDLE",
    "CompiledGraph",
    "FlowDocument",
    "FlowEdge",
    "FlowNode",
    "NodeData",
    "NodeType",
    "Position",
    "token_handle",
]
