"""
Node-type definitions for compiled graphs.

Each node type the grammar compiler emits has a definition describing its
category, its inputs and outputs, and the help text the editor shows.
"""

from dataclasses import dataclass, field

from textubes.core.ir import NodeType


@dataclass(frozen=True)
class PortDefinition:
    """A named input or output on a node."""

    label: str
    description: str


@dataclass(frozen=True)
class NodeTypeDefinition:
    """
    Complete definition of a node type.

    Attributes:
        node_type: NodeType enum value
        label: Human-readable name
        category: One of "input", "transformer", "destination"
        description: What the node does
        inputs: Input ports, in display order
        outputs: Output ports, in display order
    """

    node_type: NodeType
    label: str
    category: str
    description: str
    inputs: list[PortDefinition] = field(default_factory=list)
    outputs: list[PortDefinition] = field(default_factory=list)


# =============================================================================
# Node Type Definitions
# =============================================================================

SOURCE = NodeTypeDefinition(
    node_type=NodeType.SOURCE,
    label="Text Block",
    category="input",
    description=(
        "Literal text. Compiled grammars use one per rule, with one option per line, "
        "hidden from the published view."
    ),
    outputs=[PortDefinition("Output", "The text you entered")],
)

RANDOM_SELECTION = NodeTypeDefinition(
    node_type=NodeType.RANDOM_SELECTION,
    label="Random Selection",
    category="transformer",
    description="Picks one line at random from the input, re-picking whenever it changes.",
    inputs=[PortDefinition("Input", "Text to select from")],
    outputs=[PortDefinition("Output", "Randomly selected line")],
)

TEMPLATE = NodeTypeDefinition(
    node_type=NodeType.TEMPLATE,
    label="Template",
    category="transformer",
    description=(
        "Scans the template input for __TOKEN__ placeholders and creates one input per "
        "distinct token. Unconnected tokens are left as-is."
    ),
    inputs=[PortDefinition("Template", "Text with __TOKEN__ placeholders")],
    outputs=[PortDefinition("Output", "Template with tokens replaced")],
)

CAPITALIZE = NodeTypeDefinition(
    node_type=NodeType.CAPITALIZE,
    label="Capitalize",
    category="transformer",
    description="Uppercases the first character of the input.",
    inputs=[PortDefinition("Input", "Text to capitalize")],
    outputs=[PortDefinition("Output", "Capitalized text")],
)

PLURALIZE = NodeTypeDefinition(
    node_type=NodeType.PLURALIZE,
    label="Pluralize",
    category="transformer",
    description="Applies simple English pluralization rules: -s, -es, -ies.",
    inputs=[PortDefinition("Input", "Word to pluralize")],
    outputs=[PortDefinition("Output", "Pluralized word")],
)

ARTICLE = NodeTypeDefinition(
    node_type=NodeType.ARTICLE,
    label="Article (a/an)",
    category="transformer",
    description="Prepends 'a' or 'an' based on whether the word starts with a vowel.",
    inputs=[PortDefinition("Input", "Word to add article to")],
    outputs=[PortDefinition("Output", "Word with article prepended")],
)

PAST_TENSE = NodeTypeDefinition(
    node_type=NodeType.PAST_TENSE,
    label="Past Tense",
    category="transformer",
    description="Applies simple English past tense rules: -ed, -d, or -ied.",
    inputs=[PortDefinition("Input", "Word to convert")],
    outputs=[PortDefinition("Output", "Word in past tense")],
)

RESULT = NodeTypeDefinition(
    node_type=NodeType.RESULT,
    label="Result",
    category="destination",
    description="Displays the final output text.",
    inputs=[PortDefinition("Input", "Text to display")],
)


NODE_TYPE_DEFINITIONS: dict[NodeType, NodeTypeDefinition] = {
    d.node_type: d
    for d in (
        SOURCE,
        RANDOM_SELECTION,
        TEMPLATE,
        CAPITALIZE,
        PLURALIZE,
        ARTICLE,
        PAST_TENSE,
        RESULT,
    )
}


def get_node_type_definition(node_type: str) -> NodeTypeDefinition | None:
    """Look up a definition by node type value; None for unknown types."""
    try:
        return NODE_TYPE_DEFINITIONS[NodeType(node_type)]
    except ValueError:
        return None
