"""
Compilation of Tracery grammars into Textubes node graphs.

Each rule becomes a small subgraph:

    simple rule:       Source -> RandomSelection
    referencing rule:  Source -> Template -> RandomSelection

The source holds every option on its own line (references rewritten to
``__PLACEHOLDER__`` tokens). Each distinct placeholder of a referencing rule
is wired from the referenced rule's RandomSelection, through one modifier
node per supported modifier, into the template's ``token-<NAME>`` handle.
Finally a Result node is attached to ``origin``.

The compiler does not validate. Always run ``validate_grammar`` first.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from textubes.core import ir
from textubes.core.layout import LayoutConfig, apply_layout, compute_depths
from textubes.core.references import parse_references
from textubes.core.rewriter import strip_actions, to_template_syntax
from textubes.core.validator import build_dependency_graph, normalize_grammar

logger = logging.getLogger(__name__)


@dataclass
class GraphBuilder:
    """
    Accumulates nodes and edges for one compile call.

    Ids are ``<type>-<label>-<nanos>-<counter>``. The timestamp is fixed
    per builder and the counter only grows, so ids never repeat within a
    call and differ between calls.
    """

    is_dark_mode: bool = False
    stamp: int = field(default_factory=time.time_ns)
    nodes: list[ir.FlowNode] = field(default_factory=list)
    edges: list[ir.FlowEdge] = field(default_factory=list)
    _counter: int = 0

    def make_id(self, node_type: str, label: str) -> str:
        node_id = f"{node_type}-{label}-{self.stamp}-{self._counter}"
        self._counter += 1
        return node_id

    def add_node(self, node_type: ir.NodeType, label: str, **data: Any) -> str:
        """Append a node and return its id."""
        node_id = self.make_id(node_type.value, label)
        self.nodes.append(
            ir.FlowNode(
                id=node_id,
                type=node_type.value,
                data=ir.NodeData(is_dark_mode=self.is_dark_mode, **data),
            )
        )
        return node_id

    def connect(self, source: str, target: str, handle: str | None = None) -> None:
        """Append an edge from ``source`` to ``target`` (optionally into ``handle``)."""
        edge_id = f"e-{source}-{target}" if handle is None else f"e-{source}-{target}-{handle}"
        self.edges.append(
            ir.FlowEdge(id=edge_id, source=source, target=target, target_handle=handle)
        )

    def build(self) -> ir.CompiledGraph:
        return ir.CompiledGraph(nodes=self.nodes, edges=self.edges)


def _unique_placeholders(refs: list[ir.TraceryReference]) -> list[ir.TraceryReference]:
    """First reference for each distinct placeholder, in order of appearance."""
    seen: dict[str, ir.TraceryReference] = {}
    for ref in refs:
        seen.setdefault(ref.placeholder_name, ref)
    return list(seen.values())


def _wire_reference(
    builder: GraphBuilder,
    ref: ir.TraceryReference,
    rule_output: Mapping[str, str],
    template_id: str,
) -> None:
    """Connect a referenced rule's output, through its modifier chain, into a template slot."""
    upstream = rule_output.get(ref.key)
    if upstream is None:
        logger.debug("No output registered for rule %r; slot left unconnected", ref.key)
        return

    for modifier in ref.supported_modifiers:
        modifier_id = builder.add_node(
            ir.MODIFIER_NODE_TYPES[modifier], f"{ref.key}-{modifier}"
        )
        builder.connect(upstream, modifier_id)
        upstream = modifier_id

    builder.connect(upstream, template_id, ir.token_handle(ref.placeholder_name))


def compile_grammar(
    grammar: ir.Grammar,
    is_dark_mode: bool = False,
    layout: LayoutConfig | None = None,
) -> ir.CompiledGraph:
    """
    Compile a validated grammar into nodes and edges.

    Args:
        grammar: Rule name -> option string or list of option strings
        is_dark_mode: Display theme flag copied onto every node
        layout: Spacing used to position nodes (default: 300 x 150 px)

    Returns:
        CompiledGraph with positioned nodes and edges
    """
    rules = normalize_grammar(grammar)

    dependencies = {
        key: {dep for dep in deps if dep in rules}
        for key, deps in build_dependency_graph(rules).items()
    }
    rule_depth = compute_depths(dependencies)
    ordered_rules = sorted(rules, key=lambda key: rule_depth[key])

    rule_refs: dict[str, list[ir.TraceryReference]] = {}
    for key, options in rules.items():
        refs = [ref for option in options for ref in parse_references(strip_actions(option))]
        if refs:
            rule_refs[key] = refs

    logger.debug(
        "Compiling %d rules (%d with references, max depth %d)",
        len(rules),
        len(rule_refs),
        max(rule_depth.values(), default=0),
    )

    builder = GraphBuilder(is_dark_mode=is_dark_mode)
    rule_output: dict[str, str] = {}
    rule_template: dict[str, str] = {}

    for key in ordered_rules:
        options = rules[key]
        if key in rule_refs:
            text = "\n".join(to_template_syntax(option) for option in options)
        else:
            text = "\n".join(strip_actions(option) for option in options)

        source_id = builder.add_node(
            ir.NodeType.SOURCE, key, value=text, locked_in_published=True
        )

        if key in rule_refs:
            slots = [ref.placeholder_name for ref in _unique_placeholders(rule_refs[key])]
            template_id = builder.add_node(ir.NodeType.TEMPLATE, key, initial_tokens=slots)
            selection_id = builder.add_node(ir.NodeType.RANDOM_SELECTION, key, mode="line")
            builder.connect(source_id, template_id, ir.TEMPLATE_HANDLE)
            builder.connect(template_id, selection_id)
            rule_template[key] = template_id
        else:
            selection_id = builder.add_node(ir.NodeType.RANDOM_SELECTION, key, mode="line")
            builder.connect(source_id, selection_id)

        rule_output[key] = selection_id

    for key in ordered_rules:
        if key not in rule_refs:
            continue
        for ref in _unique_placeholders(rule_refs[key]):
            _wire_reference(builder, ref, rule_output, rule_template[key])

    result_id = builder.add_node(ir.NodeType.RESULT, "output")
    builder.connect(rule_output[ir.ORIGIN_RULE], result_id)

    graph = apply_layout(builder.build(), layout)
    logger.debug("Compiled %d nodes and %d edges", len(graph.nodes), len(graph.edges))
    return graph
