"""
Reference evaluator for compiled graphs.

Implements the per-node contracts the compiler relies on, for the node
types it emits, so a compiled grammar can be sampled without the editor.
"""

from __future__ import annotations

import logging
import random
from collections import deque

from textubes.core import ir
from textubes.core.errors import EvaluationError
from textubes.runtime.modifiers import MODIFIER_FUNCTIONS
from textubes.runtime.template import (
    derive_template_slots,
    fill_template,
    reconcile_slot_bindings,
)

logger = logging.getLogger(__name__)

TOKEN_HANDLE_PREFIX = ir.token_handle("")


def topological_order(graph: ir.CompiledGraph) -> list[ir.FlowNode]:
    """
    Order nodes so every edge source comes before its target.

    Uses Kahn's algorithm, keeping emission order among ready nodes.

    Raises:
        EvaluationError: If an edge references a missing node or edges form a cycle
    """
    node_map = {node.id: node for node in graph.nodes}
    in_degree = dict.fromkeys(node_map, 0)
    targets: dict[str, list[str]] = {node_id: [] for node_id in node_map}

    for edge in graph.edges:
        if edge.source not in node_map or edge.target not in node_map:
            raise EvaluationError(
                f"Edge '{edge.id}' connects missing node(s): {edge.source} -> {edge.target}"
            )
        in_degree[edge.target] += 1
        targets[edge.source].append(edge.target)

    queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
    ordered: list[ir.FlowNode] = []

    while queue:
        node_id = queue.popleft()
        ordered.append(node_map[node_id])
        for target in targets[node_id]:
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(target)

    if len(ordered) != len(node_map):
        stuck = sorted(set(node_map) - {n.id for n in ordered})
        raise EvaluationError(f"Cycle detected involving nodes: {stuck}")

    return ordered


class GraphEvaluator:
    """
    Computes every node's value from its inputs.

    Random selection nodes draw from the injected ``rng``; pass a seeded
    ``random.Random`` for reproducible output.
    """

    def __init__(self, graph: ir.CompiledGraph, rng: random.Random | None = None):
        self.graph = graph
        self.rng = rng or random.Random()
        self.order = topological_order(graph)
        self.values: dict[str, str] = {}

    def evaluate(self) -> dict[str, str]:
        """Evaluate all nodes; return node id -> value."""
        self.values = {}
        for node in self.order:
            self.values[node.id] = self._compute(node)
        return self.values

    def regenerate(self) -> str:
        """Re-run every random selection and return the new output."""
        self.evaluate()
        return self.output()

    def output(self) -> str:
        """Value of the (first) result node."""
        if not self.values:
            self.evaluate()
        results = self.graph.nodes_of_type(ir.NodeType.RESULT)
        if not results:
            raise EvaluationError("Graph has no result node")
        return self.values[results[0].id]

    def _input(self, node: ir.FlowNode) -> str:
        for edge in self.graph.incoming(node.id):
            if edge.target_handle is None:
                return self.values[edge.source]
        return ""

    def _compute(self, node: ir.FlowNode) -> str:
        if node.type == ir.NodeType.SOURCE:
            return node.data.value
        if node.type == ir.NodeType.RANDOM_SELECTION:
            return self._select_line(self._input(node))
        if node.type == ir.NodeType.TEMPLATE:
            return self._fill(node)
        if node.type == ir.NodeType.RESULT:
            return self._input(node)

        try:
            transform = MODIFIER_FUNCTIONS[ir.NodeType(node.type)]
        except (KeyError, ValueError):
            raise EvaluationError(
                f"Unsupported node type '{node.type}' on node '{node.id}'"
            ) from None
        return transform(self._input(node))

    def _select_line(self, text: str) -> str:
        if not text:
            return ""
        return self.rng.choice(text.split("\n"))

    def _fill(self, node: ir.FlowNode) -> str:
        template = ""
        bindings: dict[str, str] = {}
        for edge in self.graph.incoming(node.id):
            if edge.target_handle == ir.TEMPLATE_HANDLE:
                template = self.values[edge.source]
            elif edge.target_handle and edge.target_handle.startswith(TOKEN_HANDLE_PREFIX):
                bindings[edge.target_handle.removeprefix(TOKEN_HANDLE_PREFIX)] = edge.source

        slots = derive_template_slots(template, node.data.initial_tokens)
        resolved = reconcile_slot_bindings(slots, bindings)
        unbound = [slot for slot, source in resolved.items() if source is None]
        if unbound:
            logger.debug("Template %s has unconnected slots: %s", node.id, unbound)

        return fill_template(
            template,
            {slot: self.values[source] for slot, source in resolved.items() if source},
        )


def generate(graph: ir.CompiledGraph, count: int = 1, seed: int | None = None) -> list[str]:
    """Sample ``count`` outputs from a compiled graph."""
    evaluator = GraphEvaluator(graph, random.Random(seed))
    return [evaluator.regenerate() for _ in range(count)]
