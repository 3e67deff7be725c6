"""Tests for depth computation and node positioning."""

import pytest

from textubes.core import ir
from textubes.core.compiler import compile_grammar
from textubes.core.layout import LayoutConfig, apply_layout, compute_depths


def reachable_pairs(graph: ir.CompiledGraph) -> set[tuple[str, str]]:
    """Every (a, b) with a directed path a -> b."""
    successors: dict[str, set[str]] = {}
    for edge in graph.edges:
        successors.setdefault(edge.source, set()).add(edge.target)

    pairs = set()
    for node in graph.nodes:
        stack = list(successors.get(node.id, ()))
        seen: set[str] = set()
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            pairs.add((node.id, current))
            stack.extend(successors.get(current, ()))
    return pairs


class TestComputeDepths:
    def test_leaves_are_zero(self):
        assert compute_depths({"a": set(), "b": set()}) == {"a": 0, "b": 0}

    def test_longest_chain_wins(self):
        depths = compute_depths({"top": {"mid", "leaf"}, "mid": {"leaf"}, "leaf": set()})
        assert depths == {"top": 2, "mid": 1, "leaf": 0}

    def test_unknown_predecessors_count_as_leaves(self):
        assert compute_depths({"a": {"ghost"}}) == {"a": 1, "ghost": 0}

    def test_cycle_degrades_instead_of_recursing(self):
        depths = compute_depths({"a": {"b"}, "b": {"a"}})
        assert set(depths) == {"a", "b"}

    def test_self_loop(self):
        assert compute_depths({"a": {"a"}}) == {"a": 1}

    def test_deep_chain_does_not_hit_recursion_limit(self):
        chain = {f"n{i}": {f"n{i - 1}"} for i in range(1, 10_000)}
        chain["n0"] = set()
        assert compute_depths(chain)["n9999"] == 9999

    def test_roots_limit_the_walk(self):
        depths = compute_depths({"a": {"b"}, "b": set(), "c": set()}, roots=["a"])
        assert depths == {"a": 1, "b": 0}


class TestApplyLayout:
    def test_positions_by_depth_and_row(self):
        graph = ir.CompiledGraph(
            nodes=[ir.FlowNode(id=i, type="source") for i in ("a", "b", "c")],
            edges=[ir.FlowEdge(id="e1", source="a", target="c")],
        )
        apply_layout(graph, LayoutConfig(horizontal_spacing=100, vertical_spacing=10))

        positions = {n.id: (n.position.x, n.position.y) for n in graph.nodes}
        assert positions == {"a": (0, 0), "b": (0, 10), "c": (100, 0)}

    def test_default_spacing(self, greeting_graph):
        xs = sorted({n.position.x for n in greeting_graph.nodes})
        assert xs[:2] == [0, 300]
        ys = sorted({n.position.y for n in greeting_graph.nodes})
        assert ys[:2] == [0, 150]

    def test_referenced_source_left_of_result(self, greeting_graph):
        name_source = next(
            n for n in greeting_graph.nodes_of_type(ir.NodeType.SOURCE)
            if n.id.startswith("source-name-")
        )
        result = greeting_graph.nodes_of_type(ir.NodeType.RESULT)[0]
        assert name_source.position.x < result.position.x

    @pytest.mark.parametrize(
        "grammar",
        [
            {"origin": "#a.capitalize.s# #b#", "a": ["x", "y"], "b": "#a.ed# #c#", "c": "z"},
            {
                "origin": "#suggestion#",
                "suggestion": ["#refactor#", "#database#"],
                "refactor": "Have you tried #rewriting# it in #language.capitalize#?",
                "rewriting": ["refactoring", "rewriting"],
                "language": ["haskell", "rust"],
                "database": "Let's migrate to #datastore#",
                "datastore": ["postgres", "mongo"],
            },
        ],
    )
    def test_paths_always_move_right(self, grammar):
        graph = compile_grammar(grammar)
        x = {n.id: n.position.x for n in graph.nodes}
        for a, b in reachable_pairs(graph):
            assert x[a] < x[b]

    def test_cyclic_edges_still_get_positions(self):
        graph = ir.CompiledGraph(
            nodes=[ir.FlowNode(id="a", type="source"), ir.FlowNode(id="b", type="source")],
            edges=[
                ir.FlowEdge(id="e1", source="a", target="b"),
                ir.FlowEdge(id="e2", source="b", target="a"),
            ],
        )
        apply_layout(graph)
        # b sees a as in progress (depth 0), then a sits one column past b
        assert sorted(n.position.x for n in graph.nodes) == [300, 600]
