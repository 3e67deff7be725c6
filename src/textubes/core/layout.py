"""
Layered layout for compiled graphs.

Depth is the length of the longest chain of predecessors leading to a node.
The same computation orders grammar rules (predecessors = referenced rules)
and places emitted nodes (predecessors = edge sources).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from textubes.core.ir import CompiledGraph, Position

DEFAULT_HORIZONTAL_SPACING = 300
DEFAULT_VERTICAL_SPACING = 150


@dataclass(frozen=True)
class LayoutConfig:
    """Pixel spacing between depth columns and between nodes in a column."""

    horizontal_spacing: float = DEFAULT_HORIZONTAL_SPACING
    vertical_spacing: float = DEFAULT_VERTICAL_SPACING


def compute_depths(
    predecessors: Mapping[str, Iterable[str]],
    roots: Iterable[str] | None = None,
) -> dict[str, int]:
    """
    Compute ``depth(n) = 1 + max(depth(p) for p in predecessors[n])``.

    Nodes without predecessors have depth 0. Results are memoised, and the
    walk uses an explicit stack so deep chains cannot hit the recursion
    limit. A predecessor that is still being computed (a cycle) counts as
    depth 0 instead of recursing forever.

    Args:
        predecessors: Mapping of node -> nodes it depends on. Nodes that only
            appear as predecessors are treated as having none.
        roots: Nodes to compute, in order (default: every key of
            ``predecessors``)

    Returns:
        Mapping of every visited node to its depth
    """
    depths: dict[str, int] = {}
    in_progress: set[str] = set()

    def preds(node: str) -> list[str]:
        return list(predecessors.get(node, ()))

    for root in predecessors if roots is None else roots:
        if root in depths:
            continue
        in_progress.add(root)
        stack = [(root, iter(preds(root)))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep not in depths and dep not in in_progress:
                    in_progress.add(dep)
                    stack.append((dep, iter(preds(dep))))
                    break
            else:
                stack.pop()
                in_progress.discard(node)
                depths[node] = 1 + max((depths.get(d, 0) for d in preds(node)), default=-1)

    return depths


def apply_layout(graph: CompiledGraph, config: LayoutConfig | None = None) -> CompiledGraph:
    """
    Position every node by its depth in the edge graph.

    x is ``depth * horizontal_spacing``; within a depth column nodes are
    stacked in emission order at ``index * vertical_spacing``.

    Returns:
        The same graph, with node positions updated in place
    """
    config = config or LayoutConfig()

    incoming: dict[str, list[str]] = {node.id: [] for node in graph.nodes}
    for edge in graph.edges:
        incoming.setdefault(edge.target, []).append(edge.source)

    depths = compute_depths(incoming, roots=[node.id for node in graph.nodes])

    column_sizes: dict[int, int] = {}
    for node in graph.nodes:
        depth = depths[node.id]
        row = column_sizes.get(depth, 0)
        column_sizes[depth] = row + 1
        node.position = Position(
            x=depth * config.horizontal_spacing,
            y=row * config.vertical_spacing,
        )

    return graph
