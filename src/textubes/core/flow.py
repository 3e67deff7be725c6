"""
Saving compiled graphs as editor flow files.
"""

import json
from pathlib import Path

from textubes.core import ir


def to_flow_document(
    graph: ir.CompiledGraph,
    is_dark_mode: bool = False,
    name: str | None = None,
) -> ir.FlowDocument:
    """Wrap a compiled graph in the editor's flow document format."""
    return ir.FlowDocument(
        name=name, nodes=graph.nodes, edges=graph.edges, dark_mode=is_dark_mode
    )


def dump_flow(document: ir.FlowDocument) -> str:
    """Serialise a flow document with the editor's field names."""
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def write_flow(document: ir.FlowDocument, path: Path) -> None:
    path.write_text(dump_flow(document) + "\n", encoding="utf-8")


def read_flow(path: Path) -> ir.FlowDocument:
    """Load a flow document written by ``write_flow`` (or by the editor)."""
    return ir.FlowDocument.model_validate(json.loads(path.read_text(encoding="utf-8")))
