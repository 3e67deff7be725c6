"""Tests for flow document serialisation."""

import json

from textubes.core import ir
from textubes.core.flow import dump_flow, read_flow, to_flow_document, write_flow


def test_document_wraps_graph(greeting_graph):
    document = to_flow_document(greeting_graph, is_dark_mode=True, name="Greeting")
    assert document.version == ir.FLOW_FORMAT_VERSION
    assert document.name == "Greeting"
    assert document.dark_mode is True
    assert len(document.nodes) == len(greeting_graph.nodes)


def test_dump_uses_editor_field_names(greeting_graph):
    data = json.loads(dump_flow(to_flow_document(greeting_graph)))

    assert set(data) == {"version", "nodes", "edges", "darkMode"}
    template = next(n for n in data["nodes"] if n["type"] == "template")
    assert template["data"]["initialTokens"] == ["NAME"]
    assert "initial_tokens" not in template["data"]
    assert any(e.get("targetHandle") == "template" for e in data["edges"])


def test_dumped_flow_is_recognised_by_validator(greeting_graph):
    from textubes.core.validator import validate_grammar

    data = json.loads(dump_flow(to_flow_document(greeting_graph)))
    result = validate_grammar(data)
    assert not result.valid
    assert "flow file" in result.errors[0]


def test_write_then_read(tmp_path, greeting_graph):
    path = tmp_path / "greeting.flow.json"
    write_flow(to_flow_document(greeting_graph, is_dark_mode=True), path)

    loaded = read_flow(path)
    assert loaded.dark_mode is True
    assert [n.id for n in loaded.nodes] == [n.id for n in greeting_graph.nodes]
    assert loaded.edges == greeting_graph.edges


def test_read_keeps_unknown_node_data(tmp_path):
    path = tmp_path / "editor.json"
    path.write_text(
        json.dumps(
            {
                "version": 1,
                "nodes": [
                    {
                        "id": "n1",
                        "type": "source",
                        "position": {"x": 10, "y": 20},
                        "data": {"value": "hi", "isDarkMode": True, "customField": 3},
                    }
                ],
                "edges": [],
            }
        ),
        encoding="utf-8",
    )

    node = read_flow(path).nodes[0]
    assert node.data.is_dark_mode is True
    assert node.position.x == 10
    assert node.data.model_extra == {"customField": 3}
