"""
Unit tests for grammar validation.

Covers input shape, rule value types, reference resolution, warnings for
unsupported syntax and cycle detection.
"""

import pytest
from pydantic import ValidationError

from textubes.core import ir
from textubes.core.validator import (
    build_dependency_graph,
    find_cycle,
    normalize_grammar,
    validate_grammar,
)


class TestInputShape:
    @pytest.mark.parametrize("value", ["not an object", 42, None, ["origin"], True])
    def test_rejects_non_objects(self, value):
        result = validate_grammar(value)
        assert not result.valid
        assert result.errors == ["Input must be a JSON object"]

    def test_rejects_flow_files(self):
        result = validate_grammar({"version": 1, "nodes": [], "edges": []})
        assert not result.valid
        assert "flow file" in result.errors[0]

    def test_partial_flow_keys_are_not_a_flow_file(self):
        result = validate_grammar({"origin": "hi", "nodes": "a", "edges": "b"})
        assert result.valid

    def test_requires_origin(self):
        result = validate_grammar({"animal": ["cat", "dog"]})
        assert not result.valid
        assert "origin" in result.errors[0]


class TestRuleValues:
    def test_accepts_string_arrays(self):
        result = validate_grammar({"origin": "#animal#", "animal": ["cat", "dog", "fish"]})
        assert result.valid
        assert result.errors == []

    def test_accepts_single_strings(self):
        assert validate_grammar({"origin": "#greeting#", "greeting": "hello"}).valid

    def test_accepts_empty_list(self):
        assert validate_grammar({"origin": []}).valid

    def test_rejects_non_string_values(self):
        result = validate_grammar({"origin": "#a#", "a": 42})
        assert not result.valid
        assert result.errors == ['Rule "a" must be a string or array of strings']

    def test_reports_every_offending_rule(self):
        result = validate_grammar(
            {"origin": "x", "a": 1, "b": ["ok", 2], "c": {"nested": "x"}, "d": None}
        )
        assert not result.valid
        assert len(result.errors) == 4
        for key in ("a", "b", "c", "d"):
            assert any(f'"{key}"' in error for error in result.errors)


class TestReferences:
    def test_detects_undefined_rule(self):
        result = validate_grammar({"origin": "#animal# and #color#", "animal": ["cat"]})
        assert not result.valid
        assert "color" in result.errors[0]
        assert "origin" in result.errors[0]

    def test_undefined_reference_inside_action_is_an_error(self):
        result = validate_grammar({"origin": "[hero:#missing#]hi"})
        assert not result.valid
        assert "missing" in result.errors[0]

    def test_action_syntax_warns(self):
        result = validate_grammar(
            {"origin": "#name#", "name": ["[hero:#animal#]Alice", "Bob"], "animal": ["cat"]}
        )
        assert result.valid
        assert result.warnings
        assert "action" in result.warnings[0]
        assert '"name"' in result.warnings[0]

    def test_brackets_without_reference_do_not_warn(self):
        result = validate_grammar({"origin": "[just brackets]"})
        assert result.valid
        assert result.warnings == []

    def test_unsupported_modifier_warns(self):
        result = validate_grammar({"origin": "#animal.toUpperCase#", "animal": ["cat"]})
        assert result.valid
        assert "toUpperCase" in result.warnings[0]

    @pytest.mark.parametrize("modifier", ["capitalize", "s", "a", "ed"])
    def test_supported_modifiers_do_not_warn(self, modifier):
        result = validate_grammar({"origin": f"#animal.{modifier}#", "animal": ["cat"]})
        assert result.valid
        assert result.warnings == []

    def test_warnings_survive_reference_errors(self):
        result = validate_grammar({"origin": "#a.shout# #b#", "a": "x"})
        assert not result.valid
        assert any("shout" in w for w in result.warnings)


class TestCycles:
    def test_detects_indirect_cycle(self):
        result = validate_grammar({"origin": "#a#", "a": "#b#", "b": "#a#"})
        assert not result.valid
        assert "cycle" in result.errors[0].lower()

    def test_detects_self_reference(self):
        result = validate_grammar({"origin": "#origin#"})
        assert not result.valid
        assert "cycle" in result.errors[0].lower()

    def test_detects_cycle_unreachable_from_origin(self):
        result = validate_grammar({"origin": "plain", "x": "#y#", "y": "#z#", "z": "#x#"})
        assert not result.valid
        assert "cycle" in result.errors[0].lower()

    def test_diamond_is_not_a_cycle(self):
        result = validate_grammar(
            {"origin": "#left# #right#", "left": "#base#", "right": "#base#", "base": "b"}
        )
        assert result.valid

    def test_find_cycle_names_a_rule_on_the_cycle(self):
        deps = {"origin": {"a"}, "a": {"b"}, "b": {"c"}, "c": {"a"}}
        assert find_cycle(deps) in {"a", "b", "c"}

    def test_find_cycle_handles_long_chains(self):
        deps = {f"r{i}": {f"r{i + 1}"} for i in range(5000)}
        deps["r5000"] = set()
        assert find_cycle(deps) is None


class TestHelpers:
    def test_normalize_wraps_strings(self):
        assert normalize_grammar({"a": "x", "b": ["y", "z"]}) == {"a": ["x"], "b": ["y", "z"]}

    def test_dependency_graph(self):
        rules = normalize_grammar({"origin": ["#a# #b.s#", "#a#"], "a": "x", "b": "y"})
        assert build_dependency_graph(rules) == {"origin": {"a", "b"}, "a": set(), "b": set()}

    def test_result_with_errors_cannot_be_valid(self):
        with pytest.raises(ValidationError):
            ir.ValidationResult(valid=True, errors=["boom"])
