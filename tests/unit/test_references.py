"""Tests for Tracery reference parsing."""

import pytest

from textubes.core import ir
from textubes.core.references import parse_references


class TestParseReferences:
    def test_extracts_simple_references(self):
        refs = parse_references("Hello #name#, meet #animal#")
        assert refs == [
            ir.TraceryReference(key="name", modifiers=[], raw="#name#"),
            ir.TraceryReference(key="animal", modifiers=[], raw="#animal#"),
        ]

    def test_extracts_modifiers(self):
        refs = parse_references("#animal.capitalize#")
        assert refs == [
            ir.TraceryReference(key="animal", modifiers=["capitalize"], raw="#animal.capitalize#")
        ]

    def test_extracts_chained_modifiers(self):
        (ref,) = parse_references("#animal.capitalize.s#")
        assert ref.key == "animal"
        assert ref.modifiers == ["capitalize", "s"]
        assert ref.raw == "#animal.capitalize.s#"

    def test_returns_empty_for_plain_text(self):
        assert parse_references("plain text") == []

    def test_empty_pair_is_not_a_reference(self):
        assert parse_references("## #a#") == [
            ir.TraceryReference(key="a", modifiers=[], raw="#a#")
        ]

    def test_unterminated_delimiter_is_ignored(self):
        assert [r.key for r in parse_references("#a# and #b")] == ["a"]

    @pytest.mark.parametrize(
        "parts",
        [
            [("lit", "The "), ("ref", "animal", ["a"]), ("lit", " ate "), ("ref", "food", [])],
            [("ref", "x", ["capitalize", "s", "ed"]), ("ref", "y", [])],
            [("lit", "no refs at all")],
            [("ref", "first_name", []), ("lit", "-"), ("ref", "first_name", ["capitalize"])],
        ],
    )
    def test_recovers_keys_and_modifiers_in_order(self, parts):
        text = ""
        expected = []
        for part in parts:
            if part[0] == "lit":
                text += part[1]
            else:
                _, key, modifiers = part
                text += "#" + ".".join([key, *modifiers]) + "#"
                expected.append((key, modifiers))

        assert [(r.key, r.modifiers) for r in parse_references(text)] == expected


class TestPlaceholders:
    def test_plain_reference(self):
        (ref,) = parse_references("#name#")
        assert ref.placeholder == "__NAME__"

    def test_supported_modifiers_are_appended(self):
        (ref,) = parse_references("#animal.capitalize.s#")
        assert ref.placeholder_name == "ANIMAL_CAPITALIZE_S"

    def test_unsupported_modifiers_are_dropped(self):
        (ref,) = parse_references("#animal.toUpperCase.a#")
        assert ref.supported_modifiers == ["a"]
        assert ref.placeholder == "__ANIMAL_A__"
