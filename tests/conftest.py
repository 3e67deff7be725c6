"""Shared pytest fixtures for Textubes tests."""

from pathlib import Path

import pytest

from textubes.core import ir
from textubes.core.compiler import compile_grammar


@pytest.fixture
def greeting_grammar() -> dict:
    """Origin referencing a simple rule."""
    return {"origin": "Hello, #name#!", "name": ["Alice", "Bob"]}


@pytest.fixture
def devops_grammar() -> dict:
    """Multi-level grammar with seven rules, four of which reference others."""
    return {
        "origin": "#suggestion#",
        "suggestion": ["#refactor#", "#database#"],
        "refactor": "Have you tried #rewriting# it in #language#?",
        "rewriting": ["refactoring", "rewriting"],
        "language": ["haskell", "rust"],
        "database": "Let's migrate to #datastore#",
        "datastore": ["postgres", "mongo"],
    }


@pytest.fixture
def greeting_graph(greeting_grammar: dict) -> ir.CompiledGraph:
    return compile_grammar(greeting_grammar)


@pytest.fixture
def grammar_file(tmp_path: Path):
    """Factory writing grammar text to a temporary file."""

    def _write(text: str, name: str = "grammar.json") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
