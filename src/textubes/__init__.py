"""
Textubes - Tracery grammars compiled into text-pipeline node graphs.

Validates a Tracery grammar, translates it into Source / Template /
RandomSelection / modifier nodes wired together, and lays the result out
for the Textubes editor.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.compiler import compile_grammar
from .core.errors import (
    ConfigError,
    EvaluationError,
    GrammarParseError,
    GrammarValidationError,
    TextubesError,
)
from .core.importer import import_grammar
from .core.preprocess import preprocess_grammar_text
from .core.validator import validate_grammar

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "compile_grammar",
    "import_grammar",
    "preprocess_grammar_text",
    "validate_grammar",
    "TextubesError",
    "GrammarParseError",
    "GrammarValidationError",
    "ConfigError",
    "EvaluationError",
]
