"""Core Textubes functionality: IR, reference parsing, validation, compilation, layout, import."""

from . import ir
from .compiler import compile_grammar
from .errors import (
    ConfigError,
    ErrorContext,
    EvaluationError,
    GrammarParseError,
    GrammarValidationError,
    TextubesError,
)
from .flow import dump_flow, read_flow, to_flow_document, write_flow
from .importer import import_grammar, parse_grammar_text
from .layout import LayoutConfig, apply_layout, compute_depths
from .manifest import TextubesConfig, load_config
from .preprocess import preprocess_grammar_text
from .references import parse_references
from .rewriter import strip_actions, to_template_syntax
from .validator import validate_grammar

__all__ = [
    "ir",
    "TextubesError",
    "GrammarParseError",
    "GrammarValidationError",
    "ConfigError",
    "EvaluationError",
    "ErrorContext",
    "compile_grammar",
    "import_grammar",
    "parse_grammar_text",
    "validate_grammar",
    "parse_references",
    "strip_actions",
    "to_template_syntax",
    "preprocess_grammar_text",
    "LayoutConfig",
    "apply_layout",
    "compute_depths",
    "TextubesConfig",
    "load_config",
    "to_flow_document",
    "dump_flow",
    "read_flow",
    "write_flow",
]
