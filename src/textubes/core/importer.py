"""
Raw text to compiled graph.

    text -> preprocess -> json.loads -> validate -> (confirm warnings) -> compile

This is the one place that enforces running validation before compilation.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from textubes.core import ir
from textubes.core.compiler import compile_grammar
from textubes.core.errors import GrammarValidationError, make_parse_error
from textubes.core.layout import LayoutConfig
from textubes.core.preprocess import preprocess_grammar_text
from textubes.core.validator import validate_grammar

logger = logging.getLogger(__name__)

# Receives the warnings; returns True to compile anyway.
ConfirmWarnings = Callable[[list[str]], bool]


def parse_grammar_text(text: str, source: Path | None = None) -> Any:
    """
    Parse grammar text (strict JSON or a pasted literal) into a JSON value.

    Raises:
        GrammarParseError: If the text cannot be parsed even after preprocessing
    """
    prepared = preprocess_grammar_text(text)
    try:
        return json.loads(prepared)
    except json.JSONDecodeError as e:
        raise make_parse_error(
            f"Could not parse input as JSON or Tracery grammar: {e.msg}",
            file=source or Path("<input>"),
            text=prepared,
            line=e.lineno,
            column=e.colno,
        ) from e


def import_grammar(
    text: str,
    is_dark_mode: bool = False,
    confirm: ConfirmWarnings | None = None,
    layout: LayoutConfig | None = None,
    source: Path | None = None,
) -> ir.CompiledGraph | None:
    """
    Parse, validate and compile grammar text.

    Args:
        text: Raw grammar text
        is_dark_mode: Display theme flag for the emitted nodes
        confirm: Called with the warnings when there are any; returning
            False cancels the import. Without it, warnings are accepted.
        layout: Node spacing
        source: File the text came from, used in error messages

    Returns:
        The compiled graph, or None if the caller declined the warnings

    Raises:
        GrammarParseError: If the text is not JSON-like
        GrammarValidationError: If the grammar has fatal errors
    """
    grammar = parse_grammar_text(text, source)

    result = validate_grammar(grammar)
    if not result.valid:
        raise GrammarValidationError(result.errors, result.warnings)

    for warning in result.warnings:
        logger.warning(warning)

    if result.warnings and confirm is not None and not confirm(result.warnings):
        logger.info("Grammar import cancelled after %d warning(s)", len(result.warnings))
        return None

    return compile_grammar(grammar, is_dark_mode=is_dark_mode, layout=layout)
