"""
Error types for Textubes grammar import, compilation, and evaluation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


class TextubesError(Exception):
    """Base exception for all Textubes errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class GrammarParseError(TextubesError):
    """
    Raised when grammar text cannot be turned into a JSON value.

    Examples:
    - Text that is neither JSON nor a recognisable grammar literal
    - Unterminated strings left over after preprocessing
    """

    pass


class GrammarValidationError(TextubesError):
    """
    Raised when a grammar fails validation and cannot be compiled.

    Examples:
    - Missing 'origin' rule
    - Rule values that are not strings or lists of strings
    - References to undefined rules
    - Recursive (cyclic) rules
    """

    def __init__(
        self,
        errors: list[str],
        warnings: list[str] | None = None,
        context: Optional["ErrorContext"] = None,
    ):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        message = "Grammar is invalid:\n" + "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(message, context)


class ConfigError(TextubesError):
    """
    Raised when textubes.toml cannot be loaded.

    Examples:
    - Invalid TOML syntax
    - Spacing values that are not positive numbers
    """

    pass


class EvaluationError(TextubesError):
    """
    Raised when the reference runtime cannot evaluate a graph.

    Examples:
    - Node type outside the compiler's vocabulary
    - Cyclic edges
    - Edges pointing at missing nodes
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file (or a pseudo path such as ``<stdin>``)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional text around the error location
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None
    snippet_start: int = field(default=0, repr=False)

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "grammar.json:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        start_line = self.snippet_start or max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def make_parse_error(
    message: str,
    file: Path,
    text: str,
    line: int,
    column: int,
) -> GrammarParseError:
    """
    Helper to create a GrammarParseError with a snippet of the offending text.

    Args:
        message: Error description
        file: Source file path
        text: The full text that failed to parse
        line: Line number (1-indexed)
        column: Column number (1-indexed)

    Returns:
        GrammarParseError with context attached
    """
    lines = text.split("\n")
    start = max(1, line - 2)
    end = min(len(lines), line + 2)
    snippet = "\n".join(lines[start - 1 : end]) if lines else None
    context = ErrorContext(
        file=file, line=line, column=column, snippet=snippet, snippet_start=start
    )
    return GrammarParseError(message, context)
