"""
Best-effort conversion of near-JSON grammar text into strict JSON.

Grammars are often pasted straight out of Python or JavaScript source:

    rules = {
        'origin': 'it\\'s a #thing#',
        'thing': ['cat', 'dog',],
    }

``preprocess_grammar_text`` removes the assignment prefix, turns
single-quoted literals into double-quoted ones and drops trailing commas.
It is a heuristic, not a parser: anything it cannot repair is left for
``json.loads`` to reject.
"""

import re

# `rules = `, `const rules = `, `var grammar=` ...
# Leading whitespace is kept; line numbers must match the input.
ASSIGNMENT_PREFIX_PATTERN = re.compile(
    r"^(\s*)(?:(?:const|let|var)[ \t]+)?[A-Za-z_$][\w$]*[ \t]*=(?!=)[ \t]*"
)


def strip_assignment(text: str) -> str:
    """Remove a leading ``name = `` and a trailing semicolon."""
    text = ASSIGNMENT_PREFIX_PATTERN.sub(r"\1", text, count=1)
    stripped = text.rstrip()
    if stripped.endswith(";"):
        return stripped[:-1]
    return text


def _read_double_quoted(text: str, start: int, out: list[str]) -> int:
    """Copy a double-quoted literal starting at ``start``; return the index after it."""
    out.append('"')
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            escaped = text[i + 1]
            # \' is not a JSON escape
            out.append("'" if escaped == "'" else char + escaped)
            i += 2
            continue
        out.append(char)
        i += 1
        if char == '"':
            return i
    return i


def _read_single_quoted(text: str, start: int, out: list[str]) -> int:
    """Re-emit a single-quoted literal as a double-quoted one; return the index after it."""
    out.append('"')
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            escaped = text[i + 1]
            if escaped == "'":
                out.append("'")
            else:
                out.append(char + escaped)
            i += 2
            continue
        i += 1
        if char == "'":
            out.append('"')
            return i
        out.append('\\"' if char == '"' else char)
    return i


def _is_trailing_comma(text: str, index: int) -> bool:
    """True if the comma at ``index`` is followed only by whitespace and a closer."""
    i = index + 1
    while i < len(text) and text[i].isspace():
        i += 1
    return i < len(text) and text[i] in "}]"


def preprocess_grammar_text(text: str) -> str:
    """
    Normalise grammar text so it parses as strict JSON.

    Strict JSON passes through unchanged in meaning.

    Args:
        text: Raw file or pasted contents

    Returns:
        Text suitable for ``json.loads`` (unless irrecoverably malformed)
    """
    text = strip_assignment(text)
    out: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == '"':
            i = _read_double_quoted(text, i, out)
        elif char == "'":
            i = _read_single_quoted(text, i, out)
        elif char == "," and _is_trailing_comma(text, i):
            i += 1
        else:
            out.append(char)
            i += 1
    return "".join(out)
