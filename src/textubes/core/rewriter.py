"""
Rewriting of Tracery option text into template placeholder syntax.
"""

import re

from textubes.core.references import REFERENCE_PATTERN, reference_from_match

# Any bracketed span. Tracery actions such as [hero:#animal#] are removed whole.
ACTION_PATTERN = re.compile(r"\[[^\]]*\]")


def strip_actions(text: str) -> str:
    """Delete every ``[...]`` action span, brackets included."""
    return ACTION_PATTERN.sub("", text)


def to_template_syntax(text: str) -> str:
    """
    Convert one option string to template syntax.

    Actions are stripped, then each reference is replaced by its
    placeholder: ``#key#`` -> ``__KEY__``, ``#key.capitalize.s#`` ->
    ``__KEY_CAPITALIZE_S__``. Unsupported modifiers do not appear in the
    placeholder name, so ``#key.shout#`` and ``#key#`` share ``__KEY__``.
    """
    return REFERENCE_PATTERN.sub(
        lambda m: reference_from_match(m).placeholder, strip_actions(text)
    )
