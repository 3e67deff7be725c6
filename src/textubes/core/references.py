"""
Tracery reference parsing.

A reference is ``#key#`` or ``#key.mod1.mod2#``. Matching is non-greedy
between ``#`` pairs, so references never nest. An empty pair (``##``) is not
a reference.
"""

import re

from textubes.core.ir import SUPPORTED_MODIFIERS, TraceryReference

REFERENCE_PATTERN = re.compile(r"#([^#]+)#")

__all__ = [
    "REFERENCE_PATTERN",
    "SUPPORTED_MODIFIERS",
    "parse_references",
    "reference_from_match",
]


def reference_from_match(match: re.Match[str]) -> TraceryReference:
    """Build a reference from a REFERENCE_PATTERN match."""
    key, *modifiers = match.group(1).split(".")
    return TraceryReference(key=key, modifiers=modifiers, raw=match.group(0))


def parse_references(text: str) -> list[TraceryReference]:
    """
    Extract all references from ``text`` in left-to-right order.

    Example:
        >>> [r.key for r in parse_references("Hello #name#, meet #animal.a#")]
        ['name', 'animal']
    """
    return [reference_from_match(m) for m in REFERENCE_PATTERN.finditer(text)]
