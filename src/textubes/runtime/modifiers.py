"""
Text transformations behind the modifier node types.

Simple English heuristics, matching what Tracery's base English modifiers
do for ordinary words. Empty input always gives empty output.
"""

from collections.abc import Callable

from textubes.core.ir import NodeType

VOWELS = frozenset("aeiouAEIOU")
SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def _ends_consonant_y(word: str) -> bool:
    return len(word) >= 2 and word[-1].lower() == "y" and word[-2] not in VOWELS


def capitalize(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def pluralize(word: str) -> str:
    """
    Pluralize a word.

    Examples:
        >>> [pluralize(w) for w in ("cat", "fox", "church", "city", "day")]
        ['cats', 'foxes', 'churches', 'cities', 'days']
    """
    if not word:
        return word
    if word.lower().endswith(SIBILANT_ENDINGS):
        return word + "es"
    if _ends_consonant_y(word):
        return word[:-1] + "ies"
    return word + "s"


def add_article(word: str) -> str:
    """Prepend "a" or "an" by whether the word starts with a vowel."""
    if not word:
        return word
    article = "an" if word[0] in VOWELS else "a"
    return f"{article} {word}"


def past_tense(word: str) -> str:
    """
    Simple past tense.

    Examples:
        >>> [past_tense(w) for w in ("bake", "carry", "play", "walk")]
        ['baked', 'carried', 'played', 'walked']
    """
    if not word:
        return word
    if word.lower().endswith("e"):
        return word + "d"
    if _ends_consonant_y(word):
        return word[:-1] + "ied"
    return word + "ed"


MODIFIER_FUNCTIONS: dict[NodeType, Callable[[str], str]] = {
    NodeType.CAPITALIZE: capitalize,
    NodeType.PLURALIZE: pluralize,
    NodeType.ARTICLE: add_article,
    NodeType.PAST_TENSE: past_tense,
}
