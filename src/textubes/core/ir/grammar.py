"""
Grammar-side IR types for Textubes.

This module contains the types produced while analysing a Tracery grammar:
parsed references, the supported modifier vocabulary and validation results.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Raw grammar as read from JSON, and the list-only form used after validation.
Grammar = dict[str, str | list[str]]
NormalizedGrammar = dict[str, list[str]]

ORIGIN_RULE = "origin"


class Modifier(str, Enum):
    """
    Tracery modifiers that have a graph counterpart.

    Any other modifier name is reported as a warning by the validator and
    dropped by the compiler.
    """

    CAPITALIZE = "capitalize"
    PLURAL = "s"
    ARTICLE = "a"
    PAST_TENSE = "ed"


SUPPORTED_MODIFIERS: frozenset[str] = frozenset(m.value for m in Modifier)


class TraceryReference(BaseModel):
    """
    A ``#key#`` or ``#key.mod1.mod2#`` occurrence inside rule text.

    Attributes:
        key: Name of the referenced rule
        modifiers: Modifier names in the order they were written
        raw: Exact matched text, delimiters included
    """

    key: str
    modifiers: list[str] = Field(default_factory=list)
    raw: str

    model_config = ConfigDict(frozen=True)

    @property
    def supported_modifiers(self) -> list[str]:
        """Modifiers that have a node type, in original order."""
        return [m for m in self.modifiers if m in SUPPORTED_MODIFIERS]

    @property
    def placeholder_name(self) -> str:
        """Slot name, e.g. ``ANIMAL_CAPITALIZE`` for ``#animal.capitalize#``."""
        return "_".join([self.key, *self.supported_modifiers]).upper()

    @property
    def placeholder(self) -> str:
        """Template token, e.g. ``__ANIMAL_CAPITALIZE__``."""
        return f"__{self.placeholder_name}__"


class ValidationResult(BaseModel):
    """
    Outcome of validating a grammar.

    Errors are fatal and block compilation. Warnings describe constructs
    that will be stripped or ignored; they never affect ``valid``.
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _errors_imply_invalid(self) -> ValidationResult:
        if self.valid and self.errors:
            raise ValueError("a result with errors cannot be valid")
        return self
