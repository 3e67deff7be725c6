"""
Textubes reference runtime.

Evaluates compiled grammar graphs using the same per-node rules as the
editor: sources emit their text, random selections pick a line, templates
fill ``__NAME__`` slots, and modifier nodes transform their input.
"""

from textubes.runtime.engine import GraphEvaluator, generate, topological_order
from textubes.runtime.modifiers import (
    MODIFIER_FUNCTIONS,
    add_article,
    capitalize,
    past_tense,
    pluralize,
)
from textubes.runtime.template import (
    derive_template_slots,
    fill_template,
    reconcile_slot_bindings,
)

__all__ = [
    "GraphEvaluator",
    "generate",
    "topological_order",
    "MODIFIER_FUNCTIONS",
    "add_article",
    "capitalize",
    "past_tense",
    "pluralize",
    "derive_template_slots",
    "fill_template",
    "reconcile_slot_bindings",
]
