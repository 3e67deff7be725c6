"""
Placeholder handling for template nodes.

A template node's side inputs are not fixed: they are whatever
``__NAME__`` tokens its template text currently contains. Slots are
derived from the text, then reconciled against the existing bindings.
"""

import re
from collections.abc import Iterable, Mapping

# Lazy so that underscores inside a name (__FIRST_NAME__) still match.
TOKEN_PATTERN = re.compile(r"__(\w+?)__")


def derive_template_slots(text: str, initial_tokens: Iterable[str] | None = None) -> list[str]:
    """
    Distinct slot names in ``text``, in order of first appearance.

    Falls back to ``initial_tokens`` when the text has no placeholders yet
    (e.g. before the upstream source value has arrived).
    """
    slots = list(dict.fromkeys(m.group(1) for m in TOKEN_PATTERN.finditer(text)))
    if not slots and initial_tokens:
        slots = list(dict.fromkeys(initial_tokens))
    return slots


def reconcile_slot_bindings(
    slots: Iterable[str],
    bindings: Mapping[str, str],
) -> dict[str, str | None]:
    """
    Map every required slot to its bound source id, or None if unbound.

    Bindings for slots that are no longer required are dropped.
    """
    return {slot: bindings.get(slot) for slot in slots}


def fill_template(text: str, values: Mapping[str, str]) -> str:
    """Replace each ``__NAME__`` with ``values[NAME]``; leave unknown names as-is."""
    return TOKEN_PATTERN.sub(lambda m: values.get(m.group(1), m.group(0)), text)
