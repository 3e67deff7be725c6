"""
Validation of Tracery grammars before compilation.

Checks run in order and stop at the first failing stage:

1. Input shape (a JSON object, not a saved flow file)
2. Presence of the ``origin`` rule
3. Rule value types (all offending rules reported together)
4. References (undefined rules are errors; actions and unknown modifiers
   are warnings)
5. Cycles, checked from every rule
"""

import re
from collections.abc import Mapping
from typing import Any

from textubes.core import ir
from textubes.core.references import parse_references

# A [...] span that contains a reference, e.g. [hero:#animal#]
ACTION_WITH_REFERENCE_PATTERN = re.compile(r"\[[^\]]*#[^#]+#[^\]]*\]")

FLOW_FILE_KEYS = frozenset({"version", "nodes", "edges"})

_UNVISITED, _IN_PROGRESS, _SETTLED = 0, 1, 2


def looks_like_flow_file(value: Mapping[str, Any]) -> bool:
    """True when ``value`` has the key triple of a saved editor flow."""
    return FLOW_FILE_KEYS <= value.keys()


def normalize_grammar(grammar: ir.Grammar) -> ir.NormalizedGrammar:
    """Wrap single-string rule values in a one-element list."""
    return {
        key: [value] if isinstance(value, str) else list(value)
        for key, value in grammar.items()
    }


def build_dependency_graph(rules: ir.NormalizedGrammar) -> dict[str, set[str]]:
    """Map each rule to the set of rule names its options reference."""
    return {
        key: {ref.key for option in options for ref in parse_references(option)}
        for key, options in rules.items()
    }


def find_cycle(dependencies: Mapping[str, set[str]]) -> str | None:
    """
    Return a rule that lies on a reference cycle, or None if acyclic.

    Depth-first search from every rule in turn, so cycles unreachable from
    ``origin`` are still found. Iterative, with unvisited/in-progress/settled
    colouring; revisiting an in-progress rule means a cycle through it.
    """
    state = dict.fromkeys(dependencies, _UNVISITED)

    for root in dependencies:
        if state[root] != _UNVISITED:
            continue
        state[root] = _IN_PROGRESS
        stack = [(root, iter(sorted(dependencies[root])))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                dep_state = state.get(dep, _SETTLED)
                if dep_state == _IN_PROGRESS:
                    return dep
                if dep_state == _UNVISITED:
                    state[dep] = _IN_PROGRESS
                    stack.append((dep, iter(sorted(dependencies[dep]))))
                    break
            else:
                stack.pop()
                state[node] = _SETTLED

    return None


def _is_rule_value(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def validate_references(
    rules: ir.NormalizedGrammar,
) -> tuple[list[str], list[str]]:
    """
    Check every reference in every option.

    Returns:
        Tuple of (errors, warnings)
        - errors: references to rules that do not exist
        - warnings: action syntax, unsupported modifiers
    """
    errors: list[str] = []
    warnings: list[str] = []

    for key, options in rules.items():
        for option in options:
            if ACTION_WITH_REFERENCE_PATTERN.search(option):
                warnings.append(
                    f'Rule "{key}": actions (e.g. [var:#rule#]) are not supported '
                    f"and will be stripped"
                )
            for ref in parse_references(option):
                if ref.key not in rules:
                    errors.append(f'Rule "{key}" references undefined rule "{ref.key}"')
                for modifier in ref.modifiers:
                    if modifier not in ir.SUPPORTED_MODIFIERS:
                        warnings.append(
                            f'Rule "{key}": unsupported modifier ".{modifier}" will be ignored'
                        )

    return errors, warnings


def validate_grammar(value: Any) -> ir.ValidationResult:
    """
    Validate a parsed JSON value as a Tracery grammar.

    Never raises: every problem is reported in the returned result. Warnings
    are collected even when the result is invalid.

    Args:
        value: Anything produced by ``json.loads``

    Returns:
        ValidationResult with errors (fatal) and warnings (informational)
    """
    if not isinstance(value, dict):
        return ir.ValidationResult(valid=False, errors=["Input must be a JSON object"])

    if looks_like_flow_file(value):
        return ir.ValidationResult(
            valid=False,
            errors=["This looks like a Textubes flow file, not a Tracery grammar"],
        )

    if ir.ORIGIN_RULE not in value:
        return ir.ValidationResult(
            valid=False,
            errors=[f"Tracery grammar must have an '{ir.ORIGIN_RULE}' rule"],
        )

    type_errors = [
        f'Rule "{key}" must be a string or array of strings'
        for key, rule in value.items()
        if not _is_rule_value(rule)
    ]
    if type_errors:
        return ir.ValidationResult(valid=False, errors=type_errors)

    rules = normalize_grammar(value)

    errors, warnings = validate_references(rules)
    if errors:
        return ir.ValidationResult(valid=False, errors=errors, warnings=warnings)

    cyclic_rule = find_cycle(build_dependency_graph(rules))
    if cyclic_rule is not None:
        return ir.ValidationResult(
            valid=False,
            errors=[
                f'Cycle detected involving rule "{cyclic_rule}". '
                f"Recursive grammars are not supported"
            ],
            warnings=warnings,
        )

    return ir.ValidationResult(valid=True, warnings=warnings)
