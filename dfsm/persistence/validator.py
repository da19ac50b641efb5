# dfsm/persistence/validator.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Shape validation for raw transition tables.

A decoded table must be a mapping of state name to a mapping of action name to
target state name, all strings. Semantic checks (conflicting targets, default
state membership) belong to the registry builder.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List

from dfsm.core.errors import ValidationError


def validate_table(raw: Any) -> List[str]:
    """
    Collect every shape problem in a raw transition table.

    :param raw: The decoded table.
    :return: A list of human-readable problems, empty if the table is well formed.
    """
    if not isinstance(raw, Mapping):
        return [f"Transition table must be a mapping, got {type(raw).__name__}"]

    problems: List[str] = []
    for state, transitions in raw.items():
        if not isinstance(state, str):
            problems.append(f"State name {state!r} must be a string")
            continue
        if not isinstance(transitions, Mapping):
            problems.append(f"Transitions of state {state!r} must be a mapping, got {type(transitions).__name__}")
            continue
        for action, target in transitions.items():
            if not isinstance(action, str):
                problems.append(f"Action name {action!r} in state {state!r} must be a string")
            if not isinstance(target, str):
                problems.append(f"Target of {state!r} on {action!r} must be a state name, got {target!r}")
    return problems


def ensure_valid_table(raw: Any) -> None:
    """
    Raise if the raw table is malformed.

    :raises ValidationError: Listing every problem found.
    """
    problems = validate_table(raw)
    if problems:
        raise ValidationError("Invalid transition table: " + "; ".join(problems), {"problems": problems})
