# dfsm/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Identifier and value types shared across the state machine.

States and actions are plain strings compared by value, so they can be used
directly as mapping keys.
"""

from typing import Mapping, NamedTuple, NewType

StateId = NewType("StateId", str)
ActionId = NewType("ActionId", str)

# state name -> (action name -> target state name)
TransitionTable = Mapping[str, Mapping[str, str]]


class TransitionEdge(NamedTuple):
    """A recorded (source, action) -> target mapping."""

    source: StateId
    action: ActionId
    target: StateId

    def __str__(self) -> str:
        return f"{self.source} --{self.action}--> {self.target}"


def state_id(name: str) -> StateId:
    """
    Coerce a name into a state identifier.

    :raises TypeError: If name is not a string.
    """
    if not isinstance(name, str):
        raise TypeError(f"State name must be a string, got {type(name).__name__}")
    return StateId(name)


def action_id(name: str) -> ActionId:
    """
    Coerce a name into an action identifier.

    :raises TypeError: If name is not a string.
    """
    if not isinstance(name, str):
        raise TypeError(f"Action name must be a string, got {type(name).__name__}")
    return ActionId(name)
