# dfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Error hierarchy for the deterministic state machine.

Construction-time errors (ConfigurationError and its subclasses) are fatal:
no registry or machine is produced. Runtime errors (InvalidTransitionError,
UnknownStateError) leave the machine untouched and are safe to recover from.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type


class DFSMError(Exception):
    """
    Base exception class for errors within the state machine library.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DFSMError):
    """
    Raised when a transition table or default state cannot form a valid registry.
    """

    def __init__(
        self,
        message: str,
        component: str,
        validation_errors: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.component = component
        self.validation_errors = validation_errors or {}


class ConfigConflictError(ConfigurationError):
    """
    Raised when the same (state, action) pair is declared with two different targets.
    """

    def __init__(self, state: str, action: str, existing_target: str, attempted_target: str) -> None:
        message = (
            f"The {action} in {state} is already mapped to {existing_target}, "
            f"now cannot be changed to {attempted_target}"
        )
        super().__init__(
            message,
            "TransitionRegistry",
            validation_errors={"conflict": (state, action, existing_target, attempted_target)},
        )
        self.state = state
        self.action = action
        self.existing_target = existing_target
        self.attempted_target = attempted_target


class InvalidDefaultStateError(ConfigurationError):
    """
    Raised when the default state does not name a state in the registry.
    """

    def __init__(self, default_state: Any, known_states: Iterable[str] = ()) -> None:
        known = sorted(known_states)
        super().__init__(
            f"Invalid default state specified: {default_state!r}",
            "TransitionRegistry",
            validation_errors={"default_state": default_state},
            details={"known_states": known},
        )
        self.default_state = default_state
        self.known_states = known


class ValidationError(DFSMError):
    """
    Raised when a raw transition table does not have the expected shape.
    """

    @property
    def problems(self) -> List[str]:
        return list(self.details.get("problems", []))


class InvalidTransitionError(DFSMError):
    """
    Raised when an action is not accepted by the machine's current state.
    """

    def __init__(
        self,
        message: str,
        source_state: str,
        action: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.source_state = source_state
        self.action = action


class InvalidStateError(DFSMError):
    """
    Raised when an operation refers to a state that cannot be used.
    """

    def __init__(
        self,
        message: str,
        state_id: Any,
        operation: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.state_id = state_id
        self.operation = operation


class UnknownStateError(InvalidStateError):
    """
    Raised when a state identifier is not a member of the registry.
    """

    def __init__(self, state_id: Any, operation: str = "what_next") -> None:
        super().__init__(
            f"The given state {state_id} is not available in the given state machine",
            state_id,
            operation,
        )


class HookError(DFSMError):
    """
    Raised when a hook cannot be registered or managed.
    """


@dataclass(frozen=True)
class ErrorContext:
    """Immutable record of an error, for callers that keep failure logs."""

    error_type: Type[DFSMError]
    message: str
    traceback: str
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


def create_error_context(error: DFSMError, traceback: str) -> ErrorContext:
    """
    Capture an error together with its traceback text.

    :param error: The error to record.
    :param traceback: Formatted traceback, e.g. from ``traceback.format_exc()``.
    """
    return ErrorContext(
        error_type=type(error),
        message=error.message,
        traceback=traceback,
        details=dict(error.details),
    )
