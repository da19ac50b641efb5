# dfsm/tests/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Test suite for the error classes."""
import dataclasses
import time

import pytest

from dfsm.core.errors import (
    ConfigConflictError,
    ConfigurationError,
    DFSMError,
    ErrorContext,
    HookError,
    InvalidDefaultStateError,
    InvalidStateError,
    InvalidTransitionError,
    UnknownStateError,
    ValidationError,
    create_error_context,
)


def test_dfsm_error_base():
    error = DFSMError("Test error message", {"key": "value"})

    assert str(error) == "Test error message"
    assert error.message == "Test error message"
    assert error.details == {"key": "value"}


def test_error_with_empty_details():
    assert DFSMError("Test message").details == {}


def test_config_conflict_error_carries_both_targets():
    error = ConfigConflictError("A", "X", "B", "D")

    assert isinstance(error, ConfigurationError)
    assert (error.state, error.action, error.existing_target, error.attempted_target) == ("A", "X", "B", "D")
    assert error.component == "TransitionRegistry"
    assert error.validation_errors == {"conflict": ("A", "X", "B", "D")}
    assert str(error) == "The X in A is already mapped to B, now cannot be changed to D"


def test_invalid_default_state_error():
    error = InvalidDefaultStateError("MISSING", {"NEW", "STARTED"})

    assert isinstance(error, ConfigurationError)
    assert error.default_state == "MISSING"
    assert error.known_states == ["NEW", "STARTED"]
    assert error.details == {"known_states": ["NEW", "STARTED"]}
    assert "MISSING" in str(error)


def test_invalid_transition_error():
    error = InvalidTransitionError("Invalid transition", "NEW", "COMPLETE", {"reason": "unmapped"})

    assert error.source_state == "NEW"
    assert error.action == "COMPLETE"
    assert error.details == {"reason": "unmapped"}


def test_unknown_state_error():
    error = UnknownStateError("GHOST")

    assert isinstance(error, InvalidStateError)
    assert error.state_id == "GHOST"
    assert error.operation == "what_next"
    assert "GHOST" in str(error)


def test_validation_error_problems():
    error = ValidationError("bad table", {"problems": ["one", "two"]})
    assert error.problems == ["one", "two"]
    assert ValidationError("no problems listed").problems == []


@pytest.mark.parametrize(
    "error_class",
    [ConfigurationError, ValidationError, InvalidTransitionError, InvalidStateError, HookError],
)
def test_errors_share_base(error_class):
    assert issubclass(error_class, DFSMError)


def test_error_context_creation():
    error = InvalidTransitionError("nope", "NEW", "COMPLETE", {"attempt": 1})
    context = create_error_context(error, "Traceback (most recent call last):\n...")

    assert isinstance(context, ErrorContext)
    assert context.error_type is InvalidTransitionError
    assert context.message == "nope"
    assert context.details == {"attempt": 1}
    assert isinstance(context.timestamp, float)


def test_error_context_immutability():
    context = create_error_context(DFSMError("Test error"), "traceback")

    with pytest.raises(dataclasses.FrozenInstanceError):
        context.timestamp = time.time()


def test_error_chaining():
    try:
        try:
            raise UnknownStateError("A")
        except UnknownStateError as inner:
            raise ConfigurationError("Outer error", "component", details={"inner_error": str(inner)}) from inner
    except ConfigurationError as outer:
        assert "inner_error" in outer.details
        assert isinstance(outer.__cause__, UnknownStateError)
