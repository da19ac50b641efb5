"""
Core package: identifiers, errors, the transition registry and the machine.
"""

# Import order matters to avoid circular dependencies
from .errors import (
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
from .types import ActionId, StateId, TransitionEdge, TransitionTable
from .registry import RegistryBuilder, TransitionRegistry, merge_tables
from .hooks import BaseHook, HookManager, HookProtocol
from .config import MachineConfig
from .machine import Machine

__all__ = [
    # Errors
    "ConfigConflictError",
    "ConfigurationError",
    "DFSMError",
    "ErrorContext",
    "HookError",
    "InvalidDefaultStateError",
    "InvalidStateError",
    "InvalidTransitionError",
    "UnknownStateError",
    "ValidationError",
    "create_error_context",
    # Identifiers
    "ActionId",
    "StateId",
    "TransitionEdge",
    "TransitionTable",
    # Registry and machine
    "RegistryBuilder",
    "TransitionRegistry",
    "merge_tables",
    "BaseHook",
    "HookManager",
    "HookProtocol",
    "MachineConfig",
    "Machine",
]
