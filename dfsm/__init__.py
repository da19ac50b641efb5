"""dfsm: deterministic finite state machine

Tracks one current state per machine over a fixed, validated transition table
and applies actions to move between states, rejecting actions the current
state does not accept.

Responsibilities:
    - Building and validating transition registries
    - Driving machines through transitions, lookahead and reset
    - Loading and saving transition tables as JSON

Cross-cutting Concerns:
    Thread Safety:
        - Registries are immutable and may be shared freely
        - Machines are single-caller; SynchronizedMachine serializes access

    Error Handling:
        - Structured error hierarchy rooted at DFSMError
        - Construction failures never yield a registry or machine

    Logging:
        - Module loggers under the ``dfsm`` namespace, DEBUG level only
"""

from dfsm.core import (
    ActionId,
    BaseHook,
    ConfigConflictError,
    ConfigurationError,
    DFSMError,
    HookError,
    HookManager,
    HookProtocol,
    InvalidDefaultStateError,
    InvalidStateError,
    InvalidTransitionError,
    Machine,
    MachineConfig,
    RegistryBuilder,
    StateId,
    TransitionEdge,
    TransitionRegistry,
    UnknownStateError,
    ValidationError,
    merge_tables,
)
from dfsm.runtime.synchronized import SynchronizedMachine

__version__ = "0.1.0"

__all__ = [
    "ActionId",
    "BaseHook",
    "ConfigConflictError",
    "ConfigurationError",
    "DFSMError",
    "HookError",
    "HookManager",
    "HookProtocol",
    "InvalidDefaultStateError",
    "InvalidStateError",
    "InvalidTransitionError",
    "Machine",
    "MachineConfig",
    "RegistryBuilder",
    "StateId",
    "SynchronizedMachine",
    "TransitionEdge",
    "TransitionRegistry",
    "UnknownStateError",
    "ValidationError",
    "merge_tables",
]
