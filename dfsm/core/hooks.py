# dfsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Observer hooks for machine lifecycle events. Users can attach logging,
monitoring, or custom side effects without altering core logic.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from dfsm.core.errors import HookError
from dfsm.core.types import ActionId, StateId

logger = logging.getLogger(__name__)


@runtime_checkable
class HookProtocol(Protocol):
    """
    Hook protocol for type checking.

    Methods:
        on_transition(source, action, target): Called after a transition is committed.
        on_reset(state): Called after the machine returns to its default state.

    Hooks observe; they cannot veto or alter a transition. Exceptions raised by
    a hook are logged and do not reach the caller of the machine.
    """

    def on_transition(self, source: StateId, action: ActionId, target: StateId) -> None:
        ...

    def on_reset(self, state: StateId) -> None:
        ...


class BaseHook:
    """No-op hook; subclass and override only what you need."""

    def on_transition(self, source: StateId, action: ActionId, target: StateId) -> None:
        pass

    def on_reset(self, state: StateId) -> None:
        pass


class HookManager:
    """
    Manages the registration and execution of hooks.
    """

    def __init__(self, hooks: Optional[Iterable[HookProtocol]] = None) -> None:
        self._hooks: List[HookProtocol] = []
        for hook in hooks or ():
            self.register_hook(hook)

    @property
    def hooks(self) -> Tuple[HookProtocol, ...]:
        return tuple(self._hooks)

    def register_hook(self, hook: HookProtocol) -> None:
        """
        Add a new hook.

        :param hook: An object implementing HookProtocol methods.
        :raises HookError: If hook does not implement HookProtocol.
        """
        if not isinstance(hook, HookProtocol):
            raise HookError(
                f"Hook must implement on_transition and on_reset, got {type(hook).__name__}",
                details={"hook": repr(hook)},
            )
        self._hooks.append(hook)

    def unregister_hook(self, hook: HookProtocol) -> None:
        """
        Remove a previously registered hook.

        :raises HookError: If the hook was never registered.
        """
        try:
            self._hooks.remove(hook)
        except ValueError:
            raise HookError("Hook is not registered", details={"hook": repr(hook)}) from None

    def execute_on_transition(self, source: StateId, action: ActionId, target: StateId) -> None:
        for hook in self._hooks:
            try:
                hook.on_transition(source, action, target)
            except Exception as e:
                logger.exception("Hook %r on_transition failed: %s", hook, e)

    def execute_on_reset(self, state: StateId) -> None:
        for hook in self._hooks:
            try:
                hook.on_reset(state)
            except Exception as e:
                logger.exception("Hook %r on_reset failed: %s", hook, e)

    def __len__(self) -> int:
        return len(self._hooks)
