# dfsm/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from dfsm.core.config import MachineConfig
from dfsm.core.errors import InvalidTransitionError, UnknownStateError
from dfsm.core.hooks import HookManager, HookProtocol
from dfsm.core.registry import TransitionRegistry
from dfsm.core.types import ActionId, StateId, TransitionTable

logger = logging.getLogger(__name__)


class Machine:
    """
    A deterministic finite state machine driven by a TransitionRegistry.

    The registry is shared and read-only; the only mutable field is the current
    state, which starts at the registry's default state. A Machine is not safe
    for concurrent mutation; wrap it in SynchronizedMachine when several threads
    drive the same instance.
    """

    def __init__(self, registry: TransitionRegistry, hooks: Optional[Iterable[HookProtocol]] = None) -> None:
        """
        :param registry: A validated transition registry.
        :param hooks: Optional hooks notified after each transition and reset.
        """
        if not isinstance(registry, TransitionRegistry):
            raise TypeError(f"Machine requires a TransitionRegistry, got {type(registry).__name__}")
        self._registry = registry
        self._hooks = HookManager(hooks)
        self._current_state: StateId = registry.default_state

    @classmethod
    def from_table(
        cls,
        table: TransitionTable,
        default_state: str,
        hooks: Optional[Iterable[HookProtocol]] = None,
    ) -> "Machine":
        """
        Build the registry for table and start a machine in default_state.

        :raises ValidationError: If the table is malformed.
        :raises InvalidDefaultStateError: If default_state is not in the table.
        """
        return cls(TransitionRegistry.from_table(table, default_state), hooks)

    @classmethod
    def from_config(cls, config: MachineConfig, hooks: Optional[Iterable[HookProtocol]] = None) -> "Machine":
        return cls.from_table(config.table, config.default_state, hooks)

    @property
    def registry(self) -> TransitionRegistry:
        return self._registry

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    @property
    def current_state(self) -> StateId:
        """Get the current state."""
        return self._current_state

    @property
    def default_state(self) -> StateId:
        return self._registry.default_state

    def reset(self) -> StateId:
        """
        Return the machine to its default state.

        :return: The default state.
        """
        self._current_state = self._registry.default_state
        logger.debug("Machine reset to %s", self._current_state)
        self._hooks.execute_on_reset(self._current_state)
        return self._current_state

    def transition(self, action: str) -> StateId:
        """
        Apply an action to the current state. This results in a state change.

        :param action: The action to apply.
        :return: The resulting state.
        :raises InvalidTransitionError: If the current state does not accept
            action. The current state is left unchanged.
        """
        source = self._current_state
        target = self._registry.lookup(source, action)
        if target is None:
            raise InvalidTransitionError(
                f"The action {action} is not available for the state {source}",
                source,
                action,
            )

        self._current_state = target
        logger.debug("Transition %s --%s--> %s", source, action, target)
        self._hooks.execute_on_transition(source, ActionId(action), target)
        return target

    def what_next(self, state: str, action: str) -> Optional[StateId]:
        """
        Report where action would lead from state, without changing the machine.

        :return: The resulting state, or None if state does not accept action.
        :raises UnknownStateError: If state is not part of this machine.
        """
        if state not in self._registry:
            raise UnknownStateError(state, "what_next")
        return self._registry.lookup(state, action)

    def can_transition(self, action: str) -> bool:
        """Whether the current state accepts action."""
        return self._registry.lookup(self._current_state, action) is not None

    def available_actions(self) -> List[ActionId]:
        """Sorted actions accepted in the current state."""
        return self._registry.actions_for(self._current_state)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(current_state={self._current_state!r}, "
            f"default_state={self._registry.default_state!r})"
        )
