# dfsm/runtime/synchronized.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Thread-safe wrapper around a single Machine.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from dfsm.core.errors import InvalidTransitionError
from dfsm.core.machine import Machine
from dfsm.core.registry import TransitionRegistry
from dfsm.core.types import ActionId, StateId


class SynchronizedMachine:
    """
    Serializes every call on one Machine behind one lock, so that lookup and
    commit of a transition cannot interleave with another thread's call.

    Hooks of the wrapped machine run while the lock is held. The lock is
    reentrant, so a hook may call back into this wrapper from the same thread.
    """

    def __init__(self, machine: Machine) -> None:
        self._machine = machine
        self._lock = threading.RLock()

    @property
    def machine(self) -> Machine:
        """The wrapped machine. Calling it directly bypasses the lock."""
        return self._machine

    @property
    def registry(self) -> TransitionRegistry:
        return self._machine.registry

    @property
    def current_state(self) -> StateId:
        with self._lock:
            return self._machine.current_state

    def reset(self) -> StateId:
        with self._lock:
            return self._machine.reset()

    def transition(self, action: str) -> StateId:
        """
        :raises InvalidTransitionError: If the current state does not accept action.
        """
        with self._lock:
            return self._machine.transition(action)

    def try_transition(self, action: str) -> Optional[StateId]:
        """
        Apply action if the current state accepts it.

        :return: The new state, or None if the action was rejected.
        """
        with self._lock:
            try:
                return self._machine.transition(action)
            except InvalidTransitionError:
                return None

    def what_next(self, state: str, action: str) -> Optional[StateId]:
        # The registry is immutable, so lookahead needs no lock.
        return self._machine.what_next(state, action)

    def available_actions(self) -> List[ActionId]:
        with self._lock:
            return self._machine.available_actions()
