# dfsm/core/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Transition registry: the validated, immutable set of states and their
action -> state edges.

States live in one collection keyed by identifier. Edges refer to their target
by identifier only, so the registry holds no object cycles and can be shared
between any number of machines and threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterator, List, Mapping, Optional

from dfsm.core.errors import (
    ConfigConflictError,
    ConfigurationError,
    InvalidDefaultStateError,
    UnknownStateError,
    ValidationError,
)
from dfsm.core.types import ActionId, StateId, TransitionEdge, TransitionTable, action_id, state_id
from dfsm.persistence.validator import ensure_valid_table

logger = logging.getLogger(__name__)


@dataclass
class _StateRecord:
    """Builder-side record of one state and its outgoing edges."""

    name: StateId
    transitions: Dict[ActionId, StateId] = field(default_factory=dict)


def _coerce(convert: Callable[[str], str], value: object) -> str:
    try:
        return convert(value)
    except TypeError as e:
        raise ValidationError(str(e), {"value": value}) from e


class RegistryBuilder:
    """
    Accumulates states and edges, then produces a TransitionRegistry.

    Any name seen as a source or a target gets a record, so the order in which
    tables and edges are added never matters. Re-declaring an edge is allowed
    only when it names the same target.
    """

    def __init__(self) -> None:
        self._records: Dict[StateId, _StateRecord] = {}

    def add_state(self, name: str) -> StateId:
        """
        Look up or insert the record for a state.

        :param name: The state name.
        :return: The state identifier.
        """
        sid = _coerce(state_id, name)
        if sid not in self._records:
            self._records[sid] = _StateRecord(sid)
        return sid

    def _check_edge(self, source: StateId, action: ActionId, target: StateId) -> None:
        record = self._records.get(source)
        existing = record.transitions.get(action) if record is not None else None
        if existing is not None and existing != target:
            raise ConfigConflictError(source, action, existing, target)

    def add_edge(self, source: str, action: str, target: str) -> "RegistryBuilder":
        """
        Record (source, action) -> target, creating either state if needed.

        :raises ConfigConflictError: If (source, action) already maps elsewhere.
            Nothing is recorded in that case.
        """
        src = _coerce(state_id, source)
        act = _coerce(action_id, action)
        dst = _coerce(state_id, target)
        self._check_edge(src, act, dst)

        self.add_state(src)
        self.add_state(dst)
        self._records[src].transitions[act] = dst
        return self

    def add_transitions(self, source: str, transitions: Mapping[str, str]) -> "RegistryBuilder":
        """Record every (action, target) pair declared for one source state, or none of them."""
        return self.add_table({source: transitions})

    def add_table(self, table: TransitionTable) -> "RegistryBuilder":
        """
        Record a whole transition table. On failure the builder is left as it was.

        :raises ValidationError: If the table is malformed.
        :raises ConfigConflictError: If it contradicts edges already recorded.
        """
        ensure_valid_table(table)
        for source, transitions in table.items():
            for action, target in transitions.items():
                self._check_edge(source, action, target)

        for source, transitions in table.items():
            self.add_state(source)
            for action, target in transitions.items():
                self.add_edge(source, action, target)
        return self

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Return the accumulated edges as a plain table, sinks included."""
        return {name: dict(record.transitions) for name, record in self._records.items()}

    def build(self, default_state: str) -> "TransitionRegistry":
        """
        Freeze the accumulated states into a registry.

        :param default_state: Name of the state every machine starts in.
        :raises InvalidDefaultStateError: If the default state was never seen.
        """
        return TransitionRegistry(
            {name: record.transitions for name, record in self._records.items()},
            default_state,
        )


class TransitionRegistry:
    """
    Immutable mapping of every known state to its local action -> state function,
    plus the resolved default state.

    Instances are only ever produced fully validated: every transition target is
    a member, and the default state is a member.
    """

    __slots__ = ("_transitions", "_default_state", "_sinks")

    def __init__(self, transitions: Mapping[StateId, Mapping[ActionId, StateId]], default_state: str) -> None:
        frozen = {name: MappingProxyType(dict(edges)) for name, edges in transitions.items()}

        dangling = sorted(
            {target for edges in frozen.values() for target in edges.values() if target not in frozen}
        )
        if dangling:
            raise ConfigurationError(
                f"Transition targets missing from registry: {', '.join(dangling)}",
                "TransitionRegistry",
                validation_errors={"missing_states": dangling},
            )

        if not isinstance(default_state, str) or default_state not in frozen:
            raise InvalidDefaultStateError(default_state, frozen.keys())

        self._transitions: Mapping[StateId, Mapping[ActionId, StateId]] = MappingProxyType(frozen)
        self._default_state = StateId(default_state)
        self._sinks = frozenset(name for name, edges in frozen.items() if not edges)

        logger.debug(
            "Built transition registry: %d states, %d edges, %d sinks, default %s",
            len(frozen),
            sum(len(edges) for edges in frozen.values()),
            len(self._sinks),
            self._default_state,
        )

    @classmethod
    def from_table(cls, table: TransitionTable, default_state: str) -> "TransitionRegistry":
        """
        Build a registry from a single transition table.

        :raises ValidationError: If the table is malformed.
        :raises InvalidDefaultStateError: If default_state is not a known state.
        """
        return RegistryBuilder().add_table(table).build(default_state)

    @classmethod
    def from_tables(cls, *tables: TransitionTable, default_state: str) -> "TransitionRegistry":
        """Build a registry from several tables that must agree on shared edges."""
        builder = RegistryBuilder()
        for table in tables:
            builder.add_table(table)
        return builder.build(default_state)

    @property
    def default_state(self) -> StateId:
        return self._default_state

    @property
    def states(self) -> FrozenSet[StateId]:
        return frozenset(self._transitions)

    @property
    def sinks(self) -> FrozenSet[StateId]:
        """States with no outgoing transitions."""
        return self._sinks

    def __contains__(self, state: object) -> bool:
        return state in self._transitions

    def __len__(self) -> int:
        return len(self._transitions)

    def __iter__(self) -> Iterator[StateId]:
        return iter(sorted(self._transitions))

    def _edges_of(self, state: str, operation: str) -> Mapping[ActionId, StateId]:
        try:
            return self._transitions[state]
        except KeyError:
            raise UnknownStateError(state, operation) from None

    def lookup(self, state: str, action: str) -> Optional[StateId]:
        """
        Return the target of (state, action), or None when the action is not
        accepted in that state.

        :raises UnknownStateError: If state is not in the registry.
        """
        return self._edges_of(state, "lookup").get(action)

    def transitions_for(self, state: str) -> Mapping[ActionId, StateId]:
        """Read-only action -> target mapping of one state."""
        return self._edges_of(state, "transitions_for")

    def actions_for(self, state: str) -> List[ActionId]:
        """Sorted actions accepted in a state."""
        return sorted(self._edges_of(state, "actions_for"))

    def is_sink(self, state: str) -> bool:
        return not self._edges_of(state, "is_sink")

    def edges(self) -> List[TransitionEdge]:
        """Every recorded edge, sorted by source then action."""
        return [
            TransitionEdge(source, action, target)
            for source in sorted(self._transitions)
            for action, target in sorted(self._transitions[source].items())
        ]

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """
        Plain-dict transition table. Sinks appear with an empty mapping, so the
        result rebuilds an identical registry.
        """
        return {name: dict(edges) for name, edges in self._transitions.items()}

    def describe(self, state: str) -> str:
        """Render one state's transitions as ``{ACTION:TARGET,...}``."""
        edges = self._edges_of(state, "describe")
        return "{" + ",".join(f"{action}:{target}" for action, target in sorted(edges.items())) + "}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionRegistry):
            return NotImplemented
        return self._default_state == other._default_state and self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._default_state, tuple(self.edges()), self.states))

    def __repr__(self) -> str:
        return f"TransitionRegistry(states={len(self)}, default_state={self._default_state!r})"


def merge_tables(*tables: TransitionTable) -> Dict[str, Dict[str, str]]:
    """
    Merge several transition tables into one plain table.

    :raises ConfigConflictError: If two tables map the same (state, action) differently.
    """
    builder = RegistryBuilder()
    for table in tables:
        builder.add_table(table)
    return builder.to_dict()
