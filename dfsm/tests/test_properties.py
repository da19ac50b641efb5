# dfsm/tests/test_properties.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Property-based tests over randomly generated transition tables."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from dfsm.core.errors import ConfigConflictError, InvalidTransitionError
from dfsm.core.machine import Machine
from dfsm.core.registry import TransitionRegistry

names = st.sampled_from(["A", "B", "C", "D", "E"])
actions = st.sampled_from(["x", "y", "z"])
tables = st.dictionaries(names, st.dictionaries(actions, names, max_size=3), min_size=1, max_size=5)


@st.composite
def machines(draw):
    table = draw(tables)
    default = draw(st.sampled_from(sorted(table)))
    return table, default


@pytest.mark.property
@given(machines())
def test_starts_in_default_state(case):
    table, default = case
    machine = Machine.from_table(table, default)

    assert machine.current_state == default
    assert machine.reset() == default


@pytest.mark.property
@given(machines())
def test_every_target_is_a_state(case):
    table, default = case
    registry = TransitionRegistry.from_table(table, default)

    for edge in registry.edges():
        assert edge.target in registry
        assert table[edge.source][edge.action] == edge.target


@pytest.mark.property
@given(machines(), st.lists(actions, max_size=20))
def test_transitions_follow_table_and_failures_do_not_move(case, steps):
    table, default = case
    machine = Machine.from_table(table, default)

    for action in steps:
        before = machine.current_state
        expected = table.get(before, {}).get(action)
        if expected is None:
            with pytest.raises(InvalidTransitionError):
                machine.transition(action)
            assert machine.current_state == before
        else:
            assert machine.transition(action) == expected
            assert machine.current_state == expected


@pytest.mark.property
@given(machines(), names, actions)
def test_what_next_never_moves(case, state, action):
    table, default = case
    machine = Machine.from_table(table, default)
    before = machine.current_state

    if state in machine.registry:
        assert machine.what_next(state, action) == table.get(state, {}).get(action)
    assert machine.current_state == before


@pytest.mark.property
@given(names, actions, names, names)
def test_conflicting_targets_always_fail(source, action, first, second):
    if first == second:
        registry = TransitionRegistry.from_tables({source: {action: first}}, {source: {action: second}}, default_state=source)
        assert registry.lookup(source, action) == first
    else:
        with pytest.raises(ConfigConflictError) as exc_info:
            TransitionRegistry.from_tables({source: {action: first}}, {source: {action: second}}, default_state=source)
        assert exc_info.value.existing_target == first
        assert exc_info.value.attempted_target == second
