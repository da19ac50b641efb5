# dfsm/tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Dict

import pytest

from dfsm.core.machine import Machine
from dfsm.core.registry import TransitionRegistry


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")
    config.addinivalue_line("markers", "stress: mark test as a stress test")


@pytest.fixture
def job_table() -> Dict[str, Dict[str, str]]:
    """The two-state NEW/STARTED table."""
    return {"NEW": {"START": "STARTED"}, "STARTED": {"COMPLETE": "NEW"}}


@pytest.fixture
def order_table() -> Dict[str, Dict[str, str]]:
    """A table with a branch and two sinks, SHIPPED and CANCELLED are never declared."""
    return {
        "CREATED": {"PAY": "PAID", "CANCEL": "CANCELLED"},
        "PAID": {"SHIP": "SHIPPED", "REFUND": "CREATED"},
    }


@pytest.fixture
def job_registry(job_table) -> TransitionRegistry:
    return TransitionRegistry.from_table(job_table, "NEW")


@pytest.fixture
def job_machine(job_registry) -> Machine:
    return Machine(job_registry)


@pytest.fixture
def order_machine(order_table) -> Machine:
    return Machine.from_table(order_table, "CREATED")
