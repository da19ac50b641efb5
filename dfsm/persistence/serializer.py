# dfsm/persistence/serializer.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
JSON encoding and decoding of transition tables and machine configs.

Table form::

    {"NEW": {"START": "STARTED"}, "STARTED": {"COMPLETE": "NEW"}}

Config form::

    {"default_state": "NEW", "transitions": {...table...}}

A state may appear more than once in a table; its transitions are merged.
Repeating an action under a state is accepted only when both name the same
target, otherwise loading fails with ConfigConflictError.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Union

from dfsm.core.config import MachineConfig
from dfsm.core.errors import ValidationError
from dfsm.core.machine import Machine
from dfsm.core.registry import RegistryBuilder, TransitionRegistry
from dfsm.core.types import TransitionTable
from dfsm.persistence.validator import ensure_valid_table, validate_table

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class _Pairs(list):
    """Key/value pairs of one JSON object, in order, duplicates kept."""


def _decode(text: Union[str, bytes], what: str) -> Any:
    try:
        return json.loads(text, object_pairs_hook=_Pairs)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Malformed {what} JSON: {e}", {"line": e.lineno, "column": e.colno}) from e
    except UnicodeDecodeError as e:
        raise ValidationError(f"Undecodable {what} text: {e}", {"position": e.start}) from e


def _read(path: PathLike) -> str:
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    except UnicodeDecodeError as e:
        raise ValidationError(f"File {path} is not valid UTF-8: {e}", {"path": str(path), "position": e.start}) from e


def _plain(value: Any) -> Any:
    """Turn decoded pairs back into dicts, for messages and non-table values."""
    if isinstance(value, _Pairs):
        return {key: _plain(item) for key, item in value}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _merge_table(raw: Any) -> Dict[str, Dict[str, str]]:
    """
    Build a plain table from decoded pairs, merging repeated states.

    :raises ValidationError: If any entry is malformed.
    :raises ConfigConflictError: If a repeated action names a different target.
    """
    if not isinstance(raw, _Pairs):
        ensure_valid_table(_plain(raw))

    problems: List[str] = []
    for state, transitions in raw:
        if isinstance(transitions, _Pairs):
            for action, target in transitions:
                problems.extend(validate_table({state: {action: _plain(target)}}))
        else:
            problems.extend(validate_table({state: _plain(transitions)}))
    if problems:
        raise ValidationError("Invalid transition table: " + "; ".join(problems), {"problems": problems})

    builder = RegistryBuilder()
    declared: Dict[str, None] = {}
    for state, transitions in raw:
        declared[state] = None
        builder.add_state(state)
        for action, target in transitions:
            builder.add_edge(state, action, target)

    merged = builder.to_dict()
    return {state: merged[state] for state in declared}


def load_table(text: Union[str, bytes]) -> Dict[str, Dict[str, str]]:
    """
    Decode a JSON transition table.

    :raises ValidationError: If the text is not JSON or not a valid table.
    :raises ConfigConflictError: If a state maps one action to two targets.
    """
    return _merge_table(_decode(text, "transition table"))


def load_table_file(path: PathLike) -> Dict[str, Dict[str, str]]:
    logger.debug("Loading transition table from %s", path)
    return load_table(_read(path))


def dump_table(source: Union[TransitionRegistry, TransitionTable], indent: int = 2) -> str:
    """Encode a registry or plain table as JSON with sorted keys."""
    table = source.to_dict() if isinstance(source, TransitionRegistry) else source
    ensure_valid_table(table)
    return json.dumps({state: dict(edges) for state, edges in table.items()}, indent=indent, sort_keys=True)


def load_config(text: Union[str, bytes]) -> MachineConfig:
    """
    Decode a JSON machine config.

    :raises ValidationError: If the text is not JSON or not a valid config.
    :raises ConfigConflictError: If the transitions map one action to two targets.
    """
    raw = _decode(text, "machine config")
    if not isinstance(raw, _Pairs):
        return MachineConfig.from_dict(_plain(raw))

    keys = [key for key, _ in raw]
    repeated = sorted({key for key in keys if keys.count(key) > 1})
    if repeated:
        raise ValidationError(f"Machine config repeats keys: {', '.join(repeated)}", {"repeated": repeated})

    data = dict(raw)
    if "transitions" in data:
        data["transitions"] = _merge_table(data["transitions"])
    if "default_state" in data:
        data["default_state"] = _plain(data["default_state"])
    return MachineConfig.from_dict(data)


def load_config_file(path: PathLike) -> MachineConfig:
    logger.debug("Loading machine config from %s", path)
    return load_config(_read(path))


def dump_config(source: Union[Machine, TransitionRegistry, MachineConfig], indent: int = 2) -> str:
    """Encode a machine, registry or config as a JSON machine config."""
    if isinstance(source, Machine):
        source = source.registry
    if isinstance(source, TransitionRegistry):
        source = MachineConfig(table=source.to_dict(), default_state=source.default_state)
    return json.dumps(source.to_dict(), indent=indent, sort_keys=True)
