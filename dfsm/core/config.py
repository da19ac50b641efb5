# dfsm/core/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping as MappingType

from dfsm.core.errors import ValidationError
from dfsm.persistence.validator import ensure_valid_table


@dataclass(frozen=True)
class MachineConfig:
    """
    Everything needed to build a machine: the transition table and the name of
    the default state.

    The table is copied into read-only mappings on construction, so a config
    neither tracks later changes to the caller's dict nor can be changed
    itself. Configs compare and hash by value.
    """

    table: MappingType[str, MappingType[str, str]] = field(default_factory=dict)
    default_state: str = ""

    def __post_init__(self) -> None:
        ensure_valid_table(self.table)
        if not isinstance(self.default_state, str):
            raise ValidationError(
                f"Default state must be a string, got {type(self.default_state).__name__}",
                {"default_state": self.default_state},
            )
        frozen = {state: MappingProxyType(dict(edges)) for state, edges in self.table.items()}
        object.__setattr__(self, "table", MappingProxyType(frozen))

    def __hash__(self) -> int:
        edges = tuple(sorted((state, tuple(sorted(actions.items()))) for state, actions in self.table.items()))
        return hash((self.default_state, edges))

    @classmethod
    def from_dict(cls, data: Any) -> "MachineConfig":
        """
        Build a config from ``{"default_state": ..., "transitions": {...}}``.

        :raises ValidationError: If either key is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(f"Machine config must be a mapping, got {type(data).__name__}")
        missing = [key for key in ("default_state", "transitions") if key not in data]
        if missing:
            raise ValidationError(f"Machine config missing keys: {', '.join(missing)}", {"missing": missing})
        return cls(table=data["transitions"], default_state=data["default_state"])

    def to_dict(self) -> Dict[str, Any]:
        return {"default_state": self.default_state, "transitions": {s: dict(e) for s, e in self.table.items()}}
