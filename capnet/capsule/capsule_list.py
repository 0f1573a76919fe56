"""Ordered id-keyed collections of capsules and capsule paths."""

from __future__ import annotations

from pathlib import Path
from typing import Generic, Iterator, TypeVar

from ..models import ComponentID
from .capsule import Capsule

V = TypeVar("V")


class _IdMap(Generic[V]):
    """Ordered mapping keyed by the string form of a ComponentID."""

    def __init__(self, *entries: tuple[ComponentID, V]):
        self._ids: dict[str, ComponentID] = {}
        self._values: dict[str, V] = {}
        for component_id, value in entries:
            key = str(component_id)
            self._ids[key] = component_id
            self._values[key] = value

    def get_value(self, component_id: ComponentID | str) -> V | None:
        return self._values.get(str(component_id))

    def values(self) -> list[V]:
        return list(self._values.values())

    def items(self) -> list[tuple[ComponentID, V]]:
        return [(self._ids[key], value) for key, value in self._values.items()]

    def __contains__(self, component_id: object) -> bool:
        return str(component_id) in self._values

    def __iter__(self) -> Iterator[ComponentID]:
        return iter(self._ids.values())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._values)!r})"


class CapsuleList(_IdMap[Capsule]):
    """Capsules of one sub-network, in resolution order."""

    @classmethod
    def from_capsules(cls, capsules: list[Capsule]) -> CapsuleList:
        return cls(*((capsule.component_id, capsule) for capsule in capsules))

    def to_paths(self) -> CapsulePaths:
        return CapsulePaths(
            *((capsule.component_id, capsule.wrk_dir) for capsule in self.values())
        )


class CapsulePaths(_IdMap[Path]):
    """Working directories of one sub-network's capsules."""
