"""Mapping protocols.

A mapping provider is anything the persistence model can compile into a
ClassMapping. ClassMap is the built-in provider.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from rowmap.mapping.plan import ClassMapping

T = TypeVar("T")


@runtime_checkable
class MappingProvider(Protocol):
    """Produces a compiled class mapping."""

    def build(self) -> ClassMapping:
        """Compile this definition into a ClassMapping."""
        ...


class Mapper(Protocol[T]):
    """Row mapper protocol."""

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row dict to a target object."""
        ...

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Map multiple row dicts to a list of target objects."""
        ...
