"""Ready-made conventions built from naming functions.

Each one only fills in names that were not declared explicitly.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from rowmap.conventions.base import (
    ClassConvention,
    CollectionConvention,
    IdConvention,
    PropertyConvention,
    ReferenceConvention,
)
from rowmap.mapping.plan import (
    ClassMapping,
    CollectionMapping,
    IdMapping,
    PropertyMapping,
    ReferenceMapping,
)


class TableName(ClassConvention):
    """Table name derived from the entity class."""

    def __init__(self, naming: Callable[[type], str]) -> None:
        self._naming = naming

    def accepts(self, part: ClassMapping, owner: ClassMapping) -> bool:
        return part.table is None

    def apply(self, part: ClassMapping, owner: ClassMapping) -> ClassMapping:
        return dataclasses.replace(part, table=self._naming(part.entity))


class IdColumn(IdConvention):
    """Primary key column derived from the entity class."""

    def __init__(self, naming: Callable[[type], str]) -> None:
        self._naming = naming

    def accepts(self, part: IdMapping, owner: ClassMapping) -> bool:
        return part.column is None

    def apply(self, part: IdMapping, owner: ClassMapping) -> IdMapping:
        return dataclasses.replace(part, column=self._naming(owner.entity))


class ColumnName(PropertyConvention):
    """Property column derived from the attribute name."""

    def __init__(self, naming: Callable[[str], str]) -> None:
        self._naming = naming

    def accepts(self, part: PropertyMapping, owner: ClassMapping) -> bool:
        return part.column is None

    def apply(self, part: PropertyMapping, owner: ClassMapping) -> PropertyMapping:
        return dataclasses.replace(part, column=self._naming(part.attribute))


class ForeignKey(ReferenceConvention, CollectionConvention):
    """Foreign key columns derived from the referenced entity class.

    References name their column after the target; collections name the
    key after the owner and, for many-to-many, the child key after the
    target.
    """

    targets = ReferenceConvention.targets | CollectionConvention.targets

    def __init__(self, naming: Callable[[type], str]) -> None:
        self._naming = naming

    def apply(self, part: Any, owner: ClassMapping) -> Any:
        if isinstance(part, ReferenceMapping):
            if part.column is not None:
                return part
            return dataclasses.replace(part, column=self._naming(part.target_class))

        changes: dict[str, str] = {}
        if part.key_column is None:
            changes["key_column"] = self._naming(owner.entity)
        if part.is_many_to_many and part.child_key_column is None:
            changes["child_key_column"] = self._naming(part.target_class)
        return dataclasses.replace(part, **changes)


class ManyToManyTable(CollectionConvention):
    """Join table name derived from the owner and target classes."""

    def __init__(self, naming: Callable[[type, type], str]) -> None:
        self._naming = naming

    def accepts(self, part: CollectionMapping, owner: ClassMapping) -> bool:
        return part.is_many_to_many and part.table is None

    def apply(self, part: CollectionMapping, owner: ClassMapping) -> CollectionMapping:
        return dataclasses.replace(part, table=self._naming(owner.entity, part.target_class))


class DefaultLazy(ReferenceConvention, CollectionConvention):
    """Lazy flag for references and collections that don't set one."""

    targets = ReferenceConvention.targets | CollectionConvention.targets

    def __init__(self, lazy: bool = True) -> None:
        self._lazy = lazy

    def accepts(self, part: Any, owner: ClassMapping) -> bool:
        return part.lazy is None

    def apply(self, part: Any, owner: ClassMapping) -> Any:
        return dataclasses.replace(part, lazy=self._lazy)
