"""Class mapping plan data classes.

Frozen dataclasses representing compiled mapping definitions. Column and
table names left as None were not declared explicitly; conventions may fill
them in, and the persistence model assigns defaults to whatever remains.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rowmap.core.enums import CollectionKind


@dataclass(frozen=True)
class IdMapping:
    """Identity column of a class mapping."""

    attribute: str
    column: str | None = None
    type_name: str | None = None
    generated: bool = True


@dataclass(frozen=True)
class PropertyMapping:
    """Single scalar attribute stored in a column."""

    attribute: str
    column: str | None = None
    type_name: str | None = None
    nullable: bool = True
    length: int | None = None
    unique: bool = False


@dataclass(frozen=True)
class ReferenceMapping:
    """Many-to-one reference stored as a foreign key column."""

    attribute: str
    target_class: type
    column: str | None = None
    lazy: bool | None = None


@dataclass(frozen=True)
class CollectionMapping:
    """One-to-many or many-to-many collection.

    For one-to-many, key_column is the foreign key on the child table.
    For many-to-many, table is the join table, key_column references the
    owning entity and child_key_column references target_class.
    """

    attribute: str
    kind: CollectionKind
    target_class: type
    key_column: str | None = None
    table: str | None = None
    child_key_column: str | None = None
    inverse: bool = False
    lazy: bool | None = None

    @property
    def is_many_to_many(self) -> bool:
        return self.kind is CollectionKind.MANY_TO_MANY


@dataclass(frozen=True)
class ClassMapping:
    """Compiled mapping of one entity class to one table."""

    entity: type
    table: str | None = None
    schema: str | None = None
    id: IdMapping | None = None
    properties: list[PropertyMapping] = field(default_factory=list)
    references: list[ReferenceMapping] = field(default_factory=list)
    collections: list[CollectionMapping] = field(default_factory=list)
    read_only: bool = False
    access: str | None = None

    @property
    def entity_name(self) -> str:
        return f"{self.entity.__module__}.{self.entity.__qualname__}"
