"""Fluent class mapping definitions.

Subclass ClassMap, point it at an entity class and declare the mapping in
``__init__``::

    class UserMap(ClassMap):
        entity = User

        def __init__(self) -> None:
            super().__init__()
            self.table("users").id("id").map("name", nullable=False)
            self.has_many("orders", Order)
"""

from __future__ import annotations

import dataclasses
import inspect
import types
import typing
from typing import Any

from rowmap.core.enums import CollectionKind
from rowmap.core.exceptions import MappingDefinitionError
from rowmap.mapping.plan import (
    ClassMapping,
    CollectionMapping,
    IdMapping,
    PropertyMapping,
    ReferenceMapping,
)


def _get_field_names(cls: type) -> list[str]:
    """Extract field names from a class (dataclass, Pydantic, or plain)."""
    # Pydantic model
    if hasattr(cls, "model_fields"):
        return list(cls.model_fields.keys())

    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    # Plain class - use __init__ parameters
    try:
        sig = inspect.signature(cls.__init__)  # type: ignore[misc]
        variadic = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        return [
            name
            for name, param in sig.parameters.items()
            if name != "self" and param.kind not in variadic
        ]
    except (ValueError, TypeError):
        return []


def _get_field_types(cls: type) -> dict[str, str]:
    """Map attribute names to the name of their annotated type, where simple."""
    if hasattr(cls, "model_fields"):
        hints = {name: f.annotation for name, f in cls.model_fields.items()}
    else:
        try:
            hints = typing.get_type_hints(cls)
        except (NameError, TypeError):
            return {}

    result: dict[str, str] = {}
    for name, hint in hints.items():
        # Unwrap Optional[X] / X | None
        if typing.get_origin(hint) in (typing.Union, types.UnionType):
            args = [a for a in typing.get_args(hint) if a is not type(None)]
            if len(args) == 1:
                hint = args[0]
        if typing.get_origin(hint) is None and isinstance(hint, type):
            result[name] = hint.__name__
    return result


class ClassMap:
    """Base class for fluent mapping definitions of a single entity."""

    entity: type | None = None

    def __init__(self, entity: type | None = None) -> None:
        if entity is not None:
            self.entity = entity
        self._table: str | None = None
        self._schema: str | None = None
        self._id: IdMapping | None = None
        self._properties: dict[str, PropertyMapping] = {}
        self._references: list[ReferenceMapping] = []
        self._collections: list[CollectionMapping] = []
        self._auto_fields_enabled = False
        self._read_only = False
        self._access: str | None = None
        self._last_relation: list[Any] | None = None

    def table(self, name: str) -> ClassMap:
        """Set the table the entity is stored in."""
        self._table = name
        return self

    def schema(self, name: str) -> ClassMap:
        self._schema = name
        return self

    def id(self, attr_name: str, column: str | None = None, *, generated: bool = True) -> ClassMap:
        """Declare the identity attribute."""
        self._id = IdMapping(
            attribute=attr_name,
            column=column,
            type_name=self._type_of(attr_name),
            generated=generated,
        )
        return self

    def map(
        self,
        attr_name: str,
        column: str | None = None,
        *,
        nullable: bool = True,
        length: int | None = None,
        unique: bool = False,
    ) -> ClassMap:
        """Map a scalar attribute to a column."""
        self._properties[attr_name] = PropertyMapping(
            attribute=attr_name,
            column=column,
            type_name=self._type_of(attr_name),
            nullable=nullable,
            length=length,
            unique=unique,
        )
        return self

    def auto_fields(self) -> ClassMap:
        """Map every remaining entity field by attribute name."""
        self._auto_fields_enabled = True
        return self

    def references(
        self,
        attr_name: str,
        entity_class: type,
        column: str | None = None,
        *,
        lazy: bool | None = None,
    ) -> ClassMap:
        """Declare a many-to-one reference."""
        self._references.append(
            ReferenceMapping(attribute=attr_name, target_class=entity_class, column=column, lazy=lazy)
        )
        self._last_relation = self._references
        return self

    def has_many(
        self,
        attr_name: str,
        entity_class: type,
        key_column: str | None = None,
        *,
        inverse: bool = False,
        lazy: bool | None = None,
    ) -> ClassMap:
        """Declare a one-to-many collection."""
        self._collections.append(
            CollectionMapping(
                attribute=attr_name,
                kind=CollectionKind.ONE_TO_MANY,
                target_class=entity_class,
                key_column=key_column,
                inverse=inverse,
                lazy=lazy,
            )
        )
        self._last_relation = self._collections
        return self

    def has_many_to_many(
        self,
        attr_name: str,
        entity_class: type,
        table: str | None = None,
        parent_key: str | None = None,
        child_key: str | None = None,
        *,
        inverse: bool = False,
        lazy: bool | None = None,
    ) -> ClassMap:
        """Declare a many-to-many collection through a join table."""
        self._collections.append(
            CollectionMapping(
                attribute=attr_name,
                kind=CollectionKind.MANY_TO_MANY,
                target_class=entity_class,
                key_column=parent_key,
                table=table,
                child_key_column=child_key,
                inverse=inverse,
                lazy=lazy,
            )
        )
        self._last_relation = self._collections
        return self

    def inverse(self) -> ClassMap:
        """Mark the last declared collection as the inverse side."""
        if self._last_relation is None or self._last_relation is not self._collections:
            raise MappingDefinitionError("inverse() must follow has_many() or has_many_to_many()")
        self._collections[-1] = dataclasses.replace(self._collections[-1], inverse=True)
        return self

    def not_lazy(self) -> ClassMap:
        """Load the last declared reference or collection eagerly."""
        if self._last_relation is None:
            raise MappingDefinitionError("not_lazy() must follow a reference or collection")
        self._last_relation[-1] = dataclasses.replace(self._last_relation[-1], lazy=False)
        return self

    def read_only(self) -> ClassMap:
        self._read_only = True
        return self

    def access(self, strategy: str) -> ClassMap:
        """Set how attribute values are read and written ("property" or "field")."""
        self._access = strategy
        return self

    def _type_of(self, attr_name: str) -> str | None:
        if self.entity is None:
            return None
        return _get_field_types(self.entity).get(attr_name)

    def build(self) -> ClassMapping:
        """Compile the declarations into a ClassMapping."""
        if self.entity is None:
            raise MappingDefinitionError(
                f"{type(self).__qualname__} does not declare the entity it maps"
            )

        properties = dict(self._properties)
        if self._auto_fields_enabled:
            taken = {r.attribute for r in self._references}
            taken.update(c.attribute for c in self._collections)
            if self._id is not None:
                taken.add(self._id.attribute)
            types = _get_field_types(self.entity)
            for name in _get_field_names(self.entity):
                if name not in properties and name not in taken:
                    properties[name] = PropertyMapping(attribute=name, type_name=types.get(name))

        return ClassMapping(
            entity=self.entity,
            table=self._table,
            schema=self._schema,
            id=self._id,
            properties=list(properties.values()),
            references=list(self._references),
            collections=list(self._collections),
            read_only=self._read_only,
            access=self._access,
        )

    def __repr__(self) -> str:
        entity: Any = self.entity
        name = entity.__qualname__ if entity is not None else None
        return f"<{type(self).__qualname__} entity={name}>"
