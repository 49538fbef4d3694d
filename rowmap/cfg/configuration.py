"""Mapping configuration target.

Configuration collects the compiled class mappings applied to it and
derives row mappers and a CREATE TABLE script from them.
"""

from __future__ import annotations

from typing import Any

from rowmap.core.exceptions import DuplicateMappingError, MappingError
from rowmap.mapping.mapper import EntityMapper
from rowmap.mapping.plan import ClassMapping

# Python type name -> column type
_COLUMN_TYPES: dict[str, str] = {
    "int": "INTEGER",
    "bool": "BOOLEAN",
    "float": "REAL",
    "Decimal": "NUMERIC",
    "str": "TEXT",
    "bytes": "BLOB",
    "date": "DATE",
    "datetime": "TIMESTAMP",
    "UUID": "TEXT",
}


def _column_type(type_name: str | None, length: int | None = None) -> str:
    if type_name == "str" and length is not None:
        return f"VARCHAR({length})"
    return _COLUMN_TYPES.get(type_name or "", "TEXT")


def _qualified_table(mapping: ClassMapping) -> str:
    if mapping.schema:
        return f"{mapping.schema}.{mapping.table}"
    return str(mapping.table)


class Configuration:
    """Holds the class mappings applied by mapping containers.

    Mappings are keyed by entity class; applying a second mapping for the
    same entity raises DuplicateMappingError.
    """

    def __init__(self) -> None:
        self._mappings: dict[type, ClassMapping] = {}

    def add_mapping(self, mapping: ClassMapping) -> None:
        if mapping.entity in self._mappings:
            raise DuplicateMappingError(mapping.entity_name)
        self._mappings[mapping.entity] = mapping

    @property
    def class_mappings(self) -> list[ClassMapping]:
        """Applied mappings, in application order."""
        return list(self._mappings.values())

    def has_mapping(self, entity: type) -> bool:
        return entity in self._mappings

    def get_class_mapping(self, entity: type) -> ClassMapping:
        try:
            return self._mappings[entity]
        except KeyError:
            raise MappingError(f"No class mapping for {entity.__qualname__}") from None

    def mapper_for(self, entity: type) -> EntityMapper[Any]:
        """Row mapper for a mapped entity."""
        return EntityMapper(self.get_class_mapping(entity))

    def generate_schema_script(self) -> list[str]:
        """CREATE TABLE statements for every mapped class and owned join table.

        Foreign key columns are emitted on the table that holds them: a
        reference on its own table, a one-to-many key on the child table.
        """
        extra_columns: dict[type, list[str]] = {}
        for mapping in self._mappings.values():
            for collection in mapping.collections:
                if not collection.is_many_to_many and collection.key_column:
                    extra_columns.setdefault(collection.target_class, []).append(
                        collection.key_column
                    )

        statements = [
            self._create_table(mapping, extra_columns.get(mapping.entity, []))
            for mapping in self._mappings.values()
        ]

        for mapping in self._mappings.values():
            for collection in mapping.collections:
                if collection.is_many_to_many and not collection.inverse:
                    schema = f"{mapping.schema}." if mapping.schema else ""
                    statements.append(
                        f"CREATE TABLE {schema}{collection.table} (\n"
                        f"    {collection.key_column} INTEGER NOT NULL,\n"
                        f"    {collection.child_key_column} INTEGER NOT NULL,\n"
                        f"    PRIMARY KEY ({collection.key_column}, {collection.child_key_column})\n"
                        ")"
                    )
        return statements

    def _create_table(self, mapping: ClassMapping, extra_columns: list[str]) -> str:
        columns: list[str] = []
        if mapping.id is not None:
            id_type = _column_type(mapping.id.type_name)
            columns.append(f"{mapping.id.column} {id_type} PRIMARY KEY")

        for prop in mapping.properties:
            column = f"{prop.column} {_column_type(prop.type_name, prop.length)}"
            if not prop.nullable:
                column += " NOT NULL"
            if prop.unique:
                column += " UNIQUE"
            columns.append(column)

        seen = {c.split(" ", 1)[0] for c in columns}
        for reference in mapping.references:
            if reference.column not in seen:
                columns.append(f"{reference.column} INTEGER")
                seen.add(str(reference.column))
        for key_column in extra_columns:
            if key_column not in seen:
                columns.append(f"{key_column} INTEGER")
                seen.add(key_column)

        body = ",\n".join(f"    {c}" for c in columns)
        return f"CREATE TABLE {_qualified_table(mapping)} (\n{body}\n)"
