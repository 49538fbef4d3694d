"""Row-to-entity mapper driven by a compiled ClassMapping.

Supports dataclasses, Pydantic models, and plain classes.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from rowmap.core.exceptions import ColumnMismatchError
from rowmap.mapping.plan import ClassMapping

T = TypeVar("T")


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return issubclass(cls, BaseModel)
    except ImportError:
        return False


class EntityMapper(Generic[T]):
    """Maps row dicts keyed by column name onto the mapped entity.

    Only the id column and mapped property columns are read; other columns
    in the row are ignored.

    Detection order:
    1. Pydantic BaseModel -> model_validate(values)
    2. dataclass or plain class -> entity(**values)
    """

    def __init__(self, mapping: ClassMapping) -> None:
        self._mapping = mapping
        self._target_class: type[T] = mapping.entity
        self._is_pydantic = _is_pydantic_model(mapping.entity)
        self._columns: dict[str, str] = {}
        if mapping.id is not None:
            self._columns[mapping.id.column or mapping.id.attribute] = mapping.id.attribute
        for prop in mapping.properties:
            self._columns[prop.column or prop.attribute] = prop.attribute

    @property
    def columns(self) -> dict[str, str]:
        """Column name -> attribute name for every column this mapper reads."""
        return dict(self._columns)

    def _extract(self, row: dict[str, Any]) -> dict[str, Any]:
        return {attr: row[col] for col, attr in self._columns.items() if col in row}

    def map_one(self, row: dict[str, Any]) -> T:
        """Map a single row to an entity instance."""
        values = self._extract(row)

        if self._is_pydantic:
            try:
                return self._target_class.model_validate(values)  # type: ignore[attr-defined, no-any-return]
            except Exception as e:
                raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

        try:
            return self._target_class(**values)
        except TypeError as e:
            raise ColumnMismatchError(self._target_class.__name__, [str(e)]) from e

    def map_many(self, rows: list[dict[str, Any]]) -> list[T]:
        """Map all rows via map_one."""
        return [self.map_one(row) for row in rows]
