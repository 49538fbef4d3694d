"""Conventions - rules that rewrite compiled mappings before they are applied."""

from __future__ import annotations

from rowmap.conventions.base import (
    ClassConvention,
    CollectionConvention,
    Convention,
    IdConvention,
    PropertyConvention,
    ReferenceConvention,
)
from rowmap.conventions.builtin import (
    ColumnName,
    DefaultLazy,
    ForeignKey,
    IdColumn,
    ManyToManyTable,
    TableName,
)
from rowmap.conventions.finder import SetupConventionFinder
from rowmap.conventions.store import ConventionStore

__all__ = [
    "Convention",
    "ClassConvention",
    "IdConvention",
    "PropertyConvention",
    "ReferenceConvention",
    "CollectionConvention",
    "ConventionStore",
    "SetupConventionFinder",
    "TableName",
    "IdColumn",
    "ColumnName",
    "ForeignKey",
    "ManyToManyTable",
    "DefaultLazy",
]
