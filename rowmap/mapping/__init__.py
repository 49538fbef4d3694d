"""Mapping layer - fluent class map definitions and their compiled plans."""

from __future__ import annotations

from rowmap.mapping.classmap import ClassMap
from rowmap.mapping.mapper import EntityMapper
from rowmap.mapping.plan import (
    ClassMapping,
    CollectionMapping,
    IdMapping,
    PropertyMapping,
    ReferenceMapping,
)
from rowmap.mapping.protocol import Mapper, MappingProvider

__all__ = [
    "ClassMap",
    "EntityMapper",
    "Mapper",
    "MappingProvider",
    "ClassMapping",
    "IdMapping",
    "PropertyMapping",
    "ReferenceMapping",
    "CollectionMapping",
]
