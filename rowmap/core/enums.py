"""Relationship enumerations."""

from __future__ import annotations

from enum import Enum


class CollectionKind(Enum):
    """Supported collection relationships."""

    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


class ConventionTarget(Enum):
    """Mapping parts a convention can be applied to."""

    CLASS = "class"
    ID = "id"
    PROPERTY = "property"
    REFERENCE = "reference"
    COLLECTION = "collection"
