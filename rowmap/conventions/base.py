"""Convention base classes.

A convention rewrites one part of a compiled class mapping. Parts are frozen
dataclasses, so ``apply`` returns the updated part (usually via
``dataclasses.replace``). ``owner`` is the ClassMapping the part belongs to;
for class conventions the part and the owner are the same mapping.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from rowmap.core.enums import ConventionTarget


class Convention(ABC):
    """Base class for all conventions."""

    targets: ClassVar[frozenset[ConventionTarget]] = frozenset()

    def accepts(self, part: Any, owner: Any) -> bool:
        """Return False to leave ``part`` untouched."""
        return True

    @abstractmethod
    def apply(self, part: Any, owner: Any) -> Any:
        """Return the updated part."""


class ClassConvention(Convention):
    targets = frozenset({ConventionTarget.CLASS})


class IdConvention(Convention):
    targets = frozenset({ConventionTarget.ID})


class PropertyConvention(Convention):
    targets = frozenset({ConventionTarget.PROPERTY})


class ReferenceConvention(Convention):
    targets = frozenset({ConventionTarget.REFERENCE})


class CollectionConvention(Convention):
    targets = frozenset({ConventionTarget.COLLECTION})
