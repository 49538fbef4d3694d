"""Convention store - holds the conventions a persistence model applies."""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Iterable, Iterator
from types import ModuleType
from typing import Any

from rowmap.conventions.base import Convention
from rowmap.core.enums import ConventionTarget
from rowmap.core.exceptions import ConventionError, InvalidArgumentError
from rowmap.core.scanner import ModuleScanner
from rowmap.mapping.plan import ClassMapping

logger = logging.getLogger(__name__)


def _is_convention_type(cls: type) -> bool:
    return issubclass(cls, Convention) and not inspect.isabstract(cls)


class ConventionStore:
    """Ordered collection of conventions.

    Conventions run in insertion order. Registering a convention class adds
    one instance of it; registering the same class twice is a no-op.
    Instances are always appended.
    """

    def __init__(self, conventions: Iterable[Convention | type[Convention]] = ()) -> None:
        self._conventions: list[Convention] = []
        self._scanner = ModuleScanner(predicate=_is_convention_type)
        for convention in conventions:
            self.add(convention)

    def add(self, convention: Convention | type[Convention]) -> None:
        """Register a convention instance or class."""
        if convention is None:
            raise InvalidArgumentError("convention")

        if inspect.isclass(convention):
            if not issubclass(convention, Convention):
                raise ConventionError(f"{convention.__qualname__} is not a Convention")
            if any(type(c) is convention for c in self._conventions):
                return
            try:
                convention = convention()
            except TypeError as e:
                raise ConventionError(
                    f"Cannot instantiate convention {convention.__qualname__}: {e}"
                ) from e

        if not isinstance(convention, Convention):
            raise ConventionError(f"{convention!r} is not a Convention")

        self._conventions.append(convention)
        logger.debug("Registered convention %s", type(convention).__qualname__)

    def add_from_module(self, module: ModuleType | str) -> None:
        """Register every concrete convention class defined in a module."""
        for convention_type in self._scanner.scan(module):
            self.add(convention_type)

    def find(self, target: ConventionTarget) -> list[Convention]:
        """Conventions applicable to the given mapping part, in order."""
        return [c for c in self._conventions if target in c.targets]

    def apply(self, mapping: ClassMapping) -> ClassMapping:
        """Run every registered convention over a class mapping."""
        if not self._conventions:
            return mapping

        for convention in self.find(ConventionTarget.CLASS):
            if convention.accepts(mapping, mapping):
                mapping = convention.apply(mapping, mapping)

        changes: dict[str, Any] = {}
        if mapping.id is not None:
            changes["id"] = self._apply_part(ConventionTarget.ID, mapping.id, mapping)
        changes["properties"] = [
            self._apply_part(ConventionTarget.PROPERTY, p, mapping) for p in mapping.properties
        ]
        changes["references"] = [
            self._apply_part(ConventionTarget.REFERENCE, r, mapping) for r in mapping.references
        ]
        changes["collections"] = [
            self._apply_part(ConventionTarget.COLLECTION, c, mapping) for c in mapping.collections
        ]
        return dataclasses.replace(mapping, **changes)

    def _apply_part(self, target: ConventionTarget, part: Any, owner: ClassMapping) -> Any:
        for convention in self.find(target):
            if convention.accepts(part, owner):
                part = convention.apply(part, owner)
        return part

    def __iter__(self) -> Iterator[Convention]:
        return iter(list(self._conventions))

    def __len__(self) -> int:
        return len(self._conventions)
