"""Scoped convention registration.

SetupConventionFinder is a view over a ConventionStore that hands the
caller's builder back from every method, so convention setup can sit in
the middle of a fluent chain::

    container.conventions.add(TableName(plural)).add(...)
"""

from __future__ import annotations

from collections.abc import Callable
from types import ModuleType
from typing import Any, Generic, TypeVar

from rowmap.conventions.base import Convention
from rowmap.conventions.store import ConventionStore
from rowmap.core.exceptions import InvalidArgumentError
from rowmap.core.scanner import resolve_module

P = TypeVar("P")


class SetupConventionFinder(Generic[P]):
    """Registers conventions on a store and returns the parent builder."""

    def __init__(self, parent: P, store: ConventionStore) -> None:
        self._parent = parent
        self._store = store

    def add(self, *conventions: Convention | type[Convention]) -> P:
        """Register convention instances or classes."""
        for convention in conventions:
            self._store.add(convention)
        return self._parent

    def add_from_module(self, module: ModuleType | str) -> P:
        """Register every convention class defined in a module."""
        if module is None:
            raise InvalidArgumentError("module")
        self._store.add_from_module(module)
        return self._parent

    def add_from_module_of(self, marker: Any) -> P:
        """Register every convention class in the module that defines ``marker``."""
        return self.add_from_module(resolve_module(marker))

    def setup(self, configure: Callable[[SetupConventionFinder[P]], Any]) -> P:
        """Run ``configure`` against this finder."""
        configure(self)
        return self._parent
