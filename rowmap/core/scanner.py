"""Module scanning.

Discovers mapping definitions inside Python modules and packages:

    myapp.mappings            -> classes defined in myapp/mappings/__init__.py
    myapp.mappings.billing    -> then every submodule, sorted by name
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import sys
from collections.abc import Callable, Iterator
from types import ModuleType
from typing import Any

from rowmap.core.exceptions import InvalidArgumentError, ResolutionError, ScanError
from rowmap.mapping.classmap import ClassMap

logger = logging.getLogger(__name__)


def import_module(module: ModuleType | str) -> ModuleType:
    """Return the module object for a module or dotted module name."""
    if isinstance(module, ModuleType):
        return module
    if not isinstance(module, str):
        raise ScanError(repr(module), "expected a module or a dotted module name")
    try:
        return importlib.import_module(module)
    except Exception as e:
        raise ScanError(module, str(e)) from e


def resolve_module(marker: Any) -> ModuleType:
    """Resolve the module that defines ``marker``.

    Args:
        marker: A class, function, instance or module.

    Raises:
        InvalidArgumentError: If marker is None.
        ResolutionError: If marker has no importable defining module.
    """
    if marker is None:
        raise InvalidArgumentError("marker")
    if isinstance(marker, ModuleType):
        return marker

    module_name = getattr(marker, "__module__", None)
    if not isinstance(module_name, str):
        raise ResolutionError(marker, "object does not record its defining module")

    module = sys.modules.get(module_name)
    if module is not None:
        return module
    try:
        return importlib.import_module(module_name)
    except Exception as e:
        raise ResolutionError(marker, str(e)) from e


def iter_modules(module: ModuleType) -> Iterator[ModuleType]:
    """Yield a module and, for packages, every submodule depth-first by name."""
    yield module
    search_path = getattr(module, "__path__", None)
    if search_path is None:
        return
    for info in sorted(pkgutil.iter_modules(search_path), key=lambda i: i.name):
        yield from iter_modules(import_module(f"{module.__name__}.{info.name}"))


def iter_classes(module: ModuleType, predicate: Callable[[type], bool]) -> Iterator[type]:
    """Yield classes defined in ``module`` (not imported into it) matching predicate."""
    for obj in list(vars(module).values()):
        if inspect.isclass(obj) and obj.__module__ == module.__name__ and predicate(obj):
            yield obj


def _is_mapping_type(cls: type) -> bool:
    return (
        issubclass(cls, ClassMap)
        and cls is not ClassMap
        and cls.entity is not None
        and not inspect.isabstract(cls)
    )


class ModuleScanner:
    """Finds concrete ClassMap subclasses in modules and packages.

    A ClassMap subclass without an ``entity`` is treated as a shared base
    class and skipped.
    """

    def __init__(self, predicate: Callable[[type], bool] = _is_mapping_type) -> None:
        self._predicate = predicate

    def scan(self, module: ModuleType | str) -> list[type]:
        """Return mapping types in definition order, submodules after their package.

        Raises:
            ScanError: If the module or one of its submodules cannot be imported.
        """
        root = import_module(module)
        found: list[type] = []
        for mod in iter_modules(root):
            found.extend(iter_classes(mod, self._predicate))
        logger.debug("Scanned %s: %d matching type(s)", root.__name__, len(found))
        return found
