"""Unit tests for module scanning and marker resolution."""

from __future__ import annotations

import importlib
import sys
from dataclasses import dataclass

import pytest

from rowmap.core.exceptions import InvalidArgumentError, ResolutionError, ScanError
from rowmap.core.scanner import ModuleScanner, resolve_module
from rowmap.mapping.classmap import ClassMap


@dataclass
class Note:
    id: int
    body: str


class NoteMap(ClassMap):
    entity = Note

    def __init__(self) -> None:
        super().__init__()
        self.id("id").map("body")


class TestModuleScanner:
    def test_scan_package_then_submodules(self, shop_package: str) -> None:
        found = ModuleScanner().scan("shop.mappings")
        assert [t.__name__ for t in found] == ["CustomerMap", "OrderMap", "ProductMap", "TagMap"]

    def test_scan_module_object(self, shop_package: str) -> None:
        module = importlib.import_module("shop.mappings.catalog")
        found = ModuleScanner().scan(module)
        assert [t.__name__ for t in found] == ["ProductMap", "TagMap"]

    def test_skips_base_without_entity(self, shop_package: str) -> None:
        names = [t.__name__ for t in ModuleScanner().scan("shop.mappings")]
        assert "AuditedMap" not in names

    def test_skips_imported_classes(self, shop_package: str) -> None:
        # ClassMap is imported into every mapping module
        assert ClassMap not in ModuleScanner().scan("shop.mappings")

    def test_scan_is_restartable(self, shop_package: str) -> None:
        scanner = ModuleScanner()
        assert scanner.scan("shop.mappings") == scanner.scan("shop.mappings")

    def test_module_without_mappings(self, shop_package: str) -> None:
        assert ModuleScanner().scan("shop.models") == []

    def test_missing_module_raises_scan_error(self) -> None:
        with pytest.raises(ScanError, match="no_such_mappings"):
            ModuleScanner().scan("no_such_mappings")

    def test_broken_module_raises_scan_error(self, write_module) -> None:
        write_module("broken_maps.py", "raise RuntimeError('boom')\n")
        with pytest.raises(ScanError, match="boom"):
            ModuleScanner().scan("broken_maps")

    def test_custom_predicate(self) -> None:
        scanner = ModuleScanner(predicate=lambda cls: cls is Note)
        assert scanner.scan(sys.modules[__name__]) == [Note]


class TestResolveModule:
    def test_class_marker(self) -> None:
        assert resolve_module(NoteMap) is sys.modules[__name__]

    def test_function_marker(self) -> None:
        assert resolve_module(resolve_module).__name__ == "rowmap.core.scanner"

    def test_instance_marker(self) -> None:
        assert resolve_module(Note(id=1, body="x")) is sys.modules[__name__]

    def test_module_marker(self) -> None:
        assert resolve_module(sys) is sys

    def test_none_marker(self) -> None:
        with pytest.raises(InvalidArgumentError):
            resolve_module(None)

    def test_marker_without_module(self) -> None:
        with pytest.raises(ResolutionError):
            resolve_module(42)

    def test_marker_with_unimportable_module(self) -> None:
        class Orphan:
            pass

        Orphan.__module__ = "no_such_package.orphans"
        with pytest.raises(ResolutionError, match="Orphan"):
            resolve_module(Orphan)

    def test_marker_with_failing_module(self, write_module) -> None:
        write_module("failing_marks.py", "raise RuntimeError('kaput')\n")

        class Stray:
            pass

        Stray.__module__ = "failing_marks"
        with pytest.raises(ResolutionError, match="kaput"):
            resolve_module(Stray)
