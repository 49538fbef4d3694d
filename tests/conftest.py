"""Shared test fixtures."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest

from rowmap.cfg.configuration import Configuration


@pytest.fixture
def configuration() -> Configuration:
    """Empty configuration target."""
    return Configuration()


@pytest.fixture
def module_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary directory on sys.path for generated modules."""
    root = tmp_path / "modules"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))
    return root


@pytest.fixture
def write_module(module_root: Path):
    """Helper to write importable Python modules for scanning.

    Usage:
        write_module("shop/mappings/__init__.py", "from rowmap import ClassMap ...")

    Modules imported from the written packages are dropped from sys.modules
    after the test.
    """
    top_level: set[str] = set()

    def _write(relative_path: str, content: str) -> Path:
        file_path = module_root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        top_level.add(Path(relative_path).parts[0].removesuffix(".py"))
        importlib.invalidate_caches()
        return file_path

    yield _write

    for name in list(sys.modules):
        if name.split(".")[0] in top_level:
            del sys.modules[name]


_SHOP_MODELS = '''
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Customer:
    id: int
    name: str
    email: str | None = None


@dataclass
class Order:
    id: int
    total: float
    customer_id: int | None = None


@dataclass
class Product:
    id: int
    title: str


@dataclass
class Tag:
    id: int
    label: str
'''

_SHOP_MAPPINGS = '''
from rowmap import ClassMap
from shop.models import Customer, Order


class CustomerMap(ClassMap):
    entity = Customer

    def __init__(self) -> None:
        super().__init__()
        self.table("customers").id("id").map("name", nullable=False).map("email", unique=True)
        self.has_many("orders", Order, "customer_id", inverse=True)


class AuditedMap(ClassMap):
    """Shared base without an entity; never picked up by scanning."""


class OrderMap(AuditedMap):
    entity = Order

    def __init__(self) -> None:
        super().__init__()
        self.table("orders").id("id").map("total")
        self.references("customer", Customer, "customer_id")
'''

_SHOP_CATALOG = '''
from rowmap import ClassMap
from shop.models import Product, Tag


class ProductMap(ClassMap):
    entity = Product

    def __init__(self) -> None:
        super().__init__()
        self.table("products").id("id").map("title", length=200)
        self.has_many_to_many("tags", Tag)


class TagMap(ClassMap):
    entity = Tag

    def __init__(self) -> None:
        super().__init__()
        self.table("tags").id("id").map("label")
        self.has_many_to_many("products", Product)
'''


@pytest.fixture
def shop_package(write_module) -> str:
    """Importable "shop" package: models plus mappings split over two modules.

    shop.mappings defines CustomerMap and OrderMap, shop.mappings.catalog
    defines ProductMap and TagMap.
    """
    write_module("shop/__init__.py", "")
    write_module("shop/models.py", _SHOP_MODELS)
    write_module("shop/mappings/__init__.py", _SHOP_MAPPINGS)
    write_module("shop/mappings/catalog.py", _SHOP_CATALOG)
    return "shop"
