"""Mapping markup writer.

Renders compiled class mappings as XML, one ``<class>`` element per mapping
in ingestion order.
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, TextIO

from rowmap.core.exceptions import ExportError
from rowmap.core.settings import MappingSettings
from rowmap.mapping.plan import ClassMapping, CollectionMapping


def _qualified(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _set(element: ET.Element, **attributes: Any) -> None:
    """Set attributes, skipping None values. Underscores become dashes."""
    for name, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = _flag(value)
        element.set(name.replace("_", "-"), str(value))


def _collection_element(parent: ET.Element, collection: CollectionMapping) -> None:
    bag = ET.SubElement(parent, "bag")
    _set(
        bag,
        name=collection.attribute,
        table=collection.table if collection.is_many_to_many else None,
        inverse=collection.inverse,
        lazy=collection.lazy,
    )
    _set(ET.SubElement(bag, "key"), column=collection.key_column)
    relation = ET.SubElement(bag, collection.kind.value)
    _set(
        relation,
        **{"class": _qualified(collection.target_class)},
        column=collection.child_key_column if collection.is_many_to_many else None,
    )


def class_element(mapping: ClassMapping) -> ET.Element:
    """Build the ``<class>`` element for one mapping."""
    element = ET.Element("class")
    _set(
        element,
        name=mapping.entity_name,
        table=mapping.table,
        schema=mapping.schema,
        access=mapping.access,
        mutable=False if mapping.read_only else None,
    )

    if mapping.id is not None:
        _set(
            ET.SubElement(element, "id"),
            name=mapping.id.attribute,
            column=mapping.id.column,
            type=mapping.id.type_name,
            generated=mapping.id.generated,
        )

    for prop in mapping.properties:
        _set(
            ET.SubElement(element, "property"),
            name=prop.attribute,
            column=prop.column,
            type=prop.type_name,
            not_null=True if not prop.nullable else None,
            length=prop.length,
            unique=True if prop.unique else None,
        )

    for reference in mapping.references:
        _set(
            ET.SubElement(element, "many-to-one"),
            name=reference.attribute,
            **{"class": _qualified(reference.target_class)},
            column=reference.column,
            lazy=reference.lazy,
        )

    for collection in mapping.collections:
        _collection_element(element, collection)

    return element


def render(mappings: list[ClassMapping], settings: MappingSettings) -> str:
    """Render mappings to an XML document string."""
    root = ET.Element(settings.root_element)
    for mapping in mappings:
        root.append(class_element(mapping))
    ET.indent(root, space=settings.indent)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="{settings.encoding}"?>\n{body}\n'


def write(
    mappings: list[ClassMapping],
    destination: str | os.PathLike[str] | TextIO,
    settings: MappingSettings,
) -> None:
    """Write rendered mappings to a file path or a caller-owned text stream.

    Files are created (with missing parent directories) or overwritten.
    Streams are written to but never closed.

    Raises:
        ExportError: If the destination cannot be written.
    """
    markup = render(mappings, settings)

    if isinstance(destination, (str, os.PathLike)):
        path = Path(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(markup, encoding=settings.encoding)
        except OSError as e:
            raise ExportError(str(path), str(e)) from e
        return

    try:
        destination.write(markup)
    except (OSError, ValueError) as e:
        # ValueError: I/O operation on closed file
        raise ExportError(repr(destination), str(e)) from e
