"""Mapping settings.

MappingSettings is a Pydantic model carrying the defaults a
PersistenceModel is built with. Pass it explicitly to the container;
there is no process-wide default.
"""

from __future__ import annotations

from pydantic import BaseModel


class MappingSettings(BaseModel):
    """Settings shared by every mapping a persistence model compiles."""

    validate_mappings: bool = True
    default_lazy: bool = True
    default_access: str = "property"
    encoding: str = "utf-8"
    indent: str = "  "
    root_element: str = "rowmap-mapping"
