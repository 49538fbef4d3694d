"""Configuration target protocol.

Anything that accepts compiled class mappings can be the target of
``FluentMappingsContainer.apply``. The container treats it as write-only.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rowmap.mapping.plan import ClassMapping


@runtime_checkable
class MappingTarget(Protocol):
    """Receives the finalized class mappings."""

    def add_mapping(self, mapping: ClassMapping) -> None:
        """Register one compiled class mapping."""
        ...
