"""RowMap exception hierarchy.

All exceptions are RowMap-specific. Import, I/O and construction failures
raised by Python itself are wrapped before they reach callers.
"""

from __future__ import annotations


class RowMapError(Exception):
    """Base exception for all RowMap errors."""


class InvalidArgumentError(RowMapError, ValueError):
    """Raised when a required source or sink reference is missing or unusable."""

    def __init__(self, argument: str, detail: str = "must not be None") -> None:
        self.argument = argument
        super().__init__(f"Invalid argument '{argument}': {detail}")


# --- Sources ---


class SourceError(RowMapError):
    """Base for mapping source errors."""


class ResolutionError(SourceError):
    """Raised when a marker cannot be resolved to its defining module."""

    def __init__(self, marker: object, detail: str) -> None:
        self.marker = marker
        super().__init__(f"Cannot resolve module of {marker!r}: {detail}")


class ScanError(SourceError):
    """Raised when a module cannot be scanned for mapping definitions."""

    def __init__(self, module_name: str, detail: str) -> None:
        self.module_name = module_name
        super().__init__(f"Failed to scan module '{module_name}': {detail}")


# --- Mapping ---


class MappingError(RowMapError):
    """Base for mapping errors."""


class MappingDefinitionError(MappingError):
    """Raised when a ClassMap describes an invalid mapping."""


class IngestError(MappingError):
    """Raised when a mapping type cannot be accepted by the persistence model."""

    def __init__(self, mapping_type: object, detail: str) -> None:
        self.mapping_type = mapping_type
        name = getattr(mapping_type, "__qualname__", None) or repr(mapping_type)
        super().__init__(f"Cannot ingest mapping {name}: {detail}")


class ColumnMismatchError(MappingError):
    """Raised when required fields cannot be mapped from row columns."""

    def __init__(self, target_class: str, missing_fields: list[str]) -> None:
        self.target_class = target_class
        self.missing_fields = missing_fields
        super().__init__(f"Cannot map to {target_class}: missing fields {missing_fields}")


class PairingError(MappingError):
    """Raised when a many-to-many pairing strategy returns an unknown side."""


# --- Conventions ---


class ConventionError(RowMapError):
    """Raised when a convention cannot be registered or applied."""


# --- Export ---


class ExportError(RowMapError):
    """Raised when mapping markup cannot be written to its destination."""

    def __init__(self, destination: str, detail: str) -> None:
        self.destination = destination
        super().__init__(f"Failed to export mappings to {destination}: {detail}")


# --- Apply ---


class ApplyError(RowMapError):
    """Base for errors raised while applying mappings to a configuration."""


class DuplicateMappingError(ApplyError):
    """Raised when two class mappings target the same entity."""

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"Duplicate class mapping for entity '{entity_name}'")


class ContainerStateError(RowMapError):
    """Raised on invalid container lifecycle transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} container in state '{current_state}'")
