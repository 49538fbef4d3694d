"""RowMap - fluent, code-first mapping configuration."""

from __future__ import annotations

from rowmap.cfg.configuration import Configuration
from rowmap.cfg.fluent_mappings import ContainerState, FluentMappingsContainer
from rowmap.cfg.fluently import FluentConfiguration, fluently
from rowmap.cfg.mapping_configuration import MappingConfiguration
from rowmap.conventions.finder import SetupConventionFinder
from rowmap.conventions.store import ConventionStore
from rowmap.core.exceptions import (
    ApplyError,
    ColumnMismatchError,
    ContainerStateError,
    ConventionError,
    DuplicateMappingError,
    ExportError,
    IngestError,
    InvalidArgumentError,
    MappingDefinitionError,
    MappingError,
    PairingError,
    ResolutionError,
    RowMapError,
    ScanError,
    SourceError,
)
from rowmap.core.scanner import ModuleScanner
from rowmap.core.settings import MappingSettings
from rowmap.mapping.classmap import ClassMap
from rowmap.mapping.mapper import EntityMapper
from rowmap.model.pairing import ManyToManySide, default_pairing
from rowmap.model.persistence import PersistenceModel

__all__ = [
    # Configuration
    "fluently",
    "FluentConfiguration",
    "MappingConfiguration",
    "FluentMappingsContainer",
    "ContainerState",
    "Configuration",
    "MappingSettings",
    # Mapping
    "ClassMap",
    "EntityMapper",
    "ModuleScanner",
    # Model
    "PersistenceModel",
    "ManyToManySide",
    "default_pairing",
    # Conventions
    "ConventionStore",
    "SetupConventionFinder",
    # Exceptions
    "RowMapError",
    "InvalidArgumentError",
    "SourceError",
    "ResolutionError",
    "ScanError",
    "MappingError",
    "MappingDefinitionError",
    "IngestError",
    "ColumnMismatchError",
    "PairingError",
    "ConventionError",
    "ExportError",
    "ApplyError",
    "DuplicateMappingError",
    "ContainerStateError",
]
