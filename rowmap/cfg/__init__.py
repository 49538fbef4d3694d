"""Configuration layer - mapping containers and configuration targets."""

from __future__ import annotations

from rowmap.cfg.configuration import Configuration
from rowmap.cfg.fluent_mappings import ContainerState, FluentMappingsContainer
from rowmap.cfg.fluently import FluentConfiguration, fluently
from rowmap.cfg.mapping_configuration import MappingConfiguration
from rowmap.cfg.protocol import MappingTarget

__all__ = [
    "Configuration",
    "ContainerState",
    "FluentMappingsContainer",
    "FluentConfiguration",
    "MappingConfiguration",
    "MappingTarget",
    "fluently",
]
