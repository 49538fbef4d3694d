"""Fluent configuration entry point.

    cfg = (
        fluently()
        .mappings(lambda m: m.fluent_mappings.add_from_module_of(UserMap))
        .build_configuration()
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rowmap.cfg.configuration import Configuration
from rowmap.cfg.mapping_configuration import MappingConfiguration
from rowmap.core.settings import MappingSettings

logger = logging.getLogger(__name__)


class FluentConfiguration:
    """Builds a Configuration from deferred mapping setup callbacks."""

    def __init__(
        self,
        configuration: Configuration | None = None,
        settings: MappingSettings | None = None,
    ) -> None:
        self._configuration = configuration if configuration is not None else Configuration()
        self._settings = settings
        self._mapping_setups: list[Callable[[MappingConfiguration], Any]] = []
        self._exposures: list[Callable[[Configuration], Any]] = []

    def mappings(self, setup: Callable[[MappingConfiguration], Any]) -> FluentConfiguration:
        """Queue a callback that adds mapping sources."""
        self._mapping_setups.append(setup)
        return self

    def expose_configuration(self, callback: Callable[[Configuration], Any]) -> FluentConfiguration:
        """Queue a callback that receives the configuration after mappings are applied."""
        self._exposures.append(callback)
        return self

    def build_configuration(self) -> Configuration:
        """Run mapping setup, apply the mappings and return the configuration."""
        mapping_cfg = MappingConfiguration(self._settings)
        for setup in self._mapping_setups:
            setup(mapping_cfg)

        if mapping_cfg.was_used:
            mapping_cfg.apply(self._configuration)
        else:
            logger.debug("No mapping sources were added")

        for callback in self._exposures:
            callback(self._configuration)
        return self._configuration


def fluently(
    configuration: Configuration | None = None,
    settings: MappingSettings | None = None,
) -> FluentConfiguration:
    """Start a fluent configuration."""
    return FluentConfiguration(configuration, settings)
