"""Owner of a configuration's mapping sources."""

from __future__ import annotations

from typing import Any

from rowmap.cfg.fluent_mappings import FluentMappingsContainer
from rowmap.core.settings import MappingSettings


class MappingConfiguration:
    """Groups the mapping containers of one configuration.

    Only containers that had sources added are applied.
    """

    def __init__(self, settings: MappingSettings | None = None) -> None:
        self.fluent_mappings = FluentMappingsContainer(settings)

    @property
    def was_used(self) -> bool:
        return self.fluent_mappings.was_used

    def apply(self, cfg: Any) -> None:
        if self.fluent_mappings.was_used:
            self.fluent_mappings.apply(cfg)
