"""Unit tests for the fluent configuration entry point."""

from __future__ import annotations

from dataclasses import dataclass

from rowmap.cfg.configuration import Configuration
from rowmap.cfg.fluently import fluently
from rowmap.cfg.mapping_configuration import MappingConfiguration
from rowmap.core.settings import MappingSettings
from rowmap.mapping.classmap import ClassMap


@dataclass
class Venue:
    id: int
    city: str


class VenueMap(ClassMap):
    entity = Venue

    def __init__(self) -> None:
        super().__init__()
        self.id("id").map("city")


class TestMappingConfiguration:
    def test_unused_container_is_not_applied(self, configuration: Configuration) -> None:
        mapping_cfg = MappingConfiguration()
        mapping_cfg.apply(configuration)
        assert mapping_cfg.was_used is False
        assert configuration.class_mappings == []

    def test_used_container_is_applied(self, configuration: Configuration) -> None:
        mapping_cfg = MappingConfiguration()
        mapping_cfg.fluent_mappings.add(VenueMap)
        mapping_cfg.apply(configuration)
        assert mapping_cfg.was_used is True
        assert configuration.has_mapping(Venue)

    def test_settings_reach_model(self) -> None:
        settings = MappingSettings(default_access="field")
        mapping_cfg = MappingConfiguration(settings)
        assert mapping_cfg.fluent_mappings.persistence_model.settings is settings


class TestFluently:
    def test_build_configuration(self) -> None:
        cfg = fluently().mappings(lambda m: m.fluent_mappings.add(VenueMap)).build_configuration()
        assert cfg.get_class_mapping(Venue).table == "Venue"

    def test_uses_given_configuration(self, configuration: Configuration) -> None:
        result = (
            fluently(configuration)
            .mappings(lambda m: m.fluent_mappings.add(VenueMap))
            .build_configuration()
        )
        assert result is configuration

    def test_expose_configuration_runs_after_mappings(self) -> None:
        seen: list[int] = []
        (
            fluently()
            .mappings(lambda m: m.fluent_mappings.add(VenueMap))
            .expose_configuration(lambda cfg: seen.append(len(cfg.class_mappings)))
            .build_configuration()
        )
        assert seen == [1]

    def test_without_mappings(self) -> None:
        assert fluently().build_configuration().class_mappings == []

    def test_multiple_mapping_callbacks_share_container(self) -> None:
        containers = []
        (
            fluently()
            .mappings(lambda m: containers.append(m.fluent_mappings))
            .mappings(lambda m: containers.append(m.fluent_mappings))
            .build_configuration()
        )
        assert containers[0] is containers[1]
