"""Persistence model.

The PersistenceModel accumulates mapping definitions, compiles them through
conventions and many-to-many pairing, renders them as markup and applies
them to a configuration target.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import os
from collections.abc import Callable, Iterable
from types import ModuleType
from typing import Any, TextIO

from rowmap.conventions.base import Convention
from rowmap.conventions.store import ConventionStore
from rowmap.core.exceptions import IngestError, InvalidArgumentError, MappingDefinitionError
from rowmap.core.scanner import ModuleScanner
from rowmap.core.settings import MappingSettings
from rowmap.mapping.plan import ClassMapping, CollectionMapping
from rowmap.mapping.protocol import MappingProvider
from rowmap.model import writer
from rowmap.model.pairing import PairingStrategy, default_pairing, find_pairs, resolve_pairs

logger = logging.getLogger(__name__)

ConstructionFactory = Callable[[type], Any]


def _default_construction(mapping_type: type) -> Any:
    return mapping_type()


class PersistenceModel:
    """Single aggregation point for every mapping a container contributes.

    Args:
        settings: Compilation and export defaults.
        conventions: Conventions registered before any caller setup.
        pairing_strategy: Chooses the owning side of bidirectional
            many-to-many relationships. Defaults to ``default_pairing``.
        scanner: Finds mapping types inside modules.
    """

    def __init__(
        self,
        settings: MappingSettings | None = None,
        conventions: Iterable[Convention | type[Convention]] = (),
        pairing_strategy: PairingStrategy | None = None,
        scanner: ModuleScanner | None = None,
    ) -> None:
        self.settings = settings or MappingSettings()
        self.conventions = ConventionStore(conventions)
        self.pairing_strategy: PairingStrategy = pairing_strategy or default_pairing
        self.construction_factory: ConstructionFactory = _default_construction
        self.scanner = scanner or ModuleScanner()
        self._providers: list[MappingProvider] = []

    @property
    def providers(self) -> list[MappingProvider]:
        """Ingested mapping definitions, in ingestion order."""
        return list(self._providers)

    def add_mappings_from_module(self, module: ModuleType | str) -> None:
        """Scan a module and ingest every mapping type found in it."""
        mapping_types = self.scanner.scan(module)
        for mapping_type in mapping_types:
            self.add(mapping_type)

    def add(self, mapping: type | MappingProvider) -> None:
        """Ingest a mapping type (instantiated here) or a mapping instance.

        Raises:
            InvalidArgumentError: If mapping is None.
            IngestError: If the type cannot be constructed or does not
                produce a mapping provider.
        """
        if mapping is None:
            raise InvalidArgumentError("mapping")

        if inspect.isclass(mapping):
            try:
                provider = self.construction_factory(mapping)
            except Exception as e:
                raise IngestError(mapping, f"construction failed: {e}") from e
        else:
            provider = mapping

        if not isinstance(provider, MappingProvider):
            raise IngestError(mapping, "not a mapping definition (no build() method)")

        self._providers.append(provider)
        logger.debug("Ingested mapping %r", provider)

    def build_mappings(self) -> list[ClassMapping]:
        """Compile every ingested definition.

        Many-to-many sides are matched on the declared mappings, before
        conventions rename join tables, and resolved once conventions and
        defaults have been applied.
        """
        declared = [p.build() for p in self._providers]
        pairs = find_pairs(declared)

        mappings = [self.conventions.apply(m) for m in declared]
        if self.settings.validate_mappings:
            for mapping in mappings:
                if mapping.id is None:
                    raise MappingDefinitionError(
                        f"{mapping.entity.__qualname__} mapping does not declare an id"
                    )

        mappings = [self._with_defaults(m) for m in mappings]
        return resolve_pairs(mappings, pairs, self.pairing_strategy)

    def _with_defaults(self, mapping: ClassMapping) -> ClassMapping:
        lazy = self.settings.default_lazy
        owner_key = f"{mapping.entity.__name__.lower()}_id"

        id_mapping = mapping.id
        if id_mapping is not None and id_mapping.column is None:
            id_mapping = dataclasses.replace(id_mapping, column=id_mapping.attribute)

        properties = [
            p if p.column is not None else dataclasses.replace(p, column=p.attribute)
            for p in mapping.properties
        ]
        references = [
            dataclasses.replace(
                r,
                column=r.column or f"{r.attribute}_id",
                lazy=lazy if r.lazy is None else r.lazy,
            )
            for r in mapping.references
        ]
        collections: list[CollectionMapping] = []
        for c in mapping.collections:
            changes: dict[str, Any] = {
                "key_column": c.key_column or owner_key,
                "lazy": lazy if c.lazy is None else c.lazy,
            }
            if c.is_many_to_many:
                changes["table"] = c.table or f"{mapping.entity.__name__}To{c.target_class.__name__}"
                changes["child_key_column"] = (
                    c.child_key_column or f"{c.target_class.__name__.lower()}_id"
                )
            collections.append(dataclasses.replace(c, **changes))

        return dataclasses.replace(
            mapping,
            table=mapping.table or mapping.entity.__name__,
            id=id_mapping,
            properties=properties,
            references=references,
            collections=collections,
            access=mapping.access or self.settings.default_access,
        )

    def write_mappings_to(
        self,
        destination: str | os.PathLike[str] | TextIO,
        mappings: list[ClassMapping] | None = None,
    ) -> None:
        """Render compiled mappings to a file path or text stream.

        Pass the result of ``build_mappings`` to export exactly what another
        step received; otherwise the model is compiled again.
        """
        if mappings is None:
            mappings = self.build_mappings()
        writer.write(mappings, destination, self.settings)
        logger.debug("Exported %d mapping(s) to %r", len(mappings), destination)

    def configure(self, cfg: Any, mappings: list[ClassMapping] | None = None) -> None:
        """Apply compiled mappings to a configuration target."""
        if mappings is None:
            mappings = self.build_mappings()
        for mapping in mappings:
            cfg.add_mapping(mapping)
        logger.debug("Applied %d mapping(s) to %r", len(mappings), cfg)
