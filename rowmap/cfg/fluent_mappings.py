"""Fluent mappings container.

Collects mapping sources through a chained API and applies them to a
configuration target later, in a single ``apply`` call. Nothing is
scanned, instantiated or compiled until then.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from enum import Enum
from types import ModuleType
from typing import Any, TextIO

from rowmap.conventions.base import Convention
from rowmap.conventions.finder import SetupConventionFinder
from rowmap.core.exceptions import ContainerStateError, InvalidArgumentError
from rowmap.core.scanner import ModuleScanner, resolve_module
from rowmap.core.settings import MappingSettings
from rowmap.model.pairing import PairingStrategy
from rowmap.model.persistence import PersistenceModel

logger = logging.getLogger(__name__)


class ContainerState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"
    APPLIED = "applied"


class FluentMappingsContainer:
    """Container for fluent mappings.

    Registration calls return the container so they can be chained. The
    owner calls ``apply`` exactly once; a second call raises
    ContainerStateError. Sources registered after ``apply`` are kept but
    never applied.

    Args:
        settings: Defaults for the persistence model.
        conventions: Conventions registered before any caller setup.
        pairing: Default many-to-many pairing strategy.
        scanner: Finds mapping types in registered modules.
    """

    def __init__(
        self,
        settings: MappingSettings | None = None,
        *,
        conventions: Iterable[Convention | type[Convention]] = (),
        pairing: PairingStrategy | None = None,
        scanner: ModuleScanner | None = None,
    ) -> None:
        self._modules: list[ModuleType | str] = []
        self._types: list[type] = []
        self._export_path: str | os.PathLike[str] | None = None
        self._export_stream: TextIO | None = None
        self._was_used = False
        self._state = ContainerState.EMPTY
        self._model = PersistenceModel(
            settings=settings,
            conventions=conventions,
            pairing_strategy=pairing,
            scanner=scanner,
        )

    @property
    def persistence_model(self) -> PersistenceModel:
        return self._model

    @property
    def was_used(self) -> bool:
        """Whether any module or mapping type was ever added."""
        return self._was_used

    @property
    def state(self) -> ContainerState:
        return self._state

    @property
    def modules(self) -> tuple[ModuleType | str, ...]:
        return tuple(self._modules)

    @property
    def types(self) -> tuple[type, ...]:
        return tuple(self._types)

    @property
    def export_path(self) -> str | os.PathLike[str] | None:
        return self._export_path

    @property
    def export_stream(self) -> TextIO | None:
        return self._export_stream

    def _register(self) -> None:
        self._was_used = True
        if self._state is ContainerState.APPLIED:
            logger.warning("Mapping source added after apply(); it will not be applied")
        else:
            self._state = ContainerState.POPULATED

    def override_bidirectional_many_to_many_pairing(
        self, strategy: PairingStrategy
    ) -> FluentMappingsContainer:
        """Replace the strategy that picks the owning many-to-many side."""
        self._model.pairing_strategy = strategy
        return self

    def add_from_module_of(self, marker: Any) -> FluentMappingsContainer:
        """Add all fluent mappings in the module that defines ``marker``.

        Raises:
            ResolutionError: If the defining module cannot be determined.
        """
        return self.add_from_module(resolve_module(marker))

    def add_from_module(self, module: ModuleType | str) -> FluentMappingsContainer:
        """Add all fluent mappings in a module or package (scanned on apply)."""
        if module is None:
            raise InvalidArgumentError("module")
        self._modules.append(module)
        self._register()
        return self

    def add(self, mapping_type: type) -> FluentMappingsContainer:
        """Add a single ClassMap type (instantiated on apply)."""
        if mapping_type is None:
            raise InvalidArgumentError("mapping_type")
        self._types.append(mapping_type)
        self._register()
        return self

    def export_to(self, target: str | os.PathLike[str] | TextIO) -> FluentMappingsContainer:
        """Set where generated mapping markup is written.

        A path and a stream are kept separately; if both are set, both
        receive the markup. Streams stay owned by the caller and are never
        closed here.
        """
        if target is None:
            raise InvalidArgumentError("target")
        if isinstance(target, (str, os.PathLike)):
            self._export_path = target
        elif callable(getattr(target, "write", None)):
            self._export_stream = target
        else:
            raise InvalidArgumentError("target", "expected a path or a writable stream")
        return self

    @property
    def conventions(self) -> SetupConventionFinder[FluentMappingsContainer]:
        """Alter convention discovery."""
        return SetupConventionFinder(self, self._model.conventions)

    def apply(self, cfg: Any) -> None:
        """Apply all added mappings to a configuration target.

        Every module and type is ingested before anything is exported. The
        model is compiled once; every export and the target receive that
        same compiled result. The first
        error aborts the remaining steps; nothing is rolled back.

        Raises:
            ContainerStateError: If the container was already applied.
        """
        if self._state is ContainerState.APPLIED:
            raise ContainerStateError(self._state.value, "apply")
        self._state = ContainerState.APPLIED

        for module in self._modules:
            self._model.add_mappings_from_module(module)

        for mapping_type in self._types:
            self._model.add(mapping_type)

        mappings = self._model.build_mappings()

        if self._export_path:
            self._model.write_mappings_to(self._export_path, mappings)

        if self._export_stream is not None:
            self._model.write_mappings_to(self._export_stream, mappings)

        self._model.configure(cfg, mappings)
        logger.debug(
            "Applied %d module(s) and %d type(s)", len(self._modules), len(self._types)
        )

    def construct_by(self, factory: Callable[[type], Any]) -> None:
        """Accept a custom construction mechanism for mapping types."""
        self._model.construction_factory = factory
