"""Persistence model - compiles, exports and applies mapping definitions."""

from __future__ import annotations

from rowmap.model.pairing import ManyToManySide, PairingStrategy, default_pairing
from rowmap.model.persistence import PersistenceModel

__all__ = [
    "PersistenceModel",
    "ManyToManySide",
    "PairingStrategy",
    "default_pairing",
]
