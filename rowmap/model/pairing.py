"""Bidirectional many-to-many pairing.

When two entities map many-to-many collections at each other, only one
side owns the join table; the other is written as inverse. Sides are
matched on the declared mappings so that explicitly declared join tables
can disambiguate, and resolved after conventions and defaults so that the
inverse side adopts the owner's final table and key names.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass

from rowmap.core.exceptions import PairingError
from rowmap.mapping.plan import ClassMapping, CollectionMapping

logger = logging.getLogger(__name__)

# (class index, collection index) within a list of class mappings
SideIndex = tuple[int, int]


@dataclass(frozen=True)
class ManyToManySide:
    """One end of a many-to-many relationship."""

    owner: ClassMapping
    collection: CollectionMapping

    @property
    def name(self) -> str:
        return f"{self.owner.entity.__qualname__}.{self.collection.attribute}"


PairingStrategy = Callable[[ManyToManySide, ManyToManySide], ManyToManySide]


def default_pairing(side_a: ManyToManySide, side_b: ManyToManySide) -> ManyToManySide:
    """Pick the owning side.

    A side already declared inverse never owns. Otherwise the side whose
    ``Entity.attribute`` name sorts first owns the join table.
    """
    if side_a.collection.inverse != side_b.collection.inverse:
        return side_b if side_a.collection.inverse else side_a
    return side_a if side_a.name <= side_b.name else side_b


def _tables_conflict(a: CollectionMapping, b: CollectionMapping) -> bool:
    return a.table is not None and b.table is not None and a.table != b.table


def find_pairs(mappings: list[ClassMapping]) -> list[tuple[SideIndex, SideIndex]]:
    """Match many-to-many collections that point at each other."""
    paired: set[SideIndex] = set()
    pairs: list[tuple[SideIndex, SideIndex]] = []

    for ci, mapping in enumerate(mappings):
        for ki, collection in enumerate(mapping.collections):
            if not collection.is_many_to_many or (ci, ki) in paired:
                continue

            candidates: list[SideIndex] = []
            for oi, other in enumerate(mappings):
                if other.entity is not collection.target_class:
                    continue
                for oki, other_collection in enumerate(other.collections):
                    if (oi, oki) == (ci, ki) or (oi, oki) in paired:
                        continue
                    if not other_collection.is_many_to_many:
                        continue
                    if other_collection.target_class is not mapping.entity:
                        continue
                    if _tables_conflict(collection, other_collection):
                        continue
                    candidates.append((oi, oki))

            if len(candidates) > 1 and collection.table is not None:
                candidates = [
                    (oi, oki)
                    for oi, oki in candidates
                    if mappings[oi].collections[oki].table == collection.table
                ]

            if not candidates:
                continue
            if len(candidates) > 1:
                logger.warning(
                    "Cannot pair %s.%s: %d possible other sides",
                    mapping.entity.__qualname__,
                    collection.attribute,
                    len(candidates),
                )
                continue

            paired.update({(ci, ki), candidates[0]})
            pairs.append(((ci, ki), candidates[0]))

    return pairs


def resolve_pairs(
    mappings: list[ClassMapping],
    pairs: list[tuple[SideIndex, SideIndex]],
    strategy: PairingStrategy,
) -> list[ClassMapping]:
    """Make one side of every pair inverse and share the owner's join table."""
    collections = [list(m.collections) for m in mappings]

    for (ai, ak), (bi, bk) in pairs:
        side_a = ManyToManySide(mappings[ai], collections[ai][ak])
        side_b = ManyToManySide(mappings[bi], collections[bi][bk])
        chosen = strategy(side_a, side_b)
        if chosen == side_a:
            owner, (ii, ik) = side_a, (bi, bk)
        elif chosen == side_b:
            owner, (ii, ik) = side_b, (ai, ak)
        else:
            raise PairingError(
                f"Pairing strategy returned {chosen!r}, expected {side_a.name} or {side_b.name}"
            )

        collections[ii][ik] = dataclasses.replace(
            collections[ii][ik],
            table=owner.collection.table,
            key_column=owner.collection.child_key_column,
            child_key_column=owner.collection.key_column,
            inverse=True,
        )
        if owner.collection.inverse:
            ni, nk = (ai, ak) if owner is side_a else (bi, bk)
            collections[ni][nk] = dataclasses.replace(owner.collection, inverse=False)
        logger.debug("Paired %s with %s (owner %s)", side_a.name, side_b.name, owner.name)

    return [
        dataclasses.replace(mapping, collections=collections[i])
        for i, mapping in enumerate(mappings)
    ]
