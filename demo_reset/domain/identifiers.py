"""Translate seed ordinals into identifiers assigned by storage."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from demo_reset.domain.errors import IdentifierIntegrityError, OrdinalOutOfRangeError


def build_ordinal_map(
    kind: str,
    seed_count: int,
    assigned_ids: Sequence[int],
) -> Mapping[int, int]:
    """Map ordinal ``k`` (1-based) to the ``k``-th assigned identifier.

    ``assigned_ids`` must be in insertion order (ascending id order is the
    accepted proxy). The returned mapping is read-only.
    """
    if len(assigned_ids) != seed_count:
        raise IdentifierIntegrityError(
            f"{kind}: expected {seed_count} assigned ids, got {len(assigned_ids)}"
        )
    if len(set(assigned_ids)) != len(assigned_ids):
        raise IdentifierIntegrityError(f"{kind}: assigned ids are not unique")

    return MappingProxyType(
        {ordinal: int(assigned_id) for ordinal, assigned_id in enumerate(assigned_ids, start=1)}
    )


def resolve_ordinal(kind: str, ordinal_map: Mapping[int, int], ordinal: int) -> int:
    try:
        return ordinal_map[ordinal]
    except KeyError:
        raise OrdinalOutOfRangeError(
            f"{kind} ordinal {ordinal} is outside [1, {len(ordinal_map)}]"
        ) from None
