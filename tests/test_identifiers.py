from __future__ import annotations

import pytest

from demo_reset.domain.errors import IdentifierIntegrityError, OrdinalOutOfRangeError
from demo_reset.domain.identifiers import build_ordinal_map, resolve_ordinal


def test_ordinal_maps_to_matching_assigned_position() -> None:
    mapping = build_ordinal_map("guest", 3, [41, 42, 57])

    assert resolve_ordinal("guest", mapping, 1) == 41
    assert resolve_ordinal("guest", mapping, 2) == 42
    assert resolve_ordinal("guest", mapping, 3) == 57


@pytest.mark.parametrize("assigned", [[1, 2], [1, 2, 3, 4], []])
def test_length_mismatch_is_an_integrity_failure(assigned: list[int]) -> None:
    with pytest.raises(IdentifierIntegrityError):
        build_ordinal_map("cabin", 3, assigned)


def test_duplicate_identifiers_are_an_integrity_failure() -> None:
    with pytest.raises(IdentifierIntegrityError):
        build_ordinal_map("cabin", 3, [7, 7, 8])


@pytest.mark.parametrize("ordinal", [0, -1, 4])
def test_ordinal_outside_range_is_rejected(ordinal: int) -> None:
    mapping = build_ordinal_map("cabin", 3, [10, 11, 12])

    with pytest.raises(OrdinalOutOfRangeError, match="cabin ordinal"):
        resolve_ordinal("cabin", mapping, ordinal)


def test_mapping_is_read_only() -> None:
    mapping = build_ordinal_map("guest", 1, [5])

    with pytest.raises(TypeError):
        mapping[1] = 6  # type: ignore[index]


def test_empty_seed_list_yields_empty_mapping() -> None:
    assert dict(build_ordinal_map("guest", 0, [])) == {}
