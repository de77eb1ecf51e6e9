"""Load cabin, guest and booking seed lists from JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from demo_reset.domain.errors import SeedDataError
from demo_reset.domain.models import BookingSeed, CabinSeed, GuestSeed
from demo_reset.utils.logger import get_logger


logger = get_logger(__name__)

SEED_FILES = ("cabins.json", "guests.json", "bookings.json")


@dataclass(frozen=True)
class SeedData:
    cabins: tuple[CabinSeed, ...]
    guests: tuple[GuestSeed, ...]
    bookings: tuple[BookingSeed, ...]


def _read_json_list(path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SeedDataError(f"seed file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SeedDataError(f"seed file {path.name} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise SeedDataError(f"seed file {path.name} must contain a JSON array")
    return payload


def _parse_absolute_date(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _read_flag(row: dict[str, Any], key: str) -> bool:
    value = row.get(key, False)
    if not isinstance(value, bool):
        raise SeedDataError(f"{key} must be a JSON boolean, got {value!r}")
    return value


def parse_cabins(rows: list[dict[str, Any]]) -> tuple[CabinSeed, ...]:
    return tuple(
        CabinSeed(
            ordinal=ordinal,
            name=row["name"],
            max_capacity=int(row["max_capacity"]),
            regular_price=row["regular_price"],
            discount=row.get("discount", 0),
            description=row.get("description", ""),
            image=row.get("image", ""),
        )
        for ordinal, row in enumerate(rows, start=1)
    )


def parse_guests(rows: list[dict[str, Any]]) -> tuple[GuestSeed, ...]:
    return tuple(
        GuestSeed(
            ordinal=ordinal,
            full_name=row["full_name"],
            email=row["email"],
            nationality=row.get("nationality", ""),
            national_id=row.get("national_id", ""),
            country_flag=row.get("country_flag", ""),
        )
        for ordinal, row in enumerate(rows, start=1)
    )


def parse_bookings(rows: list[dict[str, Any]]) -> tuple[BookingSeed, ...]:
    return tuple(
        BookingSeed(
            ordinal=ordinal,
            guest_ordinal=int(row["guest_id"]),
            cabin_ordinal=int(row["cabin_id"]),
            created_offset=int(row.get("created_offset", 0)),
            start_offset=int(row.get("start_offset", 0)),
            end_offset=int(row.get("end_offset", 0)),
            num_guests=int(row["num_guests"]),
            has_breakfast=_read_flag(row, "has_breakfast"),
            is_paid=_read_flag(row, "is_paid"),
            observations=row.get("observations", ""),
            start_date=_parse_absolute_date(row.get("start_date")),
            end_date=_parse_absolute_date(row.get("end_date")),
        )
        for ordinal, row in enumerate(rows, start=1)
    )


def load_seed_data(directory: Path) -> SeedData:
    """Read the three seed files from ``directory``."""
    directory = Path(directory)
    cabins_rows, guests_rows, bookings_rows = (
        _read_json_list(directory / filename) for filename in SEED_FILES
    )
    try:
        seed_data = SeedData(
            cabins=parse_cabins(cabins_rows),
            guests=parse_guests(guests_rows),
            bookings=parse_bookings(bookings_rows),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SeedDataError(f"malformed seed record in {directory}: {exc!r}") from exc

    logger.info(
        "Loaded seed data: %s cabins, %s guests, %s bookings",
        len(seed_data.cabins),
        len(seed_data.guests),
        len(seed_data.bookings),
    )
    return seed_data
