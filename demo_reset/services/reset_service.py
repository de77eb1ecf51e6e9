"""Ordered wipe-and-reseed workflow for the hosted demo environment.

Phases run strictly one after another and each must succeed before the next
starts:

1. delete bookings (they reference guests and cabins)
2. delete guests
3. delete cabins
4. insert cabins, insert guests
5. resolve and insert bookings

There is no rollback. A failure in phase 5 leaves cabins and guests in place
without bookings; re-running the whole reset is always safe because phases
1-3 clear every table first.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from demo_reset.domain.dates import ResetClock, date_from_offset
from demo_reset.domain.errors import DemoResetError, ResetPhaseError
from demo_reset.domain.identifiers import build_ordinal_map, resolve_ordinal
from demo_reset.domain.models import BookingSeed, CabinSeed, ResolvedBooking
from demo_reset.domain.pricing import derive_pricing, derive_status
from demo_reset.repository.data_repository import DataRepository, PersistenceService
from demo_reset.repository.seed_loader import SeedData, load_seed_data
from demo_reset.utils.config import Settings, get_settings
from demo_reset.utils.logger import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

PHASE_LOAD_SEEDS = "load seed data"
PHASE_DELETE_BOOKINGS = "delete bookings"
PHASE_DELETE_GUESTS = "delete guests"
PHASE_DELETE_CABINS = "delete cabins"
PHASE_INSERT_CABINS = "insert cabins"
PHASE_INSERT_GUESTS = "insert guests"
PHASE_INSERT_BOOKINGS = "insert bookings"

DELETE_ORDER = (
    (PHASE_DELETE_BOOKINGS, "bookings"),
    (PHASE_DELETE_GUESTS, "guests"),
    (PHASE_DELETE_CABINS, "cabins"),
)


@dataclass(frozen=True)
class ResetReport:
    started_at: datetime
    completed_phases: list[str]
    cabins_inserted: int
    guests_inserted: int
    bookings_inserted: int
    status_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "completed_phases": list(self.completed_phases),
            "cabins_inserted": self.cabins_inserted,
            "guests_inserted": self.guests_inserted,
            "bookings_inserted": self.bookings_inserted,
            "status_counts": dict(self.status_counts),
        }


def resolve_booking(
    seed: BookingSeed,
    clock: ResetClock,
    cabins: Sequence[CabinSeed],
    cabin_ids: Mapping[int, int],
    guest_ids: Mapping[int, int],
    breakfast_price: float,
) -> ResolvedBooking:
    """Turn one booking seed into the record that gets persisted."""
    cabin_id = resolve_ordinal("cabin", cabin_ids, seed.cabin_ordinal)
    guest_id = resolve_ordinal("guest", guest_ids, seed.guest_ordinal)
    cabin = cabins[seed.cabin_ordinal - 1]

    start_date = seed.start_date
    if start_date is None:
        start_date = date_from_offset(clock, seed.start_offset)
    end_date = seed.end_date
    if end_date is None:
        end_date = date_from_offset(clock, seed.end_offset)
    created_at = date_from_offset(clock, seed.created_offset, include_time=True)

    pricing = derive_pricing(
        cabin=cabin,
        start=start_date,
        end=end_date,
        num_guests=seed.num_guests,
        has_breakfast=seed.has_breakfast,
        breakfast_price=breakfast_price,
    )

    return ResolvedBooking(
        guest_id=guest_id,
        cabin_id=cabin_id,
        created_at=created_at,
        start_date=start_date,
        end_date=end_date,
        num_nights=pricing.num_nights,
        num_guests=seed.num_guests,
        cabin_price=pricing.cabin_price,
        extras_price=pricing.extras_price,
        total_price=pricing.total_price,
        status=derive_status(clock, start_date, end_date),
        has_breakfast=seed.has_breakfast,
        is_paid=seed.is_paid,
        observations=seed.observations,
    )


def resolve_bookings(
    seed_data: SeedData,
    clock: ResetClock,
    cabin_ids: Mapping[int, int],
    guest_ids: Mapping[int, int],
    breakfast_price: float,
) -> list[ResolvedBooking]:
    return [
        resolve_booking(
            seed,
            clock,
            seed_data.cabins,
            cabin_ids,
            guest_ids,
            breakfast_price,
        )
        for seed in seed_data.bookings
    ]


class DemoResetService:
    """Runs the reset phases against a persistence service."""

    def __init__(
        self,
        repository: Optional[PersistenceService] = None,
        settings: Optional[Settings] = None,
        seed_data: Optional[SeedData] = None,
        now_provider: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._seed_data = seed_data
        self._now_provider = now_provider or (lambda: datetime.now(timezone.utc))
        self._lock = RLock()

    def _capture_clock(self) -> ResetClock:
        return ResetClock(now=self._now_provider())

    def _load_seed_data(self) -> SeedData:
        if self._seed_data is None:
            self._seed_data = load_seed_data(self._settings.seed_directory)
        return self._seed_data

    def _run_phase(self, phase: str, operation: Callable[..., T], *args: Any) -> T:
        logger.info("Phase started: %s", phase)
        try:
            result = operation(*args)
        except ResetPhaseError:
            raise
        except DemoResetError as exc:
            logger.error("Phase failed: %s (%s)", phase, exc)
            raise ResetPhaseError(phase, str(exc)) from exc
        except Exception as exc:
            logger.exception("Phase failed unexpectedly: %s", phase)
            raise ResetPhaseError(phase, f"{type(exc).__name__}: {exc}") from exc
        logger.info("Phase completed: %s", phase)
        return result

    def _insert_base_records(
        self,
        table: str,
        kind: str,
        seeds: Sequence[Any],
    ) -> Mapping[int, int]:
        assigned_ids = self._repository.bulk_insert(
            table,
            [seed.to_record() for seed in seeds],
        )
        return build_ordinal_map(kind, len(seeds), assigned_ids)

    def _insert_bookings(
        self,
        seed_data: SeedData,
        clock: ResetClock,
        cabin_ids: Mapping[int, int],
        guest_ids: Mapping[int, int],
    ) -> list[ResolvedBooking]:
        bookings = resolve_bookings(
            seed_data,
            clock,
            cabin_ids,
            guest_ids,
            self._settings.breakfast_price,
        )
        self._repository.bulk_insert("bookings", [booking.to_record() for booking in bookings])
        return bookings

    def preview_bookings(self) -> list[ResolvedBooking]:
        """Derive bookings without writing, with ordinals standing in for ids."""
        seed_data = self._load_seed_data()
        clock = self._capture_clock()
        cabin_ids = build_ordinal_map(
            "cabin",
            len(seed_data.cabins),
            [cabin.ordinal for cabin in seed_data.cabins],
        )
        guest_ids = build_ordinal_map(
            "guest",
            len(seed_data.guests),
            [guest.ordinal for guest in seed_data.guests],
        )
        return resolve_bookings(
            seed_data,
            clock,
            cabin_ids,
            guest_ids,
            self._settings.breakfast_price,
        )

    def reset_demo(self) -> ResetReport:
        """Wipe and repopulate cabins, guests and bookings.

        Raises ``ResetPhaseError`` naming the first phase that failed. Concurrent
        calls run one after another.
        """
        with self._lock:
            return self._reset_demo_locked()

    def _reset_demo_locked(self) -> ResetReport:
        clock = self._capture_clock()
        logger.info("Resetting demo data (now=%s)", clock.now.isoformat())

        seed_data = self._run_phase(PHASE_LOAD_SEEDS, self._load_seed_data)
        completed_phases: list[str] = []

        for phase, table in DELETE_ORDER:
            self._run_phase(phase, self._repository.delete_all, table)
            completed_phases.append(phase)

        cabin_ids = self._run_phase(
            PHASE_INSERT_CABINS,
            self._insert_base_records,
            "cabins",
            "cabin",
            seed_data.cabins,
        )
        completed_phases.append(PHASE_INSERT_CABINS)

        guest_ids = self._run_phase(
            PHASE_INSERT_GUESTS,
            self._insert_base_records,
            "guests",
            "guest",
            seed_data.guests,
        )
        completed_phases.append(PHASE_INSERT_GUESTS)

        bookings = self._run_phase(
            PHASE_INSERT_BOOKINGS,
            self._insert_bookings,
            seed_data,
            clock,
            cabin_ids,
            guest_ids,
        )
        completed_phases.append(PHASE_INSERT_BOOKINGS)

        report = ResetReport(
            started_at=clock.now,
            completed_phases=completed_phases,
            cabins_inserted=len(cabin_ids),
            guests_inserted=len(guest_ids),
            bookings_inserted=len(bookings),
            status_counts=dict(Counter(booking.status for booking in bookings)),
        )
        logger.info("Demo reset complete: %s bookings inserted", report.bookings_inserted)
        return report
