"""Stay pricing and lifecycle status derivation for seeded bookings."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from demo_reset.domain.dates import (
    ResetClock,
    days_between,
    is_past_strict,
    is_today_or_future,
)
from demo_reset.domain.errors import InvalidStayError, StatusDerivationError
from demo_reset.domain.models import (
    BOOKING_STATUSES,
    STATUS_CHECKED_IN,
    STATUS_CHECKED_OUT,
    STATUS_UNCONFIRMED,
    CabinSeed,
    StayPricing,
)


StatusPredicate = Callable[[ResetClock, datetime, datetime], bool]


def _has_ended(clock: ResetClock, start: datetime, end: datetime) -> bool:
    return is_past_strict(clock, end)


def _not_started(clock: ResetClock, start: datetime, end: datetime) -> bool:
    return is_today_or_future(clock, start)


def _in_progress(clock: ResetClock, start: datetime, end: datetime) -> bool:
    return is_today_or_future(clock, end) and is_past_strict(clock, start)


# Evaluated in order; every matching rule overwrites the previous status.
STATUS_RULES: tuple[tuple[StatusPredicate, str], ...] = (
    (_has_ended, STATUS_CHECKED_OUT),
    (_not_started, STATUS_UNCONFIRMED),
    (_in_progress, STATUS_CHECKED_IN),
)


def derive_status(clock: ResetClock, start: datetime, end: datetime) -> str:
    """Fold ``STATUS_RULES`` left to right, last true rule wins.

    Raises ``StatusDerivationError`` if no rule matched.
    """
    status: Optional[str] = None
    for predicate, candidate in STATUS_RULES:
        if predicate(clock, start, end):
            status = candidate

    if status is None:
        raise StatusDerivationError(
            f"no lifecycle status matched stay {start.isoformat()} -> {end.isoformat()}"
        )
    if status not in BOOKING_STATUSES:
        raise StatusDerivationError(f"unknown lifecycle status {status!r}")
    return status


def count_nights(start: datetime, end: datetime) -> int:
    nights = days_between(end, start)
    if nights < 0:
        raise InvalidStayError(
            f"stay ends before it starts ({start.isoformat()} -> {end.isoformat()})"
        )
    return nights


def derive_pricing(
    cabin: CabinSeed,
    start: datetime,
    end: datetime,
    num_guests: int,
    has_breakfast: bool,
    breakfast_price: float,
) -> StayPricing:
    """Compute nights and the cabin/extras/total price split for one stay."""
    num_nights = count_nights(start, end)
    cabin_price = num_nights * cabin.nightly_rate
    extras_price = num_nights * breakfast_price * num_guests if has_breakfast else 0
    return StayPricing(
        num_nights=num_nights,
        cabin_price=cabin_price,
        extras_price=extras_price,
        total_price=cabin_price + extras_price,
    )
