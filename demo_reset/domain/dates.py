"""Day-offset arithmetic and calendar predicates against a fixed clock."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone


SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class ResetClock:
    """The single "now" shared by every date computation in one run."""

    now: datetime

    def __post_init__(self) -> None:
        if self.now.tzinfo is None:
            raise ValueError("ResetClock.now must be timezone-aware")

    @classmethod
    def capture(cls) -> "ResetClock":
        return cls(now=datetime.now(timezone.utc))

    @property
    def today(self) -> date:
        return self.now.astimezone(timezone.utc).date()


def date_from_offset(clock: ResetClock, offset_days: int, include_time: bool = False) -> datetime:
    """Shift ``clock.now`` by whole days; truncate to midnight UTC unless ``include_time``."""
    shifted = clock.now.astimezone(timezone.utc) + timedelta(days=offset_days)
    if not include_time:
        shifted = shifted.replace(hour=0, minute=0, second=0, microsecond=0)
    return shifted


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from ``earlier`` to ``later``; halves round up."""
    return math.floor((later - earlier).total_seconds() / SECONDS_PER_DAY + 0.5)


def is_today(clock: ResetClock, moment: datetime) -> bool:
    return moment.astimezone(timezone.utc).date() == clock.today


def is_past_strict(clock: ResetClock, moment: datetime) -> bool:
    """Earlier than now and on an earlier UTC calendar day."""
    return moment < clock.now and not is_today(clock, moment)


def is_future_strict(clock: ResetClock, moment: datetime) -> bool:
    """Later than now and on a later UTC calendar day."""
    return moment > clock.now and not is_today(clock, moment)


def is_today_or_future(clock: ResetClock, moment: datetime) -> bool:
    return moment > clock.now or is_today(clock, moment)
