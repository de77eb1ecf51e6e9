"""Tests for day-offset arithmetic and calendar predicates."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from demo_reset.domain.dates import (
    ResetClock,
    date_from_offset,
    days_between,
    is_future_strict,
    is_past_strict,
    is_today,
    is_today_or_future,
)


NOW = datetime(2026, 3, 10, 14, 30, 15, tzinfo=timezone.utc)
CLOCK = ResetClock(now=NOW)


def test_clock_rejects_naive_datetime() -> None:
    with pytest.raises(ValueError):
        ResetClock(now=datetime(2026, 3, 10, 14, 30))


def test_date_from_offset_truncates_to_midnight_utc() -> None:
    assert date_from_offset(CLOCK, 3) == datetime(2026, 3, 13, tzinfo=timezone.utc)


def test_date_from_offset_keeps_time_when_requested() -> None:
    assert date_from_offset(CLOCK, -2, include_time=True) == NOW - timedelta(days=2)


def test_date_from_offset_zero_is_start_of_today() -> None:
    assert date_from_offset(CLOCK, 0) == datetime(2026, 3, 10, tzinfo=timezone.utc)


def test_date_from_offset_normalizes_other_timezones_to_utc() -> None:
    plus_five = timezone(timedelta(hours=5))
    clock = ResetClock(now=datetime(2026, 3, 11, 2, 0, tzinfo=plus_five))

    # 02:00 at +05:00 is still 2026-03-10 in UTC.
    assert date_from_offset(clock, 0) == datetime(2026, 3, 10, tzinfo=timezone.utc)


def test_days_between_rounds_to_whole_days() -> None:
    start = datetime(2026, 3, 1, tzinfo=timezone.utc)

    assert days_between(start + timedelta(days=2, hours=14), start) == 3
    assert days_between(start + timedelta(days=2, hours=10), start) == 2
    assert days_between(start, start) == 0


def test_days_between_is_negative_when_arguments_are_reversed() -> None:
    start = datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert days_between(start, start + timedelta(days=4)) == -4


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2026, 3, 10, 0, 0, tzinfo=timezone.utc), True),
        (datetime(2026, 3, 10, 23, 59, 59, tzinfo=timezone.utc), True),
        (datetime(2026, 3, 9, 23, 59, 59, tzinfo=timezone.utc), False),
        (datetime(2026, 3, 11, 0, 0, tzinfo=timezone.utc), False),
    ],
)
def test_is_today_uses_utc_calendar_day(moment: datetime, expected: bool) -> None:
    assert is_today(CLOCK, moment) is expected


def test_earlier_today_is_not_strictly_past() -> None:
    earlier_today = datetime(2026, 3, 10, 1, 0, tzinfo=timezone.utc)

    assert earlier_today < NOW
    assert is_past_strict(CLOCK, earlier_today) is False
    assert is_past_strict(CLOCK, earlier_today - timedelta(days=1)) is True


def test_later_today_is_not_strictly_future() -> None:
    later_today = datetime(2026, 3, 10, 22, 0, tzinfo=timezone.utc)

    assert is_future_strict(CLOCK, later_today) is False
    assert is_future_strict(CLOCK, later_today + timedelta(days=1)) is True


def test_today_or_future_covers_midnight_of_today() -> None:
    assert is_today_or_future(CLOCK, date_from_offset(CLOCK, 0)) is True
    assert is_today_or_future(CLOCK, date_from_offset(CLOCK, -1)) is False
    assert is_today_or_future(CLOCK, date_from_offset(CLOCK, 1)) is True


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(hours=12), 1),
        (timedelta(days=2, hours=12), 3),
        (timedelta(days=3, hours=12), 4),
    ],
)
def test_days_between_rounds_half_days_up(delta: timedelta, expected: int) -> None:
    start = datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert days_between(start + delta, start) == expected
