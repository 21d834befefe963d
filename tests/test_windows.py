"""Tests for reporting windows."""

from datetime import timedelta

from donation_impact.domain.dashboard import DateRange
from donation_impact.services.windows import (
    EARLIEST,
    parse_date_range,
    previous_window,
    resolve_windows,
)
from tests.conftest import NOW, week_window


def test_parse_date_range() -> None:
    assert parse_date_range("weekly") is DateRange.WEEKLY
    assert parse_date_range(" MONTHLY ") is DateRange.MONTHLY
    assert parse_date_range("all_time") is DateRange.ALL_TIME
    assert parse_date_range(None) is DateRange.ALL_TIME
    assert parse_date_range("fortnightly") is DateRange.ALL_TIME


def test_weekly_windows() -> None:
    current, previous = resolve_windows(DateRange.WEEKLY, NOW)

    assert current.start == NOW - timedelta(days=7)
    assert current.end == NOW
    assert previous is not None
    assert previous.end == current.start - timedelta(microseconds=1)
    assert previous.end - previous.start == timedelta(days=7)


def test_monthly_window_is_thirty_days() -> None:
    current, previous = resolve_windows(DateRange.MONTHLY, NOW)

    assert current.end - current.start == timedelta(days=30)
    assert previous is not None
    assert previous.end < current.start


def test_all_time_has_no_previous_window() -> None:
    current, previous = resolve_windows(DateRange.ALL_TIME, NOW)

    assert current.start == EARLIEST
    assert current.end == NOW
    assert previous is None


def test_naive_now_is_read_as_utc() -> None:
    current, _ = resolve_windows(DateRange.WEEKLY, NOW.replace(tzinfo=None))

    assert current.end == NOW


def test_previous_window_does_not_overlap() -> None:
    window = week_window()

    earlier = previous_window(window)

    assert earlier.end < window.start
    assert earlier.end - earlier.start == window.end - window.start
