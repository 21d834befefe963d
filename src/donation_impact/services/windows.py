"""Current and previous reporting windows."""

from datetime import UTC, datetime, timedelta

from donation_impact.domain.dashboard import DateRange
from donation_impact.domain.impact import PeriodWindow

EARLIEST = datetime.min.replace(tzinfo=UTC)

_DURATIONS = {
    DateRange.WEEKLY: timedelta(days=7),
    DateRange.MONTHLY: timedelta(days=30),
}


def parse_date_range(raw: str | None) -> DateRange:
    """Return the date range for a query value; unknown values mean all time."""
    if raw is None:
        return DateRange.ALL_TIME
    try:
        return DateRange(raw.strip().upper())
    except ValueError:
        return DateRange.ALL_TIME


def resolve_windows(
    date_range: DateRange, now: datetime | None = None
) -> tuple[PeriodWindow, PeriodWindow | None]:
    """Return the current window and the one immediately before it.

    All-time reports start at the earliest representable timestamp and have
    no previous window.
    """
    end = now or datetime.now(tz=UTC)
    if end.tzinfo is None:
        end = end.replace(tzinfo=UTC)
    duration = _DURATIONS.get(date_range)
    if duration is None:
        return PeriodWindow(start=EARLIEST, end=end), None
    current = PeriodWindow(start=end - duration, end=end)
    return current, previous_window(current)


def previous_window(window: PeriodWindow) -> PeriodWindow:
    """Return the equal-length window ending just before window starts."""
    # Both ends are inclusive, so step back one tick to avoid double counting.
    end = window.start - timedelta(microseconds=1)
    return PeriodWindow(start=end - (window.end - window.start), end=end)
