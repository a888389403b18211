"""Timezone-safe mapping from calendar dates to plan days."""

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from weight_cut_tracker.domain.analytics import DayState, DayStatus
from weight_cut_tracker.domain.errors import InvalidDateError

_DATE_PREFIX = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:$|[T\s])")


def parse_calendar_date(value: str | date) -> date:
    """Return the calendar date of a ``YYYY-MM-DD`` prefix.

    Only the year, month and day are read; any time or offset that follows is
    ignored so the day never shifts across a timezone boundary.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)
    match = _DATE_PREFIX.match(value)
    if match is None:
        raise InvalidDateError(value)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(value) from exc


def day_state(start_date: str | date, total_days: int, today: str | date) -> DayState:
    """Return whether the timeline is pending, active on a day, or completed."""
    start = parse_calendar_date(start_date)
    current = parse_calendar_date(today)
    day_index = (current - start).days
    if day_index < 0:
        return DayState(status=DayStatus.PENDING, total_days=total_days)
    if day_index >= total_days:
        return DayState(status=DayStatus.COMPLETED, total_days=total_days)
    return DayState(
        status=DayStatus.ACTIVE, total_days=total_days, day_index=day_index
    )


def today_in(timezone_name: str) -> date:
    """Return the current calendar date in the given IANA timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
