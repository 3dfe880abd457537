"""
Calendar-date helpers.

Everything here works on ``datetime.date`` values, never on datetimes, so
adding or subtracting days cannot drift across DST transitions. Functions
that depend on "today" accept an optional ``reference`` date so callers can
inject the clock.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional

from streak_tracker.core.errors import InvalidDateFormatError

CALENDAR_DATE_FORMAT = "%Y-%m-%d"
_CALENDAR_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}\Z")


def today() -> date:
    """Current local wall-clock date."""
    return date.today()


def yesterday(reference: Optional[date] = None) -> date:
    return (reference or today()) - timedelta(days=1)


def tomorrow(reference: Optional[date] = None) -> date:
    return (reference or today()) + timedelta(days=1)


def days_ago(n: int, reference: Optional[date] = None) -> date:
    if n < 0:
        raise ValueError(f"days_ago expects a non-negative day count (got {n})")
    return (reference or today()) - timedelta(days=n)


def day_difference(a: date, b: date) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((a - b).days)


def is_valid(value: object) -> bool:
    """True iff ``value`` is a ``YYYY-MM-DD`` string naming a real date."""
    if not isinstance(value, str) or not _CALENDAR_DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, CALENDAR_DATE_FORMAT)
    except ValueError:
        return False
    return True


def parse_calendar_date(value: object) -> date:
    if not is_valid(value):
        raise InvalidDateFormatError(value if isinstance(value, str) else None)
    return datetime.strptime(value, CALENDAR_DATE_FORMAT).date()


def format_calendar_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None
