# File: utils/dt_utils.py
"""Civil-date utilities for the Bonsai recurrence engine.

Pure calendar-date functions with no recurrence awareness. All dates are
`datetime.date` values; no time zones and no time-of-day.

Functions:
    - weekday_of: Weekday code (SU..SA) of a date
    - last_day_of_month: Number of days in a month
    - clamp_day: Clamp a day-of-month (or -1 sentinel) into a month
    - month_start: First day of a date's month
    - add_days: Day arithmetic
    - add_months: Month arithmetic with end-of-month clamping
    - weeks_between: Whole weeks elapsed between two dates (floored)
    - nth_weekday_of_month: Nth occurrence of a weekday counted from the 1st
    - dt_parse_date: Normalize date inputs
    - strip_time: Drop the time-of-day from a due timestamp
    - reattach_time: Put a due timestamp's time-of-day back on a date
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta
import logging

# Third-party date utilities
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from .. import const

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# Weekday code -> dateutil weekday (supports the (+n) nth-occurrence form)
RELATIVEDELTA_WEEKDAYS = {
    "MO": MO,
    "TU": TU,
    "WE": WE,
    "TH": TH,
    "FR": FR,
    "SA": SA,
    "SU": SU,
}


# ==============================================================================
# Weekday / Month Facts
# ==============================================================================


def weekday_of(day: date) -> str:
    """Return the weekday code of a date.

    Example:
        weekday_of(date(2024, 9, 1)) → "SU"
    """
    return const.WEEKDAY_INDEX_TO_CODE[day.weekday()]


def last_day_of_month(year: int, month: int) -> int:
    """Return the last day-of-month (28-31) for the given year and month."""
    return monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp a requested day-of-month into the given month.

    Args:
        year: Target year.
        month: Target month (1-12).
        day: Requested day (1-31) or LAST_DAY_OF_MONTH (-1).

    Returns:
        A valid day-of-month for the target month.

    Examples:
        clamp_day(2025, 4, 31) → 30
        clamp_day(2024, 2, 30) → 29
        clamp_day(2025, 2, -1) → 28
    """
    last = last_day_of_month(year, month)
    if day == const.LAST_DAY_OF_MONTH or day > last:
        return last
    return max(const.MIN_MONTH_DAY, day)


# ==============================================================================
# Date Arithmetic
# ==============================================================================


def month_start(day: date) -> date:
    """Return the first day of the date's month."""
    return day.replace(day=1)


def add_days(day: date, days: int) -> date:
    """Add (or subtract, when negative) a number of days."""
    return day + timedelta(days=days)


def add_months(day: date, months: int) -> date:
    """Add (or subtract) months, clamping to the target month's last day.

    Uses relativedelta so Jan 31 + 1 month = Feb 28 (not Mar 3).
    """
    return day + relativedelta(months=months)


def weeks_between(start: date, end: date) -> int:
    """Return whole weeks from start to end, floored (negative when end < start).

    Examples:
        weeks_between(date(2025, 1, 1), date(2025, 1, 14)) → 1
        weeks_between(date(2025, 1, 8), date(2025, 1, 7)) → -1
    """
    return (end - start).days // const.DAYS_PER_WEEK


def nth_weekday_of_month(year: int, month: int, weekday: str, position: int) -> date:
    """Return the Nth occurrence of a weekday counted from the 1st of a month.

    The first occurrence on or after the 1st, plus (position - 1) weeks. When
    the month has fewer than `position` such weekdays the result falls into
    the following month; that date is returned as-is.

    Args:
        year: Target year.
        month: Target month (1-12).
        weekday: Weekday code (SU..SA).
        position: 1 (first) through 5 (fifth).

    Returns:
        The computed date.

    Examples:
        nth_weekday_of_month(2024, 9, "TU", 2) → date(2024, 9, 10)
        nth_weekday_of_month(2026, 2, "TU", 5) → date(2026, 3, 3)
    """
    first = date(year, month, 1)
    return first + relativedelta(weekday=RELATIVEDELTA_WEEKDAYS[weekday](+position))


# ==============================================================================
# Parsing / Time-of-day Boundary
# ==============================================================================


def dt_parse_date(value: str | date | datetime | None) -> date | None:
    """Normalize a date input into a `datetime.date`.

    Accepts:
    - datetime.date → returned as-is
    - datetime.datetime → its calendar date (time dropped)
    - "2025-04-07" (ISO format string)

    Args:
        value: Input to normalize, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        _LOGGER.debug("dt_parse_date: Could not parse date string: %s", value)
        return None


def strip_time(value: date | datetime) -> date:
    """Return the calendar date of a due value, dropping any time-of-day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def reattach_time(day: date, template: date | datetime) -> date | datetime:
    """Carry the time-of-day (and tzinfo) of `template` over to `day`.

    Callers strip the time from a due timestamp before stepping, then use this
    to rebuild the next due timestamp. A plain date template returns `day`.

    Example:
        reattach_time(date(2025, 3, 4), datetime(2025, 3, 1, 9, 30))
        → datetime(2025, 3, 4, 9, 30)
    """
    if isinstance(template, datetime):
        return template.replace(year=day.year, month=day.month, day=day.day)
    return day
