# File: formatter.py
"""Human-readable recurrence descriptions for tooltips and pickers.

English only. An interval of 1 drops the numeral ("Every week"), larger
intervals pluralize the unit ("Every 2 weeks").
"""

from __future__ import annotations

from datetime import date

from . import const
from .models import (
    DailyRule,
    MonthByWeekRule,
    MonthOnDateRule,
    RecurrencePattern,
    WeeklyRule,
    YearlyRule,
)


def ordinal(day: int) -> str:
    """Return a day number with its English ordinal suffix.

    Examples:
        ordinal(1) → "1st", ordinal(12) → "12th", ordinal(22) → "22nd"
    """
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _every(interval: int, unit: str) -> str:
    if interval == 1:
        return f"Every {unit}"
    return f"Every {interval} {unit}s"


def _format_until(until: date) -> str:
    return f"{const.MONTH_SHORT_LABELS[until.month - 1]} {until.day}, {until.year}"


def describe(pattern: RecurrencePattern | None, *, include_until: bool = False) -> str:
    """Render a pattern as a short natural-language phrase.

    Args:
        pattern: Pattern to describe, or None (no recurrence → "").
        include_until: Append ", until <date>" for bounded patterns.

    Returns:
        Description text.

    Examples:
        "Every 3 days"
        "Every 2 weeks on Mon, Thu"
        "Every month on the 2nd"
        "Every month on the last day"
        "Every month on the second Tuesday"
        "Every year on Feb 29"
    """
    if pattern is None:
        return const.DISPLAY_EMPTY

    rule = pattern.rule
    n = pattern.interval

    if isinstance(rule, DailyRule):
        text = _every(n, "day")
    elif isinstance(rule, WeeklyRule):
        text = _every(n, "week")
        if rule.days:
            labels = [const.WEEKDAY_SHORT_LABELS[code] for code in rule.ordered_days()]
            text = f"{text} on {', '.join(labels)}"
    elif isinstance(rule, MonthOnDateRule):
        if rule.day == const.LAST_DAY_OF_MONTH:
            day_text = const.DISPLAY_LAST_DAY
        else:
            day_text = ordinal(rule.day)
        text = f"{_every(n, 'month')} on the {day_text}"
    elif isinstance(rule, MonthByWeekRule):
        position = const.SET_POSITION_LABELS[rule.position]
        weekday = const.WEEKDAY_LONG_LABELS[rule.weekday]
        text = f"{_every(n, 'month')} on the {position} {weekday}"
    elif isinstance(rule, YearlyRule):
        month = const.MONTH_SHORT_LABELS[rule.month - 1]
        if rule.day == const.LAST_DAY_OF_MONTH:
            text = f"{_every(n, 'year')} on the {const.DISPLAY_LAST_DAY} of {month}"
        else:
            text = f"{_every(n, 'year')} on {month} {rule.day}"
    else:
        return const.DISPLAY_EMPTY

    if include_until and pattern.until is not None:
        text = f"{text}, until {_format_until(pattern.until)}"
    return text
