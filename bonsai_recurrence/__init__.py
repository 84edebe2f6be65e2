"""Bonsai recurrence engine.

Computes when a recurring task, reminder or habit-linked todo next falls due,
lists its occurrences inside a calendar window, and describes the rule in
plain English. Pure and synchronous: no I/O, no persistence, no shared state.

Usage:
    from bonsai_recurrence import decode, next_occurrence

    pattern = decode(row.recurrence_pattern)
    next_due = next_occurrence(pattern, row.due_date)
"""

from .codec import decode, encode
from .data_builders import build_default_pattern, build_monthly_variant
from .engines import (
    RecurrenceEngine,
    next_occurrence,
    occurrences_in_range,
    previous_occurrence,
)
from .formatter import describe
from .models import (
    DailyRule,
    MonthByWeekRule,
    MonthOnDateRule,
    PatternError,
    RecurrencePattern,
    WeeklyRule,
    YearlyRule,
)
from .utils.dt_utils import (
    clamp_day,
    last_day_of_month,
    reattach_time,
    strip_time,
    weekday_of,
)

__all__ = [
    "DailyRule",
    "MonthByWeekRule",
    "MonthOnDateRule",
    "PatternError",
    "RecurrenceEngine",
    "RecurrencePattern",
    "WeeklyRule",
    "YearlyRule",
    "build_default_pattern",
    "build_monthly_variant",
    "clamp_day",
    "decode",
    "describe",
    "encode",
    "last_day_of_month",
    "next_occurrence",
    "occurrences_in_range",
    "previous_occurrence",
    "reattach_time",
    "strip_time",
    "weekday_of",
]
