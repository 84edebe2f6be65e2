"""Type definitions for Bonsai recurrence data structures.

TypedDicts describe the dict shapes that cross the package boundary: the
decoded storage record and the per-engine limit overrides. Runtime values
inside the engine are the frozen dataclasses in models.py.

IMPORTANT: This file must NOT import from engines/, codec.py or
data_builders.py to avoid circular dependencies.
Only import from const.py (constants) and typing (type machinery).

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of stored
records is done by the voluptuous schema in codec.py.
"""

from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
WeekdayCode = str  # "SU", "MO", ... "SA"
Frequency = Literal["day", "week", "month", "year"]


# =============================================================================
# Storage Record
# =============================================================================


class PatternData(TypedDict):
    """Decoded recurrence_pattern record, keys as stored.

    Selector keys are present only for the frequencies that use them:
    byDay for week (list) and month by-week (single code), byMonthDay for
    month on-date and year, bySetPos for month by-week, byMonth for year.
    """

    freq: Frequency
    interval: int
    byDay: NotRequired[list[WeekdayCode] | WeekdayCode]
    byMonthDay: NotRequired[int]
    bySetPos: NotRequired[int]
    byMonth: NotRequired[int]
    until: ISODate | None
    reopenChecklist: NotRequired[bool]


# =============================================================================
# Configuration
# =============================================================================


class ScheduleLimits(TypedDict, total=False):
    """Iteration limit overrides for RecurrenceEngine in schedule_engine.py.

    All fields are optional (total=False); absent keys use const.py defaults.
    """

    weekly_scan_days: int  # Day-search window for weekly patterns (default: 60)
    max_backward_steps: int  # Backward walk cap for range enumeration (default: 100)
    max_forward_steps: int  # Forward walk cap for range enumeration (default: 500)
