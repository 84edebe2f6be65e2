# File: models.py
"""Recurrence pattern value types.

A RecurrencePattern pairs a frequency-specific rule with the fields shared by
every frequency (interval, until bound, checklist flag). The rule is a tagged
union, so a monthly pattern is either on a date or by week, never both:

    DailyRule()                          every N days
    WeeklyRule(days)                     every N weeks on the selected weekdays
    MonthOnDateRule(day)                 every N months on day 1-31 or -1 (last)
    MonthByWeekRule(position, weekday)   every N months on the Nth weekday
    YearlyRule(month, day)               every N years on month/day

All values are frozen; "changing" a pattern means building a new one
(dataclasses.replace or the builders in data_builders.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from . import const

# =============================================================================
# EXCEPTIONS
# =============================================================================


class PatternError(ValueError):
    """Raised when a pattern is constructed with out-of-range selectors.

    Only construction raises; the codec turns these into "no recurrence".

    Attributes:
        field: Name of the offending field
        value: The rejected value
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        """Initialize PatternError.

        Args:
            field: Name of the offending field
            value: The rejected value
            reason: Human-readable explanation
        """
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: {reason}")


def _check_weekday(field_name: str, code: str) -> None:
    if code not in const.WEEKDAY_CODES:
        raise PatternError(field_name, code, "unknown weekday code")


def _check_month_day(field_name: str, day: int) -> None:
    if day != const.LAST_DAY_OF_MONTH and not (
        const.MIN_MONTH_DAY <= day <= const.MAX_MONTH_DAY
    ):
        raise PatternError(field_name, day, "expected 1-31 or -1 (last day)")


# =============================================================================
# RULES (one per frequency variant)
# =============================================================================


@dataclass(frozen=True)
class DailyRule:
    """Every N days."""

    @property
    def frequency(self) -> str:
        return const.FREQUENCY_DAY


@dataclass(frozen=True)
class WeeklyRule:
    """Every N weeks on a set of weekdays.

    An empty set means no day constraint: the pattern steps whole weeks.
    """

    days: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        days = frozenset(self.days)
        for code in days:
            _check_weekday("days", code)
        object.__setattr__(self, "days", days)

    @property
    def frequency(self) -> str:
        return const.FREQUENCY_WEEK

    def ordered_days(self) -> list[str]:
        """Selected weekday codes in Sunday-first order."""
        return [code for code in const.WEEKDAY_CODES if code in self.days]


@dataclass(frozen=True)
class MonthOnDateRule:
    """Every N months on a day-of-month (-1 = last day)."""

    day: int

    def __post_init__(self) -> None:
        _check_month_day("day", self.day)

    @property
    def frequency(self) -> str:
        return const.FREQUENCY_MONTH


@dataclass(frozen=True)
class MonthByWeekRule:
    """Every N months on the Nth (1-5) occurrence of a weekday."""

    position: int
    weekday: str

    def __post_init__(self) -> None:
        if not const.MIN_SET_POSITION <= self.position <= const.MAX_SET_POSITION:
            raise PatternError("position", self.position, "expected 1-5")
        _check_weekday("weekday", self.weekday)

    @property
    def frequency(self) -> str:
        return const.FREQUENCY_MONTH


@dataclass(frozen=True)
class YearlyRule:
    """Every N years on a month and day (-1 = last day of that month)."""

    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= const.MONTHS_PER_YEAR:
            raise PatternError("month", self.month, "expected 1-12")
        _check_month_day("day", self.day)

    @property
    def frequency(self) -> str:
        return const.FREQUENCY_YEAR


RecurrenceRule = DailyRule | WeeklyRule | MonthOnDateRule | MonthByWeekRule | YearlyRule


# =============================================================================
# PATTERN
# =============================================================================


@dataclass(frozen=True)
class RecurrencePattern:
    """One recurrence rule plus the fields shared by every frequency.

    Attributes:
        rule: Frequency-specific selector (see module docstring)
        interval: Every N units, >= 1
        until: Inclusive end date, or None to recur indefinitely
        reopen_checklist: Owner-level flag, carried through untouched
    """

    rule: RecurrenceRule
    interval: int = const.DEFAULT_INTERVAL
    until: date | None = None
    reopen_checklist: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise PatternError("interval", self.interval, "expected an integer")
        if self.interval < 1:
            raise PatternError("interval", self.interval, "must be at least 1")

    @property
    def frequency(self) -> str:
        return self.rule.frequency
