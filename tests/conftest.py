"""Shared fixtures for Bonsai recurrence tests."""

from datetime import date

import pytest

from bonsai_recurrence.models import (
    DailyRule,
    MonthByWeekRule,
    MonthOnDateRule,
    RecurrencePattern,
    WeeklyRule,
    YearlyRule,
)

from tests.helpers import make_date_range

# One pattern per rule shape, plus the interval/until/checklist edge cases.
SAMPLE_PATTERNS: dict[str, RecurrencePattern] = {
    "daily": RecurrencePattern(DailyRule()),
    "every_3_days": RecurrencePattern(DailyRule(), interval=3),
    "weekly_no_days": RecurrencePattern(WeeklyRule()),
    "weekly_mon_thu": RecurrencePattern(WeeklyRule(frozenset({"MO", "TH"}))),
    "biweekly_mon": RecurrencePattern(WeeklyRule(frozenset({"MO"})), interval=2),
    "triweekly_weekend": RecurrencePattern(
        WeeklyRule(frozenset({"SA", "SU"})), interval=3
    ),
    "monthly_2nd": RecurrencePattern(MonthOnDateRule(2)),
    "monthly_31st": RecurrencePattern(MonthOnDateRule(31)),
    "monthly_last_day": RecurrencePattern(MonthOnDateRule(-1)),
    "quarterly_15th": RecurrencePattern(MonthOnDateRule(15), interval=3),
    "monthly_second_tuesday": RecurrencePattern(MonthByWeekRule(2, "TU")),
    "monthly_fifth_friday": RecurrencePattern(MonthByWeekRule(5, "FR")),
    "bimonthly_first_sunday": RecurrencePattern(MonthByWeekRule(1, "SU"), interval=2),
    "yearly_feb_29": RecurrencePattern(YearlyRule(2, 29)),
    "yearly_last_day_feb": RecurrencePattern(YearlyRule(2, -1), interval=2),
    "bounded_daily": RecurrencePattern(
        DailyRule(), until=date(2025, 3, 31), reopen_checklist=True
    ),
}


@pytest.fixture(params=sorted(SAMPLE_PATTERNS), ids=sorted(SAMPLE_PATTERNS))
def sample_pattern(request: pytest.FixtureRequest) -> RecurrencePattern:
    """Each representative pattern in turn."""
    return SAMPLE_PATTERNS[request.param]


@pytest.fixture
def sweep_dates() -> list[date]:
    """Every date of 2023-2025 (spans a leap year and both year boundaries)."""
    return make_date_range(date(2023, 1, 1), date(2025, 12, 31))
