"""Unit tests for formatter.py human-readable descriptions."""

from datetime import date

import pytest

from bonsai_recurrence.formatter import describe, ordinal
from bonsai_recurrence.models import (
    DailyRule,
    MonthByWeekRule,
    MonthOnDateRule,
    RecurrencePattern,
    WeeklyRule,
    YearlyRule,
)


class TestOrdinal:
    """Test English ordinal suffixes."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (23, "23rd"),
            (30, "30th"),
            (31, "31st"),
        ],
    )
    def test_suffixes(self, day: int, expected: str) -> None:
        """Teens take "th"; otherwise the last digit decides."""
        assert ordinal(day) == expected


class TestDescribe:
    """Test one phrase per rule shape."""

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            (RecurrencePattern(DailyRule()), "Every day"),
            (RecurrencePattern(DailyRule(), interval=3), "Every 3 days"),
            (RecurrencePattern(WeeklyRule()), "Every week"),
            (
                RecurrencePattern(WeeklyRule(frozenset({"TH", "MO"})), interval=2),
                "Every 2 weeks on Mon, Thu",
            ),
            (
                RecurrencePattern(WeeklyRule(frozenset({"SA", "SU"}))),
                "Every week on Sun, Sat",
            ),
            (RecurrencePattern(MonthOnDateRule(2)), "Every month on the 2nd"),
            (
                RecurrencePattern(MonthOnDateRule(21), interval=3),
                "Every 3 months on the 21st",
            ),
            (RecurrencePattern(MonthOnDateRule(-1)), "Every month on the last day"),
            (
                RecurrencePattern(MonthByWeekRule(2, "TU")),
                "Every month on the second Tuesday",
            ),
            (
                RecurrencePattern(MonthByWeekRule(5, "FR"), interval=2),
                "Every 2 months on the fifth Friday",
            ),
            (RecurrencePattern(YearlyRule(2, 29)), "Every year on Feb 29"),
            (RecurrencePattern(YearlyRule(3, 1), interval=2), "Every 2 years on Mar 1"),
            (
                RecurrencePattern(YearlyRule(2, -1)),
                "Every year on the last day of Feb",
            ),
        ],
    )
    def test_phrases(self, pattern: RecurrencePattern, expected: str) -> None:
        """Each rule renders as a short phrase."""
        assert describe(pattern) == expected

    def test_none_is_empty(self) -> None:
        """No recurrence renders as an empty string."""
        assert describe(None) == ""

    def test_until_omitted_by_default(self) -> None:
        """The bound is only shown on request."""
        pattern = RecurrencePattern(DailyRule(), until=date(2025, 3, 31))
        assert describe(pattern) == "Every day"

    def test_include_until(self) -> None:
        """include_until appends the end date."""
        pattern = RecurrencePattern(
            WeeklyRule(frozenset({"MO"})), interval=2, until=date(2025, 3, 31)
        )
        assert (
            describe(pattern, include_until=True)
            == "Every 2 weeks on Mon, until Mar 31, 2025"
        )

    def test_include_until_open_ended(self) -> None:
        """Open-ended patterns have nothing to append."""
        pattern = RecurrencePattern(MonthOnDateRule(15))
        assert describe(pattern, include_until=True) == "Every month on the 15th"

    def test_every_sample_pattern_has_text(
        self, sample_pattern: RecurrencePattern
    ) -> None:
        """Every rule shape yields a non-empty phrase starting with "Every"."""
        assert describe(sample_pattern).startswith("Every ")
