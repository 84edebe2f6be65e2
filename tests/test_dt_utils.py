"""Unit tests for utils/dt_utils.py civil-date helpers."""

from datetime import date, datetime, timezone

import pytest

from bonsai_recurrence.utils.dt_utils import (
    add_days,
    add_months,
    clamp_day,
    dt_parse_date,
    last_day_of_month,
    month_start,
    nth_weekday_of_month,
    reattach_time,
    strip_time,
    weekday_of,
    weeks_between,
)

# =============================================================================
# Weekday / Month Facts
# =============================================================================


class TestWeekdayOf:
    """Test weekday code lookup."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (date(2024, 9, 1), "SU"),
            (date(2024, 1, 1), "MO"),
            (date(2024, 10, 1), "TU"),
            (date(2025, 1, 1), "WE"),
            (date(2025, 3, 6), "TH"),
            (date(2024, 11, 1), "FR"),
            (date(2025, 1, 4), "SA"),
        ],
    )
    def test_weekday_codes(self, day: date, expected: str) -> None:
        """Each weekday maps to its two-letter code."""
        assert weekday_of(day) == expected


class TestLastDayOfMonth:
    """Test month length lookup."""

    @pytest.mark.parametrize(
        ("year", "month", "expected"),
        [
            (2024, 2, 29),
            (2025, 2, 28),
            (1900, 2, 28),
            (2000, 2, 29),
            (2025, 4, 30),
            (2025, 12, 31),
        ],
    )
    def test_month_lengths(self, year: int, month: int, expected: int) -> None:
        """Month lengths follow the Gregorian leap rules."""
        assert last_day_of_month(year, month) == expected


class TestClampDay:
    """Test day-of-month clamping."""

    def test_day_within_month_unchanged(self) -> None:
        """A day that exists in the month is returned as-is."""
        assert clamp_day(2025, 3, 15) == 15

    def test_day_31_clamps_in_short_months(self) -> None:
        """Day 31 becomes the last day of a 30-day month."""
        assert clamp_day(2025, 4, 31) == 30

    def test_day_30_clamps_in_leap_february(self) -> None:
        """Day 30 becomes Feb 29 in a leap year."""
        assert clamp_day(2024, 2, 30) == 29

    def test_last_day_sentinel(self) -> None:
        """-1 always means the month's last day."""
        assert clamp_day(2025, 2, -1) == 28
        assert clamp_day(2024, 2, -1) == 29
        assert clamp_day(2025, 1, -1) == 31

    def test_result_never_exceeds_month(self) -> None:
        """Every requested day yields a valid date in every month of 2024-2025."""
        for year in (2024, 2025):
            for month in range(1, 13):
                for requested in [-1, *range(1, 32)]:
                    day = clamp_day(year, month, requested)
                    assert 1 <= day <= last_day_of_month(year, month)
                    if requested != -1:
                        assert day == min(requested, last_day_of_month(year, month))


# =============================================================================
# Date Arithmetic
# =============================================================================


class TestDateArithmetic:
    """Test day, month and week arithmetic."""

    def test_month_start(self) -> None:
        """month_start returns the 1st of the same month."""
        assert month_start(date(2025, 7, 19)) == date(2025, 7, 1)

    def test_add_days_crosses_year_boundary(self) -> None:
        """Adding days rolls over Dec 31."""
        assert add_days(date(2024, 12, 31), 1) == date(2025, 1, 1)
        assert add_days(date(2025, 1, 1), -1) == date(2024, 12, 31)

    def test_add_months_clamps_end_of_month(self) -> None:
        """Jan 31 + 1 month is Feb 28, not Mar 3."""
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_add_months_negative_and_across_years(self) -> None:
        """Negative months step back across the year boundary."""
        assert add_months(date(2025, 1, 1), -1) == date(2024, 12, 1)
        assert add_months(date(2024, 11, 1), 3) == date(2025, 2, 1)

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [
            (date(2025, 1, 1), date(2025, 1, 1), 0),
            (date(2025, 1, 1), date(2025, 1, 7), 0),
            (date(2025, 1, 1), date(2025, 1, 8), 1),
            (date(2025, 1, 1), date(2025, 1, 14), 1),
            (date(2025, 1, 8), date(2025, 1, 7), -1),
            (date(2025, 1, 15), date(2025, 1, 1), -2),
        ],
    )
    def test_weeks_between_floors(self, start: date, end: date, expected: int) -> None:
        """Partial weeks floor toward negative infinity."""
        assert weeks_between(start, end) == expected


class TestNthWeekdayOfMonth:
    """Test Nth weekday lookup."""

    @pytest.mark.parametrize(
        ("year", "month", "weekday", "position", "expected"),
        [
            (2024, 9, "TU", 2, date(2024, 9, 10)),
            (2024, 9, "SU", 1, date(2024, 9, 1)),
            (2024, 10, "TU", 1, date(2024, 10, 1)),
            (2024, 11, "TU", 2, date(2024, 11, 12)),
            (2024, 12, "TU", 2, date(2024, 12, 10)),
            (2024, 2, "TH", 5, date(2024, 2, 29)),
        ],
    )
    def test_known_dates(
        self, year: int, month: int, weekday: str, position: int, expected: date
    ) -> None:
        """Positions count from the first matching weekday of the month."""
        assert nth_weekday_of_month(year, month, weekday, position) == expected

    def test_fifth_weekday_spills_into_next_month(self) -> None:
        """February 2026 has four Tuesdays; the fifth is Mar 3."""
        assert nth_weekday_of_month(2026, 2, "TU", 5) == date(2026, 3, 3)

    def test_result_matches_weekday_and_offset(self) -> None:
        """The result is the requested weekday, (position - 1) weeks after the first."""
        for month in range(1, 13):
            for code in ("SU", "MO", "TU", "WE", "TH", "FR", "SA"):
                first = nth_weekday_of_month(2025, month, code, 1)
                assert first.month == month
                assert first.day <= 7
                for position in range(1, 6):
                    result = nth_weekday_of_month(2025, month, code, position)
                    assert weekday_of(result) == code
                    assert (result - first).days == 7 * (position - 1)


# =============================================================================
# Parsing / Time-of-day Boundary
# =============================================================================


class TestParsingAndTime:
    """Test date normalization and time-of-day carry-over."""

    def test_parse_date_inputs(self) -> None:
        """Dates, datetimes and ISO strings all normalize to a date."""
        assert dt_parse_date(date(2025, 4, 7)) == date(2025, 4, 7)
        assert dt_parse_date(datetime(2025, 4, 7, 9, 30)) == date(2025, 4, 7)
        assert dt_parse_date("2025-04-07") == date(2025, 4, 7)
        assert dt_parse_date(" 2025-04-07 ") == date(2025, 4, 7)

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "2025-02-30", 42])
    def test_parse_date_rejects(self, value: object) -> None:
        """Unparsable input yields None instead of raising."""
        assert dt_parse_date(value) is None  # type: ignore[arg-type]

    def test_strip_time(self) -> None:
        """The time-of-day is dropped; plain dates pass through."""
        assert strip_time(datetime(2025, 3, 1, 9, 30)) == date(2025, 3, 1)
        assert strip_time(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_reattach_time_keeps_time_and_tz(self) -> None:
        """Time-of-day and tzinfo carry over to the new date."""
        template = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
        result = reattach_time(date(2025, 3, 4), template)
        assert result == datetime(2025, 3, 4, 9, 30, tzinfo=timezone.utc)

    def test_reattach_time_with_plain_date(self) -> None:
        """A plain date template returns the date unchanged."""
        assert reattach_time(date(2025, 3, 4), date(2025, 3, 1)) == date(2025, 3, 4)
