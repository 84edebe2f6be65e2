"""Recurrence pattern construction helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Pattern defaults when a user first picks a frequency
- Filling absent selectors from an anchor (due) date
- Mapping a stored record (PatternData) to a RecurrencePattern

## Key Concepts

### Anchor Reuse
Selectors a user never touched default to the anchor date's own fields:
weekly → the anchor's weekday, monthly → the anchor's day-of-month (or its
weekday for the by-week variant), yearly → the anchor's month and day.
This happens once, here, so the stepper in engines/schedule_engine.py only
ever sees fully specified rules.

### Build Functions
- `build_default_pattern()` - Starting pattern for a newly selected frequency
- `build_monthly_variant()` - Switch a monthly pattern between on-date/by-week
- `resolve_pattern_data()` - Fill absent selectors of a stored record
- `build_pattern()` - Stored record → RecurrencePattern

Consumers:
- codec.py (decode)
- UI collaborators constructing patterns from form input

See Also:
- models.py: The rule union and its invariants
- type_defs.py: PatternData storage shape
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any

from . import const
from .models import (
    DailyRule,
    MonthByWeekRule,
    MonthOnDateRule,
    PatternError,
    RecurrencePattern,
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
)
from .type_defs import PatternData
from .utils.dt_utils import dt_parse_date, weekday_of

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _normalize_by_day(value: Any) -> list[str]:
    """Normalize byDay to a list of codes.

    Weekly records store a list; monthly by-week records store a single code.
    A bare string must not be iterated character by character.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return list(value)


# ==============================================================================
# DEFAULT PATTERNS
# ==============================================================================


def build_default_pattern(frequency: str, anchor: date | None = None) -> RecurrencePattern:
    """Build the starting pattern for a frequency, prefilled from an anchor date.

    Args:
        frequency: One of const.FREQUENCY_OPTIONS
        anchor: Due date the pattern will recur from, if known

    Returns:
        RecurrencePattern with interval 1, no until bound, checklist flag off.

    Raises:
        PatternError: Unknown frequency

    Examples:
        build_default_pattern("week", date(2025, 3, 6)) → weekly on TH
        build_default_pattern("year", date(2024, 2, 29)) → yearly on Feb 29
        build_default_pattern("month") → monthly on the 15th
    """
    rule: RecurrenceRule
    if frequency == const.FREQUENCY_DAY:
        rule = DailyRule()
    elif frequency == const.FREQUENCY_WEEK:
        rule = WeeklyRule(frozenset({weekday_of(anchor)}) if anchor else frozenset())
    elif frequency == const.FREQUENCY_MONTH:
        rule = MonthOnDateRule(anchor.day if anchor else const.DEFAULT_MONTH_DAY)
    elif frequency == const.FREQUENCY_YEAR:
        if anchor:
            rule = YearlyRule(anchor.month, anchor.day)
        else:
            rule = YearlyRule(const.DEFAULT_YEAR_MONTH, const.DEFAULT_YEAR_DAY)
    else:
        raise PatternError("frequency", frequency, "unknown frequency")

    return RecurrencePattern(rule=rule)


def build_monthly_variant(
    pattern: RecurrencePattern, variant: str, anchor: date | None = None
) -> RecurrencePattern:
    """Switch a monthly pattern between the on-date and by-week variants.

    Interval, until and the checklist flag are preserved.

    Args:
        pattern: Existing pattern (any frequency; the result is monthly)
        variant: MONTHLY_VARIANT_ON_DATE or MONTHLY_VARIANT_BY_WEEK
        anchor: Due date used to prefill the new selector

    Returns:
        New RecurrencePattern with the requested variant.

    Raises:
        PatternError: Unknown variant
    """
    rule: RecurrenceRule
    if variant == const.MONTHLY_VARIANT_ON_DATE:
        rule = MonthOnDateRule(anchor.day if anchor else const.DEFAULT_MONTH_DAY)
    elif variant == const.MONTHLY_VARIANT_BY_WEEK:
        weekday = weekday_of(anchor) if anchor else const.DEFAULT_SET_POSITION_WEEKDAY
        rule = MonthByWeekRule(const.DEFAULT_SET_POSITION, weekday)
    else:
        raise PatternError("variant", variant, "unknown monthly variant")

    return replace(pattern, rule=rule)


# ==============================================================================
# STORED RECORDS
# ==============================================================================


def resolve_pattern_data(data: PatternData, anchor: date) -> PatternData:
    """Fill selectors absent from a stored record using the anchor date.

    Weekly records are left as stored (an empty day set is meaningful).
    Present selectors are never overwritten.

    Args:
        data: Validated stored record
        anchor: Reference (due) date the record belongs to

    Returns:
        A new PatternData with every selector its frequency needs.
    """
    resolved: PatternData = {**data}
    freq = data[const.DATA_PATTERN_FREQ]

    if freq == const.FREQUENCY_MONTH:
        if const.DATA_PATTERN_BY_SET_POS in data:
            if not _normalize_by_day(data.get(const.DATA_PATTERN_BY_DAY)):
                resolved[const.DATA_PATTERN_BY_DAY] = weekday_of(anchor)
        elif const.DATA_PATTERN_BY_MONTH_DAY not in data:
            resolved[const.DATA_PATTERN_BY_MONTH_DAY] = anchor.day
    elif freq == const.FREQUENCY_YEAR:
        resolved.setdefault(const.DATA_PATTERN_BY_MONTH, anchor.month)
        resolved.setdefault(const.DATA_PATTERN_BY_MONTH_DAY, anchor.day)

    return resolved


def build_pattern(data: PatternData) -> RecurrencePattern:
    """Map a validated stored record to a RecurrencePattern.

    Args:
        data: Stored record with every selector its frequency needs
              (see resolve_pattern_data)

    Returns:
        RecurrencePattern

    Raises:
        PatternError: A required selector is absent or out of range
    """
    freq = data[const.DATA_PATTERN_FREQ]
    by_day = _normalize_by_day(data.get(const.DATA_PATTERN_BY_DAY))

    rule: RecurrenceRule
    if freq == const.FREQUENCY_DAY:
        rule = DailyRule()
    elif freq == const.FREQUENCY_WEEK:
        rule = WeeklyRule(frozenset(by_day))
    elif freq == const.FREQUENCY_MONTH:
        if const.DATA_PATTERN_BY_SET_POS in data:
            if not by_day:
                raise PatternError(const.DATA_PATTERN_BY_DAY, None, "by-week needs a weekday")
            rule = MonthByWeekRule(data[const.DATA_PATTERN_BY_SET_POS], by_day[0])
        elif const.DATA_PATTERN_BY_MONTH_DAY in data:
            rule = MonthOnDateRule(data[const.DATA_PATTERN_BY_MONTH_DAY])
        else:
            raise PatternError(const.DATA_PATTERN_BY_MONTH_DAY, None, "monthly needs a day")
    elif freq == const.FREQUENCY_YEAR:
        if (
            const.DATA_PATTERN_BY_MONTH not in data
            or const.DATA_PATTERN_BY_MONTH_DAY not in data
        ):
            raise PatternError(const.DATA_PATTERN_BY_MONTH, None, "yearly needs month and day")
        rule = YearlyRule(
            data[const.DATA_PATTERN_BY_MONTH], data[const.DATA_PATTERN_BY_MONTH_DAY]
        )
    else:
        raise PatternError(const.DATA_PATTERN_FREQ, freq, "unknown frequency")

    until_raw = data.get(const.DATA_PATTERN_UNTIL)
    until = dt_parse_date(until_raw)
    if until_raw is not None and until is None:
        raise PatternError(const.DATA_PATTERN_UNTIL, until_raw, "expected YYYY-MM-DD")

    return RecurrencePattern(
        rule=rule,
        interval=data[const.DATA_PATTERN_INTERVAL],
        until=until,
        reopen_checklist=data.get(const.DATA_PATTERN_REOPEN_CHECKLIST, False),
    )


def build_pattern_data(pattern: RecurrencePattern) -> PatternData:
    """Map a RecurrencePattern to its stored record shape.

    Only the selectors the rule uses are written. Weekly days are written
    Sunday-first so equal patterns always produce equal records.
    """
    data: PatternData = {
        const.DATA_PATTERN_FREQ: pattern.frequency,
        const.DATA_PATTERN_INTERVAL: pattern.interval,
        const.DATA_PATTERN_UNTIL: pattern.until.isoformat() if pattern.until else None,
    }
    rule = pattern.rule

    if isinstance(rule, WeeklyRule):
        data[const.DATA_PATTERN_BY_DAY] = rule.ordered_days()
    elif isinstance(rule, MonthOnDateRule):
        data[const.DATA_PATTERN_BY_MONTH_DAY] = rule.day
    elif isinstance(rule, MonthByWeekRule):
        data[const.DATA_PATTERN_BY_SET_POS] = rule.position
        data[const.DATA_PATTERN_BY_DAY] = rule.weekday
    elif isinstance(rule, YearlyRule):
        data[const.DATA_PATTERN_BY_MONTH] = rule.month
        data[const.DATA_PATTERN_BY_MONTH_DAY] = rule.day

    if pattern.reopen_checklist:
        data[const.DATA_PATTERN_REOPEN_CHECKLIST] = True

    return data
