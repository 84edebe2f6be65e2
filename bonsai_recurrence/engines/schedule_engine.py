"""Schedule Engine for Bonsai recurring tasks, reminders and habits.

Steps a RecurrencePattern one occurrence forward or backward from a reference
date, and enumerates every occurrence inside a calendar window.

- `dateutil.relativedelta` for month/year clamping (Jan 31 + 1 month = Feb 28)
  and for "Nth weekday of the month" lookups
- Plain day arithmetic for daily and weekly patterns

All inputs and outputs are `datetime.date`; callers strip and reattach any
time-of-day (see utils/dt_utils.strip_time / reattach_time).

IMPORTANT: This module must NOT import from codec.py or formatter.py.
Only import from const.py, models.py, type_defs.py and utils.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar

from .. import const
from ..models import (
    DailyRule,
    MonthByWeekRule,
    MonthOnDateRule,
    RecurrencePattern,
    WeeklyRule,
    YearlyRule,
)
from ..utils.dt_utils import (
    add_days,
    add_months,
    clamp_day,
    month_start,
    nth_weekday_of_month,
    weekday_of,
    weeks_between,
)

if TYPE_CHECKING:
    from ..type_defs import ScheduleLimits

FORWARD = 1
BACKWARD = -1


class RecurrenceEngine:
    """Occurrence stepper and range enumerator for one RecurrencePattern.

    Handles all rule types:
    - DailyRule: every N days
    - WeeklyRule: every N weeks, optionally on selected weekdays
    - MonthOnDateRule: every N months on a (clamped) day-of-month
    - MonthByWeekRule: every N months on the Nth weekday
    - YearlyRule: every N years on a (clamped) month/day

    The engine holds only its immutable pattern and limits, so one instance
    may be shared freely between threads.
    """

    DEFAULT_LIMITS: ClassVar[ScheduleLimits] = {
        "weekly_scan_days": const.WEEKLY_SCAN_MAX_DAYS,
        "max_backward_steps": const.MAX_BACKWARD_STEPS,
        "max_forward_steps": const.MAX_FORWARD_STEPS,
    }

    def __init__(
        self, pattern: RecurrencePattern, limits: ScheduleLimits | None = None
    ) -> None:
        """Initialize the recurrence engine.

        Args:
            pattern: Fully specified pattern (see data_builders for defaults).
            limits: Optional ScheduleLimits overrides for the iteration caps.

        Note:
            Non-positive limit values are coerced to 1.
        """
        self._pattern = pattern
        merged: ScheduleLimits = {**self.DEFAULT_LIMITS, **(limits or {})}
        self._weekly_scan_days = max(1, merged[const.LIMIT_WEEKLY_SCAN_DAYS])
        self._max_backward_steps = max(1, merged[const.LIMIT_MAX_BACKWARD_STEPS])
        self._max_forward_steps = max(1, merged[const.LIMIT_MAX_FORWARD_STEPS])

    @property
    def pattern(self) -> RecurrencePattern:
        return self._pattern

    # =========================================================================
    # Public: stepping
    # =========================================================================

    def get_next_occurrence(
        self, reference: date, cycle_start: date | None = None
    ) -> date | None:
        """Calculate the occurrence after a reference date.

        Args:
            reference: Current occurrence (typically the due date).
            cycle_start: Date weekly intervals are counted from when the
                reference is not on a selected weekday. Defaults to reference.

        Returns:
            Next occurrence, strictly after reference, or None once the
            pattern's until bound has passed or the step leaves the
            supported calendar (after year 9999).
        """
        candidate = self._safe_step(reference, FORWARD, cycle_start or reference)
        if candidate is None:
            return None

        until = self._pattern.until
        if until is not None and candidate > until:
            return None
        return candidate

    def get_previous_occurrence(
        self, reference: date, cycle_start: date | None = None
    ) -> date | None:
        """Calculate the occurrence before a reference date.

        Mirror of get_next_occurrence with the direction negated. The until
        bound does not apply when walking backward.

        Returns:
            Previous occurrence, strictly before reference, or None when the
            step leaves the supported calendar (before year 1).
        """
        return self._safe_step(reference, BACKWARD, cycle_start or reference)

    # =========================================================================
    # Public: range enumeration
    # =========================================================================

    def get_occurrences(
        self,
        anchor: date,
        start: date,
        end: date | None = None,
        include_anchor: bool = True,
    ) -> list[date]:
        """Generate occurrences within [start, end] around an anchor date.

        Walks backward from the anchor, then forward, collecting dates inside
        the window. The window's upper bound is the earlier of `end` and the
        pattern's until bound; with neither, the forward walk runs until its
        step cap.

        Args:
            anchor: Known occurrence (typically the due date).
            start: Window start (inclusive).
            end: Window end (inclusive), or None.
            include_anchor: Whether the anchor itself counts as an occurrence.

        Returns:
            Sorted, de-duplicated occurrence dates.
        """
        upper = self._upper_bound(end)
        seen: set[date] = set()

        def in_window(day: date) -> bool:
            return day >= start and (upper is None or day <= upper)

        # Walk backward from the anchor (the anchor itself is visited first)
        current = anchor
        steps = 0
        while steps < self._max_backward_steps:
            steps += 1
            if in_window(current) and (include_anchor or current != anchor):
                seen.add(current)
            if current <= start:
                break
            previous = self.get_previous_occurrence(current)
            if previous is None or previous >= current:
                break
            current = previous
        else:
            const.LOGGER.warning(
                "RecurrenceEngine: Backward walk cap (%s) reached for %s from %s",
                self._max_backward_steps,
                self._pattern.frequency,
                anchor,
            )

        # Walk forward from the anchor
        current = anchor
        steps = 0
        while steps < self._max_forward_steps:
            steps += 1
            following = self.get_next_occurrence(current)
            if following is None or following <= current:
                break
            if in_window(following):
                seen.add(following)
            if upper is not None and following > upper:
                break
            current = following
        else:
            if upper is None:
                const.LOGGER.debug(
                    "RecurrenceEngine: Unbounded forward walk stopped at %s steps",
                    self._max_forward_steps,
                )
            else:
                const.LOGGER.warning(
                    "RecurrenceEngine: Forward walk cap (%s) reached for %s from %s",
                    self._max_forward_steps,
                    self._pattern.frequency,
                    anchor,
                )

        return sorted(seen)

    # =========================================================================
    # Private: per-rule stepping
    # =========================================================================

    def _safe_step(
        self, reference: date, direction: int, cycle_start: date
    ) -> date | None:
        """Step, treating a result outside date.min..date.max as terminal."""
        try:
            return self._step(reference, direction, cycle_start)
        except (OverflowError, ValueError) as err:
            const.LOGGER.debug(
                "RecurrenceEngine: Step from %s leaves the calendar: %s", reference, err
            )
            return None

    def _step(self, reference: date, direction: int, cycle_start: date) -> date:
        """Route to the rule-specific step in the given direction."""
        rule = self._pattern.rule
        interval = self._pattern.interval

        if isinstance(rule, DailyRule):
            return add_days(reference, direction * interval)
        if isinstance(rule, WeeklyRule):
            return self._step_weekly(rule, reference, direction, cycle_start)
        if isinstance(rule, MonthOnDateRule):
            # Stepping from the 1st keeps the requested day: Jan 31 → Feb 29 → Mar 31
            target = add_months(month_start(reference), direction * interval)
            return target.replace(day=clamp_day(target.year, target.month, rule.day))
        if isinstance(rule, MonthByWeekRule):
            return self._step_month_by_week(rule, reference, direction)
        if isinstance(rule, YearlyRule):
            year = reference.year + direction * interval
            return date(year, rule.month, clamp_day(year, rule.month, rule.day))

        raise TypeError(f"Unsupported recurrence rule: {rule!r}")

    def _step_weekly(
        self, rule: WeeklyRule, reference: date, direction: int, cycle_start: date
    ) -> date:
        """Step a weekly rule.

        On a selected weekday (or with no weekdays selected) the step is the
        full interval in weeks, so "every 2 weeks on Monday" skips the Monday
        in between. Off a selected weekday, scan day by day for the first
        selected weekday whose whole weeks since cycle_start is a multiple of
        the interval.
        """
        interval = self._pattern.interval
        full_step = add_days(reference, direction * const.DAYS_PER_WEEK * interval)

        if not rule.days or weekday_of(reference) in rule.days:
            return full_step

        candidate = reference
        for _ in range(self._weekly_scan_days):
            candidate = add_days(candidate, direction)
            if weekday_of(candidate) not in rule.days:
                continue
            if direction == FORWARD:
                weeks = weeks_between(cycle_start, candidate)
            else:
                weeks = weeks_between(candidate, cycle_start)
            if weeks % interval == 0:
                return candidate

        const.LOGGER.warning(
            "RecurrenceEngine: Weekly scan exhausted (%s days) from %s; "
            "falling back to full interval",
            self._weekly_scan_days,
            reference,
        )
        return full_step

    def _step_month_by_week(
        self, rule: MonthByWeekRule, reference: date, direction: int
    ) -> date:
        """Step a by-week monthly rule.

        A fifth-weekday lookup can spill into the following month. Walking
        backward, such a spill may land on or after the reference, so keep
        stepping back whole intervals until the result precedes it.
        """
        interval = self._pattern.interval
        months = direction * interval
        while True:
            target = add_months(month_start(reference), months)
            candidate = nth_weekday_of_month(
                target.year, target.month, rule.weekday, rule.position
            )
            if direction == FORWARD or candidate < reference:
                return candidate
            months -= interval

    def _upper_bound(self, end: date | None) -> date | None:
        """Earlier of the window end and the pattern's until bound."""
        bounds = [bound for bound in (end, self._pattern.until) if bound is not None]
        return min(bounds) if bounds else None


# =============================================================================
# Module-level convenience functions
# =============================================================================


def next_occurrence(
    pattern: RecurrencePattern | None, reference: date
) -> date | None:
    """Calculate the next occurrence of a pattern after a reference date.

    Args:
        pattern: Pattern to step, or None (no recurrence).
        reference: Current occurrence (typically the due date).

    Returns:
        Next occurrence, or None when there is no pattern or it has ended.

    Examples:
        Daily, interval 1, until=Jan 4: Jan 3 → Jan 4; Jan 4 → None
        Monthly on the 31st: Jan 31 → Feb 28 (Feb 29 in a leap year)
    """
    if pattern is None:
        return None
    return RecurrenceEngine(pattern).get_next_occurrence(reference)


def previous_occurrence(
    pattern: RecurrencePattern | None, reference: date
) -> date | None:
    """Calculate the previous occurrence of a pattern before a reference date."""
    if pattern is None:
        return None
    return RecurrenceEngine(pattern).get_previous_occurrence(reference)


def occurrences_in_range(
    pattern: RecurrencePattern | None,
    anchor: date,
    from_date: date,
    until_date: date | None = None,
    *,
    include_anchor: bool = True,
    limits: ScheduleLimits | None = None,
) -> list[date]:
    """List a pattern's occurrences inside a window, for calendar shading.

    Args:
        pattern: Pattern to enumerate, or None (no recurrence).
        anchor: Known occurrence to walk outward from (typically the due date).
        from_date: Window start (inclusive).
        until_date: Window end (inclusive); None falls back to pattern.until.
        include_anchor: Whether the anchor itself counts as an occurrence.
        limits: Optional ScheduleLimits overrides.

    Returns:
        Sorted, de-duplicated occurrence dates.

    Example:
        Monthly on the last day, anchor 2024-01-31, window Jan 1 - Apr 30 2024
        → [2024-01-31, 2024-02-29, 2024-03-31, 2024-04-30]
    """
    if pattern is None:
        return []
    engine = RecurrenceEngine(pattern, limits)
    return engine.get_occurrences(
        anchor, from_date, until_date, include_anchor=include_anchor
    )
