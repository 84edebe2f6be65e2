# File: codec.py
"""Storage codec for recurrence patterns.

The owning task/reminder/habit row stores a pattern as an opaque TEXT column.
The text is a compact JSON object (keys in const.DATA_PATTERN_*) carrying a
format version. Decoding never raises: empty, malformed or unsupported text
means "no recurrence".
"""

from __future__ import annotations

from datetime import date
import json
from typing import Any

import voluptuous as vol

from . import const
from .data_builders import build_pattern, build_pattern_data, resolve_pattern_data
from .models import PatternError, RecurrencePattern
from .utils.dt_utils import dt_parse_date

# =============================================================================
# FIELD VALIDATORS
# =============================================================================


def coerce_interval(value: Any) -> int:
    """Coerce a stored interval to an integer >= 1.

    Absent, non-numeric, non-finite and non-positive values all become 1.
    """
    if value is None or isinstance(value, bool):
        return const.DEFAULT_INTERVAL
    try:
        interval = int(value)
    except (TypeError, ValueError, OverflowError):
        return const.DEFAULT_INTERVAL
    return max(const.DEFAULT_INTERVAL, interval)


def validate_by_day(value: Any) -> list[str] | str | None:
    """Keep known weekday codes; preserve the list vs single-code shape.

    Returns None when nothing usable remains.
    """
    if isinstance(value, str):
        return value if value in const.WEEKDAY_CODES else None
    if isinstance(value, list):
        return [code for code in value if code in const.WEEKDAY_CODES]
    raise vol.Invalid(f"byDay must be a weekday code or a list of codes: {value!r}")


def validate_month_day(value: Any) -> int:
    """Accept 1-31 or the last-day sentinel (-1)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid(f"byMonthDay must be an integer: {value!r}")
    if value != const.LAST_DAY_OF_MONTH and not (
        const.MIN_MONTH_DAY <= value <= const.MAX_MONTH_DAY
    ):
        raise vol.Invalid(f"byMonthDay out of range: {value}")
    return value


def validate_set_position(value: Any) -> int | None:
    """Return a usable 1-5 position, or None so the record falls back to on-date."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if const.MIN_SET_POSITION <= value <= const.MAX_SET_POSITION:
        return value
    return None


def validate_until(value: Any) -> str | None:
    """Accept null or a YYYY-MM-DD string."""
    if value is None:
        return None
    if not isinstance(value, str) or dt_parse_date(value) is None:
        raise vol.Invalid(f"until must be YYYY-MM-DD: {value!r}")
    return value


# =============================================================================
# SCHEMA
# =============================================================================

PATTERN_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.DATA_PATTERN_VERSION, default=const.PATTERN_LEGACY_VERSION
        ): vol.All(int, vol.Range(min=1, max=const.PATTERN_FORMAT_VERSION)),
        vol.Required(const.DATA_PATTERN_FREQ): vol.In(const.FREQUENCY_OPTIONS),
        vol.Optional(
            const.DATA_PATTERN_INTERVAL, default=const.DEFAULT_INTERVAL
        ): coerce_interval,
        vol.Optional(const.DATA_PATTERN_BY_DAY): validate_by_day,
        vol.Optional(const.DATA_PATTERN_BY_MONTH_DAY): validate_month_day,
        vol.Optional(const.DATA_PATTERN_BY_SET_POS): validate_set_position,
        vol.Optional(const.DATA_PATTERN_BY_MONTH): vol.All(
            int, vol.Range(min=1, max=const.MONTHS_PER_YEAR)
        ),
        vol.Optional(const.DATA_PATTERN_UNTIL, default=None): validate_until,
        vol.Optional(const.DATA_PATTERN_REOPEN_CHECKLIST, default=False): bool,
    },
    extra=vol.REMOVE_EXTRA,
)

# Keys whose null value means "not set"
_SELECTOR_KEYS = (
    const.DATA_PATTERN_BY_DAY,
    const.DATA_PATTERN_BY_MONTH_DAY,
    const.DATA_PATTERN_BY_SET_POS,
    const.DATA_PATTERN_BY_MONTH,
)


def _drop_unset(record: dict[str, Any]) -> dict[str, Any]:
    """Remove null selectors (and a null interval) before or after validation."""
    return {
        key: value
        for key, value in record.items()
        if value is not None
        or key not in (*_SELECTOR_KEYS, const.DATA_PATTERN_INTERVAL)
    }


# =============================================================================
# PUBLIC API
# =============================================================================


def decode(text: str | None, anchor: date | None = None) -> RecurrencePattern | None:
    """Parse a stored pattern string into a RecurrencePattern.

    Args:
        text: Stored recurrence_pattern column value (may be None/empty)
        anchor: Due date of the owning item. When given, selectors absent from
                the record are taken from it; without it such records decode
                to None.

    Returns:
        RecurrencePattern, or None for empty, malformed or unsupported input.
    """
    if not text or not isinstance(text, str) or not text.strip():
        return None

    try:
        raw = json.loads(text)
        if not isinstance(raw, dict):
            const.LOGGER.debug("decode: Pattern is not a JSON object: %s", text)
            return None
        data = _drop_unset(PATTERN_SCHEMA(_drop_unset(raw)))
        data.pop(const.DATA_PATTERN_VERSION, None)
        if anchor is not None:
            data = resolve_pattern_data(data, anchor)  # type: ignore[arg-type]
        return build_pattern(data)  # type: ignore[arg-type]
    except vol.Invalid as err:
        const.LOGGER.debug("decode: Invalid pattern %s: %s", text, err)
    except PatternError as err:
        const.LOGGER.debug("decode: Incomplete pattern %s: %s", text, err)
    except (ValueError, TypeError, OverflowError, RecursionError) as err:
        const.LOGGER.debug("decode: Could not parse pattern %s: %s", text[:200], err)
    return None


def encode(pattern: RecurrencePattern | None) -> str | None:
    """Serialize a pattern for storage.

    Args:
        pattern: Pattern to store, or None for "no recurrence"

    Returns:
        Canonical pattern text, or None when pattern is None.
    """
    if pattern is None:
        return None

    record: dict[str, Any] = {const.DATA_PATTERN_VERSION: const.PATTERN_FORMAT_VERSION}
    record.update(build_pattern_data(pattern))
    return json.dumps(record, separators=(",", ":"))
