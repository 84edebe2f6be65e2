# File: const.py
"""Constants for the Bonsai recurrence engine.

This file centralizes frequency names, weekday codes, storage keys, display
labels and iteration limits for consistency across the package.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General / Package Information
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Frequencies
# ------------------------------------------------------------------------------------------------
FREQUENCY_DAY = "day"
FREQUENCY_WEEK = "week"
FREQUENCY_MONTH = "month"
FREQUENCY_YEAR = "year"

FREQUENCY_OPTIONS = [
    FREQUENCY_DAY,
    FREQUENCY_WEEK,
    FREQUENCY_MONTH,
    FREQUENCY_YEAR,
]

# Monthly variants (UI radio buttons)
MONTHLY_VARIANT_ON_DATE = "on_date"
MONTHLY_VARIANT_BY_WEEK = "by_week"

# ------------------------------------------------------------------------------------------------
# Weekdays
# ------------------------------------------------------------------------------------------------
# Sunday-first, matching the stored byDay codes
WEEKDAY_CODES = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")

# Python date.weekday() index (0=Mon, 6=Sun) -> weekday code
WEEKDAY_INDEX_TO_CODE = {
    0: "MO",
    1: "TU",
    2: "WE",
    3: "TH",
    4: "FR",
    5: "SA",
    6: "SU",
}

WEEKDAY_SHORT_LABELS = {
    "SU": "Sun",
    "MO": "Mon",
    "TU": "Tue",
    "WE": "Wed",
    "TH": "Thu",
    "FR": "Fri",
    "SA": "Sat",
}

WEEKDAY_LONG_LABELS = {
    "SU": "Sunday",
    "MO": "Monday",
    "TU": "Tuesday",
    "WE": "Wednesday",
    "TH": "Thursday",
    "FR": "Friday",
    "SA": "Saturday",
}

DAYS_PER_WEEK = 7

# ------------------------------------------------------------------------------------------------
# Months / Days
# ------------------------------------------------------------------------------------------------
MONTH_SHORT_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

MONTHS_PER_YEAR = 12
MIN_MONTH_DAY = 1
MAX_MONTH_DAY = 31

# byMonthDay sentinel for "last day of the month"
LAST_DAY_OF_MONTH = -1

# Month by-week positions: 1=First ... 5=Fifth
MIN_SET_POSITION = 1
MAX_SET_POSITION = 5

SET_POSITION_LABELS = {
    1: "first",
    2: "second",
    3: "third",
    4: "fourth",
    5: "fifth",
}

# ------------------------------------------------------------------------------------------------
# Defaults (pattern construction without an anchor date)
# ------------------------------------------------------------------------------------------------
DEFAULT_INTERVAL = 1
DEFAULT_MONTH_DAY = 15
DEFAULT_SET_POSITION = 2
DEFAULT_SET_POSITION_WEEKDAY = "MO"
DEFAULT_YEAR_MONTH = 1
DEFAULT_YEAR_DAY = 1

# ------------------------------------------------------------------------------------------------
# Storage Keys (encoded pattern JSON)
# ------------------------------------------------------------------------------------------------
DATA_PATTERN_VERSION = "v"
DATA_PATTERN_FREQ = "freq"
DATA_PATTERN_INTERVAL = "interval"
DATA_PATTERN_BY_DAY = "byDay"
DATA_PATTERN_BY_MONTH_DAY = "byMonthDay"
DATA_PATTERN_BY_SET_POS = "bySetPos"
DATA_PATTERN_BY_MONTH = "byMonth"
DATA_PATTERN_UNTIL = "until"
DATA_PATTERN_REOPEN_CHECKLIST = "reopenChecklist"

# Storage Versioning
PATTERN_FORMAT_VERSION = 1
PATTERN_LEGACY_VERSION = 1  # Records written before versioning carry no "v"

# ------------------------------------------------------------------------------------------------
# Iteration Limits
# ------------------------------------------------------------------------------------------------
# Weekly day-search window when the reference is not on a selected weekday
WEEKLY_SCAN_MAX_DAYS = 60

# Range enumeration walk caps
MAX_BACKWARD_STEPS = 100
MAX_FORWARD_STEPS = 500

# ScheduleLimits keys
LIMIT_WEEKLY_SCAN_DAYS = "weekly_scan_days"
LIMIT_MAX_BACKWARD_STEPS = "max_backward_steps"
LIMIT_MAX_FORWARD_STEPS = "max_forward_steps"

# ------------------------------------------------------------------------------------------------
# Display
# ------------------------------------------------------------------------------------------------
DISPLAY_LAST_DAY = "last day"
DISPLAY_EMPTY = ""
