"""Engine modules for the Bonsai recurrence package.

Contains specialized computation engines:
- schedule_engine: Occurrence stepping and range enumeration
"""

# Use relative imports within package to avoid mypy module resolution issues
from .schedule_engine import (
    RecurrenceEngine,
    next_occurrence,
    occurrences_in_range,
    previous_occurrence,
)

__all__ = [
    "RecurrenceEngine",
    "next_occurrence",
    "occurrences_in_range",
    "previous_occurrence",
]
