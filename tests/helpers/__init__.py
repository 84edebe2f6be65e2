"""Test helpers for Bonsai recurrence tests.

    from tests.helpers import make_date_range

See individual modules for full documentation:
- dates.py: Date range construction for sweeps and expected results
"""

from tests.helpers.dates import make_date_range

__all__ = ["make_date_range"]
