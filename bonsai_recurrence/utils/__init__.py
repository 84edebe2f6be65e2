"""Pure Python utilities for the Bonsai recurrence engine.

Submodules:
    - dt_utils: Civil-date arithmetic, clamping, parsing

Usage:
    from . import dt_utils
    from .dt_utils import clamp_day
"""

from . import dt_utils

__all__ = ["dt_utils"]
