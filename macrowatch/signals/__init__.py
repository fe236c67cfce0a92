"""
Signal derivation module.

Run detection over growth series, trailing inversion streaks and projection
of recession windows onto display sequences.
"""

from .alignment import align_windows, expand_to_quarter, in_recession
from .inversion import inversion_streak
from .runs import (
    detect_recession_windows,
    detect_runs,
    growth_diagnostics,
    negative_flags,
    quarter_growth,
)

__all__ = [
    "align_windows",
    "expand_to_quarter",
    "in_recession",
    "inversion_streak",
    "detect_runs",
    "detect_recession_windows",
    "growth_diagnostics",
    "negative_flags",
    "quarter_growth",
]
