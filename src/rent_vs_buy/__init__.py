"""
Rent vs. Buy comparison toolkit.

Projects, month by month, the net worth of buying a home with a mortgage
versus renting and investing the difference in monthly costs, then sells the
home at the end of the horizon to report which strategy comes out ahead.
"""

from .schemas import (
    DEFAULT_SCENARIO,
    MonthSnapshot,
    ScenarioInputs,
    ScenarioResult,
)
from .model import compute, compute_cached
from .sanitize import sanitize_inputs

__all__ = [
    "DEFAULT_SCENARIO",
    "MonthSnapshot",
    "ScenarioInputs",
    "ScenarioResult",
    "compute",
    "compute_cached",
    "sanitize_inputs",
]
