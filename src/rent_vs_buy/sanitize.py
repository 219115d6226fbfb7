from __future__ import annotations

import logging
import math
import sys
from dataclasses import fields, replace
from typing import Dict, Optional, Tuple

from .schemas import ScenarioInputs

logger = logging.getLogger(__name__)

# (minimum, maximum, round to whole number); None means unbounded
FIELD_BOUNDS: Dict[str, Tuple[Optional[float], Optional[float], bool]] = {
    "years": (1, 50, True),
    "home_price": (0, None, False),
    "down_payment_pct": (0, 100, False),
    "mortgage_rate_pct": (0, None, False),
    "mortgage_term_years": (1, 40, True),
    "buy_closing_cost_pct": (0, 20, False),
    "sell_cost_pct": (0, 20, False),
    "property_tax_rate_pct": (0, 10, False),
    "home_insurance_annual": (0, None, False),
    "maintenance_rate_pct": (0, 10, False),
    "hoa_monthly": (0, None, False),
    "home_appreciation_pct": (-20, 30, False),
    "rent_monthly": (0, None, False),
    "rent_growth_pct": (-20, 30, False),
    "renters_insurance_monthly": (0, None, False),
    "investment_return_pct": (-50, 50, False),
}


def sanitize_inputs(raw: ScenarioInputs) -> ScenarioInputs:
    """
    Return a copy of ``raw`` with every field forced into its modeled range.

    Out-of-range values are clamped, never rejected. Non-finite values are
    treated as 0 before clamping, so the result is always finite.
    """
    changes = {}
    for f in fields(raw):
        value = getattr(raw, f.name)
        cleaned = sanitize_value(f.name, value)
        if cleaned != value:
            logger.debug("Sanitized %s: %r -> %r", f.name, value, cleaned)
        changes[f.name] = cleaned
    return replace(raw, **changes)


def sanitize_value(name: str, value: float) -> float:
    low, high, whole = FIELD_BOUNDS[name]
    try:
        number = float(value)
    except OverflowError:
        # ints too large for a float still clamp to the nearest bound
        number = sys.float_info.max if value > 0 else -sys.float_info.max
    if not math.isfinite(number):
        number = 0.0
    if whole:
        number = _round_half_up(number)
    if low is not None:
        number = max(low, number)
    if high is not None:
        number = min(high, number)
    return int(number) if whole else float(number)


def _round_half_up(value: float) -> int:
    # round() would send 2.5 to 2; the form convention is 2.5 -> 3
    return math.floor(value + 0.5)
