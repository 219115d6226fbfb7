from __future__ import annotations

import math


def format_money(value: float, digits: int = 0) -> str:
    """Dollar amount with thousands separators; non-finite values print as $0."""
    if not math.isfinite(value):
        value = 0.0
    sign = "-" if value < 0 and round(abs(value), digits) != 0 else ""
    return f"{sign}${abs(value):,.{digits}f}"


def format_pct(value: float, digits: int = 2) -> str:
    if not math.isfinite(value):
        value = 0.0
    return f"{value:.{digits}f}%"


def month_to_years_label(month: int) -> str:
    if month < 12:
        return f"{month} mo"
    whole, rem = divmod(month, 12)
    if rem == 0:
        return f"{whole} yr"
    return f"{whole} yr {rem} mo"
