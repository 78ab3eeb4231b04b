from __future__ import annotations

import math
from typing import Any, Iterable


def clamp(value: float, lower: float, upper: float) -> float:
    """Saturate `value` into [lower, upper]. NaN saturates to `lower`."""
    if math.isnan(value):
        return lower
    return max(lower, min(upper, value))


def to_number(value: Any, fallback: float) -> float:
    """Coerce loosely typed input to a finite float, else return `fallback`.

    Numbers and numeric strings are accepted; booleans, containers, blank or
    non-numeric strings and non-finite results are not.
    """
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return fallback
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return fallback
    else:
        return fallback
    return parsed if math.isfinite(parsed) else fallback


def mean(values: Iterable[float]) -> float:
    items = list(values)
    return sum(items) / len(items)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
