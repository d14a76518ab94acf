"""Money / rounding helpers.

Every converted amount leaves the service through round2 so identity and
cross-rate conversions share the same cent rounding.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP

# Floats at or above 2**53 have no fractional part left to round.
_EXACT_INTEGER_LIMIT = float(2**53)


def round2(value: float) -> float:
    """Round ``value * 100`` half away from zero, then divide by 100."""
    if not math.isfinite(value):
        raise ValueError(f"cannot round non-finite amount {value!r}")
    scaled = value * 100
    if not math.isfinite(scaled) or abs(scaled) >= _EXACT_INTEGER_LIMIT:
        return value
    cents = Decimal(repr(scaled)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(cents) / 100
