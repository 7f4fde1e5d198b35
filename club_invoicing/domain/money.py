"""Money parsing boundary for loosely typed stored amounts.

Stored registrations may carry their invoice total as a number or as a
display string such as ``"$350.00"``. Every conversion of such a value into
a float goes through :func:`parse_money` so the coercion rules live in one
place.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from .models import MoneyInput

_NON_NUMERIC = re.compile(r"[^0-9.]")


def parse_money(value: MoneyInput | Decimal) -> float:
    """Return ``value`` as a float amount.

    Strings lose every character except digits and the decimal point before
    conversion. Anything that still fails to parse, and any non-finite
    number, yields ``0.0``.

    >>> parse_money("$350.00")
    350.0
    >>> parse_money("1,250.50 CAD")
    1250.5
    >>> parse_money("n/a")
    0.0
    >>> parse_money(None)
    0.0
    >>> parse_money(42)
    42.0
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        amount = float(value)
    elif isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        if not cleaned:
            return 0.0
        try:
            amount = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


__all__ = ["parse_money"]
