"""Division price tier resolution.

A division is billed at its early-bird price while the reference date is
strictly before the early-bird deadline, and at its regular price otherwise.
A deadline expressed as a calendar date covers that whole day.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from .dates import end_of_day, ensure_utc, parse_timestamp
from .models import ActiveDivisionRate, DivisionPricing, PricingTier

_DATE_ONLY = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")


def early_bird_cutoff(deadline: Any) -> Optional[datetime]:
    """Return the first instant at which the early-bird tier no longer applies.

    >>> early_bird_cutoff("2025-01-01").isoformat()
    '2025-01-01T23:59:59.999999+00:00'
    >>> early_bird_cutoff("soon") is None
    True
    """

    if isinstance(deadline, datetime):
        return ensure_utc(deadline)
    if isinstance(deadline, date):
        return end_of_day(deadline)
    if isinstance(deadline, str) and _DATE_ONLY.match(deadline.strip()):
        parsed = parse_timestamp(deadline)
        return end_of_day(parsed.date()) if parsed else None
    return parse_timestamp(deadline)


def _reference_instant(reference_date: Any) -> Optional[datetime]:
    if isinstance(reference_date, datetime):
        return ensure_utc(reference_date)
    return parse_timestamp(reference_date)


def resolve_division_pricing(
    pricing: DivisionPricing, reference_date: datetime | date | None
) -> ActiveDivisionRate:
    """Return the tier of ``pricing`` that applies at ``reference_date``.

    A missing or unparsable reference date never selects the early-bird
    tier.
    """

    early_bird = pricing.early_bird
    if early_bird is not None:
        cutoff = early_bird_cutoff(early_bird.deadline)
        reference = _reference_instant(reference_date)
        if cutoff is not None and reference is not None and reference < cutoff:
            return ActiveDivisionRate(tier=PricingTier.EARLY_BIRD, price=float(early_bird.price))
    return ActiveDivisionRate(tier=PricingTier.REGULAR, price=float(pricing.regular.price))


__all__ = ["early_bird_cutoff", "resolve_division_pricing"]
