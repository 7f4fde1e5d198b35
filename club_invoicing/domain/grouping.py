"""Grouping of registration entries by division."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import DivisionPricing, Event, RegistrationEntry

DEFAULT_DIVISION_NAME = "Division"


def normalize_division_name(
    division: Optional[str],
    canonical: Event | Iterable[DivisionPricing] | None = None,
) -> str:
    """Return the canonical spelling of ``division`` when one matches.

    ``canonical`` is an event or the division pricing rows it publishes.
    Matching is a case-insensitive exact comparison after trimming. Names
    without a match are returned trimmed, and a blank name becomes
    ``"Division"``.

    >>> from club_invoicing.domain.models import DivisionPricing, Event, RegularTier
    >>> event = Event(id="e1", name="Open", available_divisions=(
    ...     DivisionPricing(name="U14 - Novice - 3", regular=RegularTier(price=130.0)),
    ... ))
    >>> normalize_division_name("  u14 - novice - 3 ", event)
    'U14 - Novice - 3'
    >>> normalize_division_name("u14 - NOVICE - 3", event.available_divisions)
    'U14 - Novice - 3'
    >>> normalize_division_name("Senior Elite", event)
    'Senior Elite'
    >>> normalize_division_name("   ")
    'Division'
    """

    base_name = (division or "").strip() or DEFAULT_DIVISION_NAME
    options = canonical.available_divisions if isinstance(canonical, Event) else canonical
    if not options:
        return base_name
    lowered = base_name.lower()
    for option in options:
        if option.name.lower() == lowered:
            return option.name
    return base_name


def group_entries_by_division(
    entries: Iterable[RegistrationEntry],
) -> dict[str, tuple[RegistrationEntry, ...]]:
    """Bucket ``entries`` by division.

    Buckets appear in the order their division was first seen and keep the
    relative order of their entries.
    """

    buckets: dict[str, list[RegistrationEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.division, []).append(entry)
    return {division: tuple(items) for division, items in buckets.items()}


def count_participants(entries: Iterable[RegistrationEntry]) -> int:
    return sum(entry.member_count for entry in entries)


__all__ = [
    "DEFAULT_DIVISION_NAME",
    "count_participants",
    "group_entries_by_division",
    "normalize_division_name",
]
