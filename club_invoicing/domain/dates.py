"""Timestamp helpers shared by the invoice engine and storage adapters."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional

_FALLBACK_FORMATS = ("%Y-%m-%d %H:%M:%S", "%d.%m.%Y %H:%M", "%d.%m.%Y", "%d/%m/%Y")


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def end_of_day(day: date) -> datetime:
    """Last representable instant of ``day`` in UTC."""

    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse stored timestamps leniently.

    Accepts datetimes, dates (midnight UTC) and ISO-8601 strings, including a
    trailing ``Z``. Returns ``None`` for empty or unparsable input instead of
    raising.
    """

    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return ensure_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue
    return None


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` style value into a :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None


__all__ = [
    "end_of_day",
    "ensure_utc",
    "parse_calendar_date",
    "parse_timestamp",
    "utc_now",
]
