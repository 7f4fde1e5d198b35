"""Helpers for anonymising personal data in logs and telemetry."""

from __future__ import annotations

import hashlib
from typing import Any

__all__ = [
    "REDACTED",
    "mask_identifier",
    "scrub_sensitive_mapping",
]

REDACTED = "[redacted]"
_DIGEST_SIZE = 10
_MASKED_KEYS = {"club_owner_id": "club"}
_REDACTED_KEYS = {"email", "phone", "dob"}


def _stable_digest(value: str) -> str:
    normalised = value.strip().encode("utf-8", "ignore")
    return hashlib.blake2b(normalised, digest_size=_DIGEST_SIZE).hexdigest()


def mask_identifier(value: int | str, *, prefix: str = "id") -> str:
    """Return an anonymised representation of ``value`` suitable for logs."""

    raw = str(value)
    digest = _stable_digest(f"{prefix}:{raw}")
    return f"{prefix}-{digest[:6]}...{digest[-4:]}"


def _scrub_value(value: Any, *, key: str | None = None) -> Any:
    if value is None:
        return None
    lowered = key.lower() if isinstance(key, str) else None

    if lowered in _MASKED_KEYS and not isinstance(value, (dict, list, tuple)):
        return mask_identifier(value, prefix=_MASKED_KEYS[lowered])
    if lowered in _REDACTED_KEYS and not isinstance(value, (dict, list, tuple)):
        return REDACTED

    if isinstance(value, dict):
        return scrub_sensitive_mapping(value)
    if isinstance(value, list):
        return [_scrub_value(item, key=key) for item in value]
    if isinstance(value, tuple):
        return tuple(_scrub_value(item, key=key) for item in value)
    return value


def scrub_sensitive_mapping(mapping: dict[str, Any]) -> dict[str, Any]:
    """Recursively mask club ids and redact contact details inside ``mapping`` in-place."""

    for key, value in list(mapping.items()):
        if isinstance(key, str) and key.lower() in (_MASKED_KEYS.keys() | _REDACTED_KEYS):
            mapping[key] = _scrub_value(value, key=key)
        elif isinstance(value, (dict, list, tuple)):
            mapping[key] = _scrub_value(
                value, key=key if isinstance(key, str) else None
            )
    return mapping
