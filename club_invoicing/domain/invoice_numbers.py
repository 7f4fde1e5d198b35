"""Invoice identifiers and invoice number formatting.

Two numbering schemes are supported:

* ``{id}-{version:03d}`` where ``id`` is six characters, either derived from
  a caller supplied identifier or hashed from a seed such as
  ``"{registration_id}:{event_id}"``;
* the organizer scheme ``ORG-YYEE-CNNN-VV`` used for invoices issued with
  explicit sequence numbers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .hashing import rolling_hash_u32

DEFAULT_SEED = "invoice"
_ID_LENGTH = 6
_NON_DIGITS = re.compile(r"[^0-9]")
_STRUCTURED = re.compile(r"^([A-Z]{3})-(\d{2})(\d{2})-C(\d{3})-(\d{2})$")

ORGANIZER_CODES: dict[str, str] = {
    "Cheer Elite Events": "CEE",
    "Sapphire Productions": "SAP",
    "East Region Events": "ERE",
    "Spirit Sports Co.": "SSC",
    "Midwest Athletics": "MWA",
    "Southern Spirit": "SOS",
    "West Coast Cheer": "WCC",
}


def compute_six_digit_id(seed: str) -> str:
    """Hash ``seed`` into a six digit identifier in ``[100000, 999999]``.

    >>> compute_six_digit_id("")
    '100000'
    >>> compute_six_digit_id("a")
    '100097'
    >>> compute_six_digit_id("reg1:evt1") == compute_six_digit_id("reg1:evt1")
    True
    """

    return str(rolling_hash_u32(seed) % 900_000 + 100_000).zfill(_ID_LENGTH)


def normalize_invoice_id(raw_id: Optional[str] = None, seed: Optional[str] = None) -> str:
    """Return a six character invoice identifier.

    A supplied ``raw_id`` keeps its last six digits (left padded with zeros);
    when it has no digits its first six characters are used, right padded
    with zeros. Without ``raw_id`` the identifier is hashed from ``seed``.

    >>> normalize_invoice_id("INV-000042")
    '000042'
    >>> normalize_invoice_id("A-12")
    '000012'
    >>> normalize_invoice_id("ABC")
    'ABC000'
    >>> normalize_invoice_id("2024-1234567")
    '234567'
    """

    if raw_id:
        digits = _NON_DIGITS.sub("", raw_id)
        if digits:
            return digits[-_ID_LENGTH:].rjust(_ID_LENGTH, "0")
        return raw_id.strip()[:_ID_LENGTH].ljust(_ID_LENGTH, "0")
    return compute_six_digit_id(seed if seed is not None else DEFAULT_SEED)


def format_invoice_number(invoice_id: str, order_version: int) -> str:
    """Join ``invoice_id`` with a zero padded order version.

    >>> format_invoice_number("000042", 1)
    '000042-001'
    >>> format_invoice_number("  ", 12)
    'invoice-012'
    """

    if order_version < 1:
        raise ValueError("order_version must be at least 1")
    safe_id = invoice_id.strip() or DEFAULT_SEED
    return f"{safe_id}-{order_version:03d}"


@dataclass(slots=True, frozen=True)
class InvoiceNumberParts:
    """Components of an ``ORG-YYEE-CNNN-VV`` invoice number."""

    organizer_code: str
    year: int
    event_sequence: int
    club_sequence: int
    version: int = 1


def get_organizer_code(organizer_name: str) -> str:
    """Return the three letter code of an organizer.

    >>> get_organizer_code("Sapphire Productions")
    'SAP'
    >>> get_organizer_code("Northern Lights Cheer")
    'NOR'
    """

    known = ORGANIZER_CODES.get(organizer_name)
    if known:
        return known
    return re.sub(r"[^a-zA-Z]", "", organizer_name)[:3].upper()


def format_structured_invoice_number(parts: InvoiceNumberParts) -> str:
    """Render ``parts`` as ``ORG-YYEE-CNNN-VV``.

    >>> format_structured_invoice_number(InvoiceNumberParts("SAP", 2026, 2, 3))
    'SAP-2602-C003-01'
    """

    yy = str(parts.year)[-2:]
    return (
        f"{parts.organizer_code}-{yy}{parts.event_sequence:02d}"
        f"-C{parts.club_sequence:03d}-{parts.version:02d}"
    )


def generate_structured_invoice_number(
    organizer_name: str,
    year: int,
    event_sequence: int,
    club_sequence: int,
    version: int = 1,
) -> str:
    return format_structured_invoice_number(
        InvoiceNumberParts(
            organizer_code=get_organizer_code(organizer_name),
            year=year,
            event_sequence=event_sequence,
            club_sequence=club_sequence,
            version=version,
        )
    )


def parse_structured_invoice_number(invoice_number: str) -> Optional[InvoiceNumberParts]:
    """Split an ``ORG-YYEE-CNNN-VV`` number into its parts.

    >>> parse_structured_invoice_number("CEE-2501-C001-02")
    InvoiceNumberParts(organizer_code='CEE', year=2025, event_sequence=1, club_sequence=1, version=2)
    >>> parse_structured_invoice_number("123456-001") is None
    True
    """

    match = _STRUCTURED.match(invoice_number)
    if not match:
        return None
    organizer_code, year, event_sequence, club_sequence, version = match.groups()
    return InvoiceNumberParts(
        organizer_code=organizer_code,
        year=2000 + int(year),
        event_sequence=int(event_sequence),
        club_sequence=int(club_sequence),
        version=int(version),
    )


__all__ = [
    "ORGANIZER_CODES",
    "InvoiceNumberParts",
    "compute_six_digit_id",
    "format_invoice_number",
    "format_structured_invoice_number",
    "generate_structured_invoice_number",
    "get_organizer_code",
    "normalize_invoice_id",
    "parse_structured_invoice_number",
]
