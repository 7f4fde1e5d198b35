"""Invoice revisions for amended registrations.

An amendment never edits the invoice it replaces. It issues a new invoice
with the same identifier and the next order version, and marks the previous
one void unless it was already paid.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Mapping, Optional, Sequence

from .grouping import group_entries_by_division, normalize_division_name
from .invoice_numbers import format_invoice_number
from .invoices import ensure_division_pricing
from .models import (
    DivisionPricing,
    InvoiceAmendment,
    InvoiceChangeInfo,
    InvoiceData,
    InvoiceStatus,
    MoneyInput,
    RegistrationEntry,
    RegistrationMember,
)


def _division_signature(
    entries: Sequence[RegistrationEntry],
) -> tuple[tuple[str, int, tuple[RegistrationMember, ...]], ...]:
    return tuple((entry.id, entry.member_count, tuple(entry.members or ())) for entry in entries)


def diff_divisions(
    previous: Mapping[str, Sequence[RegistrationEntry]],
    current: Mapping[str, Sequence[RegistrationEntry]],
) -> InvoiceChangeInfo:
    """Classify divisions as new, modified or removed between two groupings.

    A division is modified when an entry was added or dropped, or when an
    entry's billed members differ, even at an unchanged headcount.
    """

    new_divisions = frozenset(name for name in current if name not in previous)
    removed_divisions = frozenset(name for name in previous if name not in current)
    modified_divisions = frozenset(
        name
        for name, entries in current.items()
        if name in previous and _division_signature(previous[name]) != _division_signature(entries)
    )
    return InvoiceChangeInfo(
        new_divisions=new_divisions,
        modified_divisions=modified_divisions,
        removed_divisions=removed_divisions,
    )


def amend_invoice(
    previous: InvoiceData,
    entries: Sequence[RegistrationEntry],
    *,
    issued_date: datetime,
    division_pricing: Optional[Sequence[DivisionPricing]] = None,
    invoice_total: MoneyInput = None,
) -> InvoiceAmendment:
    """Issue the next revision of ``previous`` for the amended ``entries``.

    Entry divisions take the spelling of a matching pricing row. Divisions
    left without one get a regular-only row derived from ``invoice_total``.
    """

    base_pricing = tuple(division_pricing if division_pricing is not None else previous.division_pricing)
    normalized = [
        replace(entry, division=normalize_division_name(entry.division, base_pricing)) for entry in entries
    ]
    entries_by_division = group_entries_by_division(normalized)
    order_version = previous.order_version + 1
    current = replace(
        previous,
        invoice_number=format_invoice_number(previous.invoice_id, order_version),
        order_version=order_version,
        issued_date=issued_date,
        entries_by_division=entries_by_division,
        division_pricing=ensure_division_pricing(base_pricing, normalized, invoice_total),
        payments=(),
        status=InvoiceStatus.UNPAID,
        change_info=diff_divisions(previous.entries_by_division, entries_by_division),
        original_entries_by_division=previous.entries_by_division,
    )
    superseded_status = (
        InvoiceStatus.PAID if previous.status is InvoiceStatus.PAID else InvoiceStatus.VOID
    )
    return InvoiceAmendment(current=current, superseded=replace(previous, status=superseded_status))


__all__ = ["amend_invoice", "diff_divisions"]
