"""Invoice line items, taxes and balances.

GST and QST are both charged on the pre-tax subtotal; neither compounds on
the other. The balance due is not clamped, so an overpaid invoice reports a
negative balance.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .dates import utc_now
from .grouping import count_participants
from .models import ChangeStatus, DivisionPricing, InvoiceData, InvoiceTotals, LineItem
from .pricing import resolve_division_pricing

DEFAULT_GST_RATE = 0.05
DEFAULT_QST_RATE = 0.09975


def _validated_rate(value: Optional[float], default: float, name: str) -> float:
    rate = default if value is None else float(value)
    if rate < 0:
        raise ValueError(f"{name} must be non-negative")
    return rate


def calculate_invoice_totals(invoice: InvoiceData, now: Optional[datetime] = None) -> InvoiceTotals:
    """Compute line items and totals of ``invoice``.

    Unit prices are resolved against ``invoice.issued_date`` (``now`` when it
    is missing). Divisions without pricing bill at zero.

    Raises:
        TypeError: If ``invoice`` is not an :class:`InvoiceData`.
        ValueError: If a tax rate is negative.
    """

    if not isinstance(invoice, InvoiceData):
        raise TypeError(f"expected InvoiceData, got {type(invoice)!r}")

    pricing_by_division: dict[str, DivisionPricing] = {}
    for option in invoice.division_pricing:
        pricing_by_division[option.name] = option

    reference_date = invoice.issued_date or now or utc_now()
    change_info = invoice.change_info
    originals = invoice.original_entries_by_division or {}

    line_items: list[LineItem] = []
    for division, entries in invoice.entries_by_division.items():
        qty = count_participants(entries)
        change_status = change_info.status_for(division) if change_info else None
        original_qty: Optional[int] = None
        if change_status is ChangeStatus.MODIFIED and division in originals:
            previous_qty = count_participants(originals[division])
            original_qty = previous_qty if previous_qty != qty else None

        pricing = pricing_by_division.get(division)
        if pricing is None:
            line_items.append(
                LineItem(
                    category=division,
                    qty=qty,
                    unit=0.0,
                    line_total=0.0,
                    change_status=change_status,
                    original_qty=original_qty,
                )
            )
            continue

        rate = resolve_division_pricing(pricing, reference_date)
        line_items.append(
            LineItem(
                category=division,
                qty=qty,
                unit=rate.price,
                line_total=qty * rate.price,
                tier=rate.tier,
                change_status=change_status,
                original_qty=original_qty,
            )
        )

    if change_info is not None:
        for division in originals:
            if division in change_info.removed_divisions and division not in invoice.entries_by_division:
                line_items.append(
                    LineItem(
                        category=division,
                        qty=0,
                        unit=0.0,
                        line_total=0.0,
                        change_status=change_info.status_for(division),
                        original_qty=count_participants(originals[division]),
                    )
                )

    subtotal = sum((item.line_total for item in line_items), 0.0)
    gst_rate = _validated_rate(invoice.gst_rate, DEFAULT_GST_RATE, "gst_rate")
    qst_rate = _validated_rate(invoice.qst_rate, DEFAULT_QST_RATE, "qst_rate")
    gst_amount = subtotal * gst_rate
    qst_amount = subtotal * qst_rate
    total_tax = gst_amount + qst_amount
    total = subtotal + total_tax
    total_paid = sum((payment.amount for payment in invoice.payments), 0.0)

    return InvoiceTotals(
        line_items=tuple(line_items),
        subtotal=subtotal,
        gst_amount=gst_amount,
        qst_amount=qst_amount,
        total_tax=total_tax,
        total=total,
        total_paid=total_paid,
        balance_due=total - total_paid,
    )


__all__ = ["DEFAULT_GST_RATE", "DEFAULT_QST_RATE", "calculate_invoice_totals"]
