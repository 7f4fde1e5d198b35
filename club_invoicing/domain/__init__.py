"""Pure registration snapshot and invoice computation core."""

from . import (
    amendments,
    dates,
    grouping,
    hashing,
    invoice_numbers,
    invoices,
    models,
    money,
    pricing,
    snapshots,
    totals,
)

__all__ = [
    "amendments",
    "dates",
    "grouping",
    "hashing",
    "invoice_numbers",
    "invoices",
    "models",
    "money",
    "pricing",
    "snapshots",
    "totals",
]
