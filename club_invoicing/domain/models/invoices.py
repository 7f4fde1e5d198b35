"""Invoice value objects produced by the invoice engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Mapping, Optional, Sequence

from .entities import DivisionPricing


class PricingTier(str, Enum):
    EARLY_BIRD = "earlyBird"
    REGULAR = "regular"


class EntryMode(str, Enum):
    """How a registration entry was sourced."""

    EXISTING = "existing"
    UPLOAD = "upload"


class InvoiceStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    VOID = "void"


class ChangeStatus(str, Enum):
    NEW = "new"
    MODIFIED = "modified"
    REMOVED = "removed"


class LockReason(str, Enum):
    PAID = "paid"
    DEADLINE = "deadline"


@dataclass(slots=True, frozen=True)
class ActiveDivisionRate:
    """Price tier in force for a division at a reference date."""

    tier: PricingTier
    price: float


@dataclass(slots=True, frozen=True)
class RegistrationMember:
    """Member projection used on invoices."""

    name: str
    type: str
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RegistrationEntry:
    """One team's participation in one division."""

    id: str
    division: str
    mode: EntryMode = EntryMode.EXISTING
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    team_size: Optional[int] = None
    members: Optional[Sequence[RegistrationMember]] = None
    snapshot_taken_at: Optional[datetime] = None
    snapshot_source_team_id: Optional[str] = None
    payment_deadline: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @property
    def member_count(self) -> int:
        """Participants billed for the entry."""

        if self.members is not None:
            return len(self.members)
        return self.team_size or 0


@dataclass(slots=True, frozen=True)
class Payment:
    """Settled payment fact. Display-only card data."""

    amount: float
    method: str
    last_four: str
    date: datetime


@dataclass(slots=True, frozen=True)
class InvoiceChangeInfo:
    new_divisions: frozenset[str] = frozenset()
    modified_divisions: frozenset[str] = frozenset()
    removed_divisions: frozenset[str] = frozenset()

    def status_for(self, division: str) -> Optional[ChangeStatus]:
        if division in self.new_divisions:
            return ChangeStatus.NEW
        if division in self.modified_divisions:
            return ChangeStatus.MODIFIED
        if division in self.removed_divisions:
            return ChangeStatus.REMOVED
        return None


@dataclass(slots=True, frozen=True)
class InvoiceData:
    """Complete invoice computed from a frozen registration snapshot."""

    invoice_number: str
    order_version: int
    issued_date: datetime
    event_name: str
    club_name: str
    entries_by_division: Mapping[str, Sequence[RegistrationEntry]]
    division_pricing: Sequence[DivisionPricing]
    payments: Sequence[Payment] = field(default_factory=tuple)
    status: InvoiceStatus = InvoiceStatus.UNPAID
    gst_rate: float = 0.05
    qst_rate: float = 0.09975
    change_info: Optional[InvoiceChangeInfo] = None
    original_entries_by_division: Optional[Mapping[str, Sequence[RegistrationEntry]]] = None

    @property
    def invoice_id(self) -> str:
        """Identifier portion of ``invoice_number`` without the version."""

        return self.invoice_number.rsplit("-", 1)[0]


@dataclass(slots=True, frozen=True)
class LineItem:
    category: str
    qty: int
    unit: float
    line_total: float
    tier: Optional[PricingTier] = None
    change_status: Optional[ChangeStatus] = None
    original_qty: Optional[int] = None


@dataclass(slots=True, frozen=True)
class InvoiceTotals:
    """Derived amounts for display. Nothing here is persisted."""

    line_items: Sequence[LineItem]
    subtotal: float
    gst_amount: float
    qst_amount: float
    total_tax: float
    total: float
    total_paid: float
    balance_due: float


@dataclass(slots=True, frozen=True)
class InvoiceAmendment:
    """Revised invoice together with the one it replaces."""

    current: InvoiceData
    superseded: InvoiceData
