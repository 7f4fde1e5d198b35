"""Domain data transfer objects used across the invoice engine."""

from .entities import (
    ROLE_ORDER,
    ClubData,
    ClubTeamSnapshot,
    DivisionPricing,
    EarlyBirdTier,
    Event,
    MemberRole,
    MoneyInput,
    Person,
    RegisteredMember,
    RegisteredTeam,
    RegisteredTeamSource,
    Registration,
    RegistrationStatus,
    RegularTier,
    Roster,
    SnapshotSource,
    Team,
    UploadSnapshot,
)
from .invoices import (
    ActiveDivisionRate,
    ChangeStatus,
    EntryMode,
    InvoiceAmendment,
    InvoiceChangeInfo,
    InvoiceData,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    LockReason,
    Payment,
    PricingTier,
    RegistrationEntry,
    RegistrationMember,
)

__all__ = [
    "ROLE_ORDER",
    "ActiveDivisionRate",
    "ChangeStatus",
    "ClubData",
    "ClubTeamSnapshot",
    "DivisionPricing",
    "EarlyBirdTier",
    "EntryMode",
    "Event",
    "InvoiceAmendment",
    "InvoiceChangeInfo",
    "InvoiceData",
    "InvoiceStatus",
    "InvoiceTotals",
    "LineItem",
    "LockReason",
    "MemberRole",
    "MoneyInput",
    "Payment",
    "Person",
    "PricingTier",
    "RegisteredMember",
    "RegisteredTeam",
    "RegisteredTeamSource",
    "Registration",
    "RegistrationEntry",
    "RegistrationMember",
    "RegistrationStatus",
    "RegularTier",
    "Roster",
    "SnapshotSource",
    "Team",
    "UploadSnapshot",
]
