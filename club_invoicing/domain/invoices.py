"""Invoice assembly from registrations and their frozen team snapshots.

The assembler never fails on incomplete data. Missing team links bill zero
participants, missing division pricing is derived from the stored invoice
total, and missing dates fall back to the current time. Identical inputs
(with a fixed ``now``) always produce equal invoices.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Sequence

from .dates import parse_timestamp, utc_now
from .grouping import group_entries_by_division, normalize_division_name
from .invoice_numbers import format_invoice_number, normalize_invoice_id
from .models import (
    ClubData,
    ClubTeamSnapshot,
    DivisionPricing,
    EntryMode,
    Event,
    InvoiceData,
    InvoiceStatus,
    MoneyInput,
    Payment,
    RegisteredMember,
    RegisteredTeam,
    Registration,
    RegistrationEntry,
    RegistrationMember,
    RegistrationStatus,
    RegularTier,
    Roster,
    UploadSnapshot,
)
from .money import parse_money
from .snapshots import snapshot_roster, synthesize_athletes
from .totals import DEFAULT_GST_RATE, DEFAULT_QST_RATE, calculate_invoice_totals

logger = logging.getLogger(__name__)

DEFAULT_CLUB_NAME = "Your Club"
DEFAULT_SETTLEMENT_METHOD = "Visa"
DEFAULT_SETTLEMENT_LAST_FOUR = "4242"


class InvoiceScope(str, Enum):
    """Which of a club's registrations an invoice covers."""

    EVENT = "event"
    REGISTRATION = "registration"


def resolve_registered_team(
    registration: Registration, club_data: ClubData
) -> Optional[RegisteredTeam]:
    """Return the snapshot behind ``registration``.

    The embedded link wins, then a match on ``registered_team_id``, then a
    legacy ``team_id`` matched against a snapshot's source team.
    """

    if registration.registered_team is not None:
        return registration.registered_team
    if registration.registered_team_id:
        for candidate in club_data.registered_teams:
            if candidate.id == registration.registered_team_id:
                return candidate
    if registration.team_id:
        for candidate in club_data.registered_teams:
            if candidate.source_team_id == registration.team_id:
                return candidate
    return None


def _live_roster(
    registration: Registration,
    registered_team: Optional[RegisteredTeam],
    club_data: ClubData,
) -> Optional[Roster]:
    if registered_team is None:
        return club_data.find_roster(registration.team_id)
    source = registered_team.source
    if isinstance(source, UploadSnapshot):
        return None
    if isinstance(source, ClubTeamSnapshot):
        return club_data.find_roster(registration.team_id or source.source_team_id)
    raise TypeError(f"unsupported snapshot source: {type(source)!r}")


def resolve_members(
    registration: Registration,
    registered_team: Optional[RegisteredTeam],
    club_data: ClubData,
) -> tuple[RegisteredMember, ...]:
    """Return billed members: snapshot, else live roster, else athlete count."""

    if registered_team is not None and registered_team.members:
        return tuple(registered_team.members)
    members = snapshot_roster(_live_roster(registration, registered_team, club_data))
    if members:
        return members
    members = synthesize_athletes(registration.id, registration.athletes)
    if not members:
        logger.info("Registration %s has no resolvable members", registration.id)
    return members


def project_members(members: Iterable[RegisteredMember]) -> tuple[RegistrationMember, ...]:
    return tuple(
        RegistrationMember(
            name=member.full_name,
            type=member.role.label,
            dob=member.dob,
            email=member.email,
            phone=member.phone,
        )
        for member in members
    )


def build_registration_entry(
    registration: Registration,
    club_data: ClubData,
    event: Optional[Event] = None,
) -> RegistrationEntry:
    """Project one registration onto an invoice entry."""

    registered_team = resolve_registered_team(registration, club_data)
    members = resolve_members(registration, registered_team, club_data)
    team = club_data.find_team(registration.team_id)

    if registered_team is not None:
        team_name = registered_team.name
        team_id = registration.team_id or registered_team.source_team_id or registered_team.id
        is_upload = isinstance(registered_team.source, UploadSnapshot)
    else:
        team_name = team.name if team is not None else registration.division
        team_id = registration.team_id
        is_upload = False

    return RegistrationEntry(
        id=registration.id,
        division=normalize_division_name(registration.division, event),
        mode=EntryMode.UPLOAD if is_upload else EntryMode.EXISTING,
        team_id=team_id,
        team_name=team_name,
        team_size=len(members),
        members=project_members(members),
        snapshot_taken_at=registration.snapshot_taken_at,
        snapshot_source_team_id=registration.snapshot_source_team_id,
        payment_deadline=registration.payment_deadline,
        registration_deadline=registration.registration_deadline,
        paid_at=registration.paid_at,
    )


def build_registration_entries(
    registration: Registration,
    club_data: ClubData,
    event: Optional[Event] = None,
    *,
    scope: InvoiceScope = InvoiceScope.EVENT,
) -> tuple[RegistrationEntry, ...]:
    """Return entries for every registration covered by an invoice.

    ``registration`` itself is always covered, even when ``club_data`` does
    not list it.
    """

    if scope is InvoiceScope.REGISTRATION:
        covered: list[Registration] = [registration]
    else:
        covered = [item for item in club_data.registrations if item.event_id == registration.event_id]
        if all(item.id != registration.id for item in covered):
            covered.append(registration)
    return tuple(build_registration_entry(item, club_data, event) for item in covered)


def ensure_division_pricing(
    base_pricing: Sequence[DivisionPricing],
    entries: Iterable[RegistrationEntry],
    invoice_total: MoneyInput = None,
) -> tuple[DivisionPricing, ...]:
    """Return ``base_pricing`` plus a derived row for each unpriced division.

    Derived rows carry only a regular tier whose unit price spreads the
    stored ``invoice_total`` over the division's participants.
    """

    priced = {option.name for option in base_pricing}
    participants: dict[str, int] = {}
    for entry in entries:
        participants[entry.division] = participants.get(entry.division, 0) + entry.member_count

    total = parse_money(invoice_total)
    ensured = list(base_pricing)
    for division, count in participants.items():
        if division in priced:
            continue
        unit_price = total / (count if count > 0 else 1) if total > 0 else 0.0
        if not math.isfinite(unit_price):
            unit_price = 0.0
        logger.info("Derived pricing for division %r from a stored invoice total", division)
        ensured.append(DivisionPricing(name=division, regular=RegularTier(price=unit_price)))
    return tuple(ensured)


def derive_issued_date(registration: Registration, now: Optional[datetime] = None) -> datetime:
    """Return the first usable of snapshot time, payment deadline, event date."""

    for candidate in (
        registration.snapshot_taken_at,
        registration.payment_deadline,
        registration.event_date,
    ):
        parsed = parse_timestamp(candidate)
        if parsed is not None:
            return parsed
    return now if now is not None else utc_now()


def build_invoice_data_from_entries(
    entries: Sequence[RegistrationEntry],
    registration: Registration,
    event: Optional[Event] = None,
    *,
    club_name: Optional[str] = None,
    invoice_id: Optional[str] = None,
    order_version: int = 1,
    gst_rate: float = DEFAULT_GST_RATE,
    qst_rate: float = DEFAULT_QST_RATE,
    settlement_method: str = DEFAULT_SETTLEMENT_METHOD,
    settlement_last_four: str = DEFAULT_SETTLEMENT_LAST_FOUR,
    now: Optional[datetime] = None,
) -> InvoiceData:
    """Build an invoice from already projected ``entries``."""

    resolved_id = normalize_invoice_id(invoice_id, f"{registration.id}:{registration.event_id}")
    issued_date = derive_issued_date(registration, now)
    status = (
        InvoiceStatus.PAID if registration.status == RegistrationStatus.PAID else InvoiceStatus.UNPAID
    )

    invoice = InvoiceData(
        invoice_number=format_invoice_number(resolved_id, order_version),
        order_version=order_version,
        issued_date=issued_date,
        event_name=registration.event_name,
        club_name=club_name or DEFAULT_CLUB_NAME,
        entries_by_division=group_entries_by_division(entries),
        division_pricing=ensure_division_pricing(
            event.available_divisions if event is not None else (),
            entries,
            registration.invoice_total,
        ),
        payments=(),
        status=status,
        gst_rate=gst_rate,
        qst_rate=qst_rate,
    )
    if status is not InvoiceStatus.PAID:
        return invoice

    settlement = Payment(
        amount=calculate_invoice_totals(invoice).total,
        method=settlement_method,
        last_four=settlement_last_four,
        date=parse_timestamp(registration.paid_at) or issued_date,
    )
    return replace(invoice, payments=(settlement,))


def build_invoice_data(
    registration: Registration,
    club_data: ClubData,
    event: Optional[Event] = None,
    *,
    club_name: Optional[str] = None,
    invoice_id: Optional[str] = None,
    order_version: int = 1,
    scope: InvoiceScope = InvoiceScope.EVENT,
    gst_rate: float = DEFAULT_GST_RATE,
    qst_rate: float = DEFAULT_QST_RATE,
    settlement_method: str = DEFAULT_SETTLEMENT_METHOD,
    settlement_last_four: str = DEFAULT_SETTLEMENT_LAST_FOUR,
    now: Optional[datetime] = None,
) -> InvoiceData:
    """Assemble the invoice of ``registration`` from its club and event context."""

    entries = build_registration_entries(registration, club_data, event, scope=scope)
    return build_invoice_data_from_entries(
        entries,
        registration,
        event,
        club_name=club_name or club_data.club_name,
        invoice_id=invoice_id,
        order_version=order_version,
        gst_rate=gst_rate,
        qst_rate=qst_rate,
        settlement_method=settlement_method,
        settlement_last_four=settlement_last_four,
        now=now,
    )


__all__ = [
    "DEFAULT_CLUB_NAME",
    "InvoiceScope",
    "build_invoice_data",
    "build_invoice_data_from_entries",
    "build_registration_entries",
    "build_registration_entry",
    "derive_issued_date",
    "ensure_division_pricing",
    "project_members",
    "resolve_members",
    "resolve_registered_team",
]
