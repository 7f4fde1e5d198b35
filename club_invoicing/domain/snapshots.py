"""Roster snapshots taken at registration time.

A snapshot copies a team's live roster into immutable
:class:`~club_invoicing.domain.models.RegisteredMember` values so later
roster edits never change what was registered and billed. Members are always
listed coaches first, then athletes, reservists and chaperones
(:data:`~club_invoicing.domain.models.ROLE_ORDER`).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from .dates import parse_timestamp, utc_now
from .hashing import rolling_hash_i32, utf16_code_units
from .models import (
    ROLE_ORDER,
    ClubTeamSnapshot,
    LockReason,
    MemberRole,
    Person,
    RegisteredMember,
    RegisteredTeam,
    Registration,
    Roster,
    Team,
    UploadSnapshot,
)

logger = logging.getLogger(__name__)


def _capture(person: Person, role: MemberRole) -> RegisteredMember:
    return RegisteredMember(
        id=person.id,
        first_name=person.first_name,
        last_name=person.last_name,
        role=role,
        dob=person.dob,
        email=person.email,
        phone=person.phone,
        person_id=person.id,
    )


def snapshot_roster(roster: Optional[Roster]) -> tuple[RegisteredMember, ...]:
    """Return the members of ``roster`` in canonical role order.

    ``None`` or an empty roster yields an empty tuple.
    """

    if roster is None:
        return ()
    return tuple(
        _capture(person, role) for role in ROLE_ORDER for person in roster.people(role)
    )


def synthesize_athletes(registration_id: str, count: Optional[int]) -> tuple[RegisteredMember, ...]:
    """Return ``count`` placeholder athletes named ``Athlete 1..count``.

    Used for legacy registrations that only recorded an athlete count, so
    every registration still has a countable member list.
    """

    if not count or count <= 0:
        return ()
    logger.debug("Synthesizing %s placeholder athletes for registration %s", count, registration_id)
    return tuple(
        RegisteredMember(
            id=f"{registration_id}-member-{index}",
            first_name="Athlete",
            last_name=str(index),
            role=MemberRole.ATHLETE,
        )
        for index in range(1, count + 1)
    )


def take_snapshot(
    team: Team,
    roster: Optional[Roster],
    *,
    snapshot_id: str,
    club_owner_id: Optional[str] = None,
) -> RegisteredTeam:
    """Freeze ``team`` and its current ``roster`` into a registered team."""

    members = snapshot_roster(roster)
    return RegisteredTeam(
        id=snapshot_id,
        name=team.name,
        division=team.division,
        source=ClubTeamSnapshot(source_team_id=team.id),
        members=members,
        size=len(members),
        coed_count=team.coed_count,
        club_owner_id=club_owner_id,
    )


def take_upload_snapshot(
    snapshot_id: str,
    name: str,
    division: str,
    people: Iterable[tuple[Person, MemberRole]],
    *,
    file_name: Optional[str] = None,
    coed_count: int = 0,
    club_owner_id: Optional[str] = None,
) -> RegisteredTeam:
    """Freeze an ad hoc import (e.g. a spreadsheet upload) into a registered team."""

    captured = [_capture(person, role) for person, role in people]
    captured.sort(key=lambda member: ROLE_ORDER.index(member.role))
    return RegisteredTeam(
        id=snapshot_id,
        name=name,
        division=division,
        source=UploadSnapshot(file_name=file_name),
        members=tuple(captured),
        size=len(captured),
        coed_count=coed_count,
        club_owner_id=club_owner_id,
    )


def _hash_field(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def build_snapshot_hash(roster: Optional[Roster]) -> Optional[str]:
    """Return an order-insensitive digest of the people on ``roster``.

    Registrations store the digest so a later roster can be compared with
    what was registered. Returns ``None`` when there is nobody to hash.
    """

    if roster is None:
        return None
    people = [person for role in ROLE_ORDER for person in roster.people(role)]
    if not people:
        return None
    payload = "||".join(
        sorted(
            (
                "|".join(
                    _hash_field(item)
                    for item in (person.first_name, person.last_name, person.dob, person.email, person.phone)
                )
                for person in people
            ),
            key=lambda item: tuple(utf16_code_units(item)),
        )
    )
    return str(rolling_hash_i32(payload))


def is_snapshot_out_of_date(snapshot_taken_at: Any, roster_updated_at: Any) -> bool:
    """Return ``True`` when the roster changed after the snapshot was taken."""

    snapshot = parse_timestamp(snapshot_taken_at)
    updated = parse_timestamp(roster_updated_at)
    if snapshot is None or updated is None:
        return False
    return updated > snapshot


def registration_lock_reason(
    registration: Registration, reference_date: Optional[datetime] = None
) -> Optional[LockReason]:
    """Return why ``registration`` can no longer be edited, if it cannot."""

    if registration.paid_at:
        return LockReason.PAID
    deadline = parse_timestamp(registration.registration_deadline or registration.payment_deadline)
    if deadline is None:
        return None
    reference = parse_timestamp(reference_date) if reference_date is not None else utc_now()
    if reference is not None and reference > deadline:
        return LockReason.DEADLINE
    return None


def is_registration_locked(
    registration: Registration, reference_date: Optional[datetime] = None
) -> bool:
    return registration_lock_reason(registration, reference_date) is not None


__all__ = [
    "build_snapshot_hash",
    "is_registration_locked",
    "is_snapshot_out_of_date",
    "registration_lock_reason",
    "snapshot_roster",
    "synthesize_athletes",
    "take_snapshot",
    "take_upload_snapshot",
]
