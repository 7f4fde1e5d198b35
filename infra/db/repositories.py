"""SQLAlchemy-based repository implementations for Postgres."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from club_invoicing.application.ports.repositories import ClubDataRepository, EventRepository
from club_invoicing.domain.dates import ensure_utc
from club_invoicing.domain.models import (
    ClubData,
    ClubTeamSnapshot,
    DivisionPricing,
    EarlyBirdTier,
    Event,
    MemberRole,
    Person,
    RegisteredMember,
    RegisteredTeam,
    RegisteredTeamSource,
    Registration,
    RegistrationStatus,
    RegularTier,
    Roster,
    Team,
    UploadSnapshot,
)

from .models import (
    ClubRecord,
    DivisionPricingRecord,
    EventRecord,
    RegisteredMemberRecord,
    RegisteredTeamRecord,
    RegistrationRecord,
    RosterMemberRecord,
    TeamRecord,
)

logger = logging.getLogger(__name__)


def _ensure_tz(value: datetime | None) -> Optional[datetime]:
    return ensure_utc(value) if value is not None else None


def _role(value: str) -> Optional[MemberRole]:
    try:
        return MemberRole(value)
    except ValueError:
        logger.warning("Ignoring member with unknown role %r", value)
        return None


class PostgresClubDataRepo(ClubDataRepository):
    """Club data repository backed by Postgres."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_club_data(self, club_owner_id: str) -> ClubData:
        teams_stmt = (
            select(TeamRecord)
            .where(TeamRecord.club_owner_id == club_owner_id)
            .options(selectinload(TeamRecord.roster))
            .order_by(TeamRecord.name)
        )
        snapshots_stmt = (
            select(RegisteredTeamRecord)
            .where(RegisteredTeamRecord.club_owner_id == club_owner_id)
            .options(selectinload(RegisteredTeamRecord.members))
            .order_by(RegisteredTeamRecord.id)
        )
        registrations_stmt = (
            select(RegistrationRecord)
            .where(RegistrationRecord.club_owner_id == club_owner_id)
            .order_by(RegistrationRecord.submitted_at, RegistrationRecord.id)
        )
        async with self._session_factory() as session:
            teams = tuple((await session.scalars(teams_stmt)).all())
            snapshots = tuple((await session.scalars(snapshots_stmt)).all())
            registrations = tuple((await session.scalars(registrations_stmt)).all())
            club = await session.get(ClubRecord, club_owner_id)
            return _club_data_from_records(club, teams, snapshots, registrations)

    async def list_club_owner_ids(self) -> Sequence[str]:
        stmt = select(RegistrationRecord.club_owner_id).distinct().order_by(RegistrationRecord.club_owner_id)
        async with self._session_factory() as session:
            return tuple(await session.scalars(stmt))


class PostgresEventsRepo(EventRepository):
    """Event repository backed by Postgres."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, event_id: str) -> Optional[Event]:
        stmt = (
            select(EventRecord)
            .where(EventRecord.id == event_id)
            .options(selectinload(EventRecord.divisions))
        )
        async with self._session_factory() as session:
            record = (await session.scalars(stmt)).first()
            return _event_from_record(record) if record else None

    async def list_events(self) -> Sequence[Event]:
        stmt = (
            select(EventRecord)
            .options(selectinload(EventRecord.divisions))
            .order_by(EventRecord.event_date, EventRecord.id)
        )
        async with self._session_factory() as session:
            result = await session.scalars(stmt)
            return tuple(_event_from_record(row) for row in result)


def _club_data_from_records(
    club: ClubRecord | None,
    teams: Sequence[TeamRecord],
    snapshots: Sequence[RegisteredTeamRecord],
    registrations: Sequence[RegistrationRecord],
) -> ClubData:
    return ClubData(
        teams=tuple(_team_from_record(record) for record in teams),
        rosters=tuple(_roster_from_records(record.id, record.roster) for record in teams),
        registered_teams=tuple(_registered_team_from_record(record) for record in snapshots),
        registrations=tuple(_registration_from_record(record) for record in registrations),
        club_name=club.club_name if club is not None else None,
    )


def _team_from_record(record: TeamRecord) -> Team:
    return Team(
        id=record.id,
        name=record.name,
        division=record.division,
        size=record.size or 0,
        coed_count=record.coed_count or 0,
    )


def _roster_from_records(team_id: str, records: Iterable[RosterMemberRecord]) -> Roster:
    buckets: dict[MemberRole, list[Person]] = defaultdict(list)
    updated_at: Optional[datetime] = None
    for record in sorted(records, key=lambda row: (row.position or 0, row.id or 0)):
        role = _role(record.role)
        if role is None:
            continue
        buckets[role].append(
            Person(
                id=record.person_id,
                first_name=record.first_name,
                last_name=record.last_name,
                dob=record.dob,
                email=record.email,
                phone=record.phone,
            )
        )
        row_updated = _ensure_tz(record.updated_at)
        if row_updated is not None and (updated_at is None or row_updated > updated_at):
            updated_at = row_updated
    return Roster(
        team_id=team_id,
        coaches=tuple(buckets[MemberRole.COACH]),
        athletes=tuple(buckets[MemberRole.ATHLETE]),
        reservists=tuple(buckets[MemberRole.RESERVIST]),
        chaperones=tuple(buckets[MemberRole.CHAPERONE]),
        updated_at=updated_at,
    )


def _registered_member_from_record(record: RegisteredMemberRecord) -> Optional[RegisteredMember]:
    role = _role(record.role)
    if role is None:
        return None
    return RegisteredMember(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        role=role,
        dob=record.dob,
        email=record.email,
        phone=record.phone,
        person_id=record.person_id,
    )


def _registered_team_from_record(record: RegisteredTeamRecord) -> RegisteredTeam:
    members = tuple(
        member
        for member in (
            _registered_member_from_record(row)
            for row in sorted(record.members, key=lambda row: row.position or 0)
        )
        if member is not None
    )
    source: ClubTeamSnapshot | UploadSnapshot
    if record.source_type == RegisteredTeamSource.UPLOAD.value:
        source = UploadSnapshot(file_name=record.file_name)
    else:
        source = ClubTeamSnapshot(source_team_id=record.source_team_id)
    return RegisteredTeam(
        id=record.id,
        name=record.name,
        division=record.division,
        source=source,
        members=members,
        size=record.size or len(members),
        coed_count=record.coed_count or 0,
        club_owner_id=record.club_owner_id,
    )


def _registration_from_record(record: RegistrationRecord) -> Registration:
    try:
        status = RegistrationStatus(record.status)
    except ValueError:
        status = RegistrationStatus.PENDING
    return Registration(
        id=record.id,
        event_id=record.event_id,
        event_name=record.event_name,
        division=record.division,
        event_date=_ensure_tz(record.event_date),
        location=record.location,
        organizer=record.organizer,
        club_owner_id=record.club_owner_id,
        team_id=record.team_id,
        registered_team_id=record.registered_team_id,
        athletes=record.athletes,
        invoice_total=record.invoice_total,
        payment_deadline=_ensure_tz(record.payment_deadline),
        registration_deadline=_ensure_tz(record.registration_deadline),
        status=status,
        paid_at=_ensure_tz(record.paid_at),
        submitted_at=_ensure_tz(record.submitted_at),
        snapshot_taken_at=_ensure_tz(record.snapshot_taken_at),
        snapshot_source_team_id=record.snapshot_source_team_id,
        snapshot_roster_hash=record.snapshot_roster_hash,
    )


def _division_pricing_from_record(record: DivisionPricingRecord) -> DivisionPricing:
    deadline = record.early_bird_deadline_date or _ensure_tz(record.early_bird_deadline_at)
    early_bird = (
        EarlyBirdTier(price=record.early_bird_price, deadline=deadline)
        if record.early_bird_price is not None and deadline is not None
        else None
    )
    return DivisionPricing(
        name=record.name,
        regular=RegularTier(price=record.regular_price or 0.0),
        early_bird=early_bird,
    )


def _event_from_record(record: EventRecord) -> Event:
    return Event(
        id=record.id,
        name=record.name,
        date=_ensure_tz(record.event_date),
        available_divisions=tuple(
            _division_pricing_from_record(row)
            for row in sorted(record.divisions, key=lambda row: row.position or 0)
        ),
        organizer=record.organizer,
        location=record.location,
        registration_deadline=_ensure_tz(record.registration_deadline),
        early_bird_deadline=_ensure_tz(record.early_bird_deadline),
    )
