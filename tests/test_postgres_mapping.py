"""Tests for mapping SQLAlchemy records onto domain entities."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from club_invoicing.domain.models import (
    ClubTeamSnapshot,
    MemberRole,
    RegistrationStatus,
    UploadSnapshot,
)
from club_invoicing.infrastructure.storage import PostgresStorage
from infra.db.models import (
    ClubRecord,
    DivisionPricingRecord,
    EventRecord,
    RegisteredMemberRecord,
    RegisteredTeamRecord,
    RegistrationRecord,
    RosterMemberRecord,
    TeamRecord,
)
from infra.db.repositories import (
    _club_data_from_records,
    _event_from_record,
    _registered_team_from_record,
    _registration_from_record,
)


def _member(member_id: str, position: int, role: str = "athlete") -> RegisteredMemberRecord:
    return RegisteredMemberRecord(
        id=member_id,
        registered_team_id="rt-1",
        position=position,
        role=role,
        first_name=member_id,
        last_name="Star",
    )


def test_registered_team_members_follow_position() -> None:
    record = RegisteredTeamRecord(
        id="rt-1",
        club_owner_id="club-001",
        name="Shooting Stars",
        division="U14 - Novice - 3",
        source_type="club_team",
        source_team_id="team-1",
        size=0,
        coed_count=1,
        members=[_member("b", 2), _member("coach", 0, role="coach"), _member("a", 1), _member("x", 3, role="ghost")],
    )

    team = _registered_team_from_record(record)

    assert team.source == ClubTeamSnapshot(source_team_id="team-1")
    assert [member.id for member in team.members] == ["coach", "a", "b"]
    assert team.members[0].role is MemberRole.COACH
    assert team.size == 3
    assert team.coed_count == 1


def test_upload_snapshot_record() -> None:
    record = RegisteredTeamRecord(
        id="rt-2",
        club_owner_id="club-001",
        name="Uploaded",
        division="Open",
        source_type="upload",
        file_name="squad.csv",
        size=12,
        coed_count=0,
    )

    team = _registered_team_from_record(record)

    assert team.source == UploadSnapshot(file_name="squad.csv")
    assert team.members == ()
    assert team.size == 12


def test_registration_record_times_are_utc() -> None:
    record = RegistrationRecord(
        id="reg-1",
        club_owner_id="club-001",
        event_id="evt-1",
        event_name="Winter Classic",
        division="U14 - Novice - 3",
        status="paid",
        invoice_total=459.9,
        paid_at=datetime(2025, 3, 1, 12, 0),
    )

    registration = _registration_from_record(record)

    assert registration.status is RegistrationStatus.PAID
    assert registration.paid_at == datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert registration.invoice_total == 459.9


def test_registration_record_offsets_convert_to_utc() -> None:
    eastern = timezone(timedelta(hours=-5))
    record = RegistrationRecord(
        id="reg-2",
        club_owner_id="club-001",
        event_id="evt-1",
        event_name="Winter Classic",
        division="Open",
        status="pending",
        submitted_at=datetime(2025, 2, 1, 19, 0, tzinfo=eastern),
    )

    registration = _registration_from_record(record)

    assert registration.submitted_at == datetime(2025, 2, 2, 0, 0, tzinfo=timezone.utc)
    assert registration.submitted_at.tzinfo is timezone.utc
    assert registration.paid_at is None
    assert registration.snapshot_taken_at is None


def test_unknown_registration_status_reads_as_pending() -> None:
    record = RegistrationRecord(id="reg-2", club_owner_id="c", event_id="e", status="refunded")

    assert _registration_from_record(record).status is RegistrationStatus.PENDING


def test_event_record_keeps_calendar_day_deadlines() -> None:
    record = EventRecord(
        id="evt-1",
        name="Winter Classic",
        event_date=datetime(2025, 3, 15, tzinfo=timezone.utc),
        organizer="Sapphire Productions",
        divisions=[
            DivisionPricingRecord(
                name="Open", position=1, regular_price=75.0, early_bird_price=None
            ),
            DivisionPricingRecord(
                name="U14 - Novice - 3",
                position=0,
                regular_price=130.0,
                early_bird_price=100.0,
                early_bird_deadline_date=date(2025, 1, 1),
            ),
            DivisionPricingRecord(
                name="Senior",
                position=2,
                regular_price=150.0,
                early_bird_price=120.0,
                early_bird_deadline_at=datetime(2025, 1, 1, 9, 30),
            ),
        ],
    )

    event = _event_from_record(record)

    assert [option.name for option in event.available_divisions] == ["U14 - Novice - 3", "Open", "Senior"]
    assert event.available_divisions[0].early_bird.deadline == date(2025, 1, 1)
    assert event.available_divisions[1].early_bird is None
    assert event.available_divisions[2].early_bird.deadline == datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)


def test_club_data_from_records_builds_rosters() -> None:
    team = TeamRecord(
        id="team-1",
        club_owner_id="club-001",
        name="Shooting Stars",
        division="U14 - Novice - 3",
        size=3,
        coed_count=0,
        roster=[
            RosterMemberRecord(id=3, person_id="p-3", role="chaperone", position=2, first_name="Pat", last_name="P"),
            RosterMemberRecord(
                id=1,
                person_id="p-1",
                role="athlete",
                position=0,
                first_name="Avery",
                last_name="Stone",
                updated_at=datetime(2025, 1, 2, tzinfo=timezone.utc),
            ),
            RosterMemberRecord(id=2, person_id="p-2", role="coach", position=1, first_name="Casey", last_name="C"),
        ],
    )

    club = _club_data_from_records(ClubRecord(club_owner_id="club-001", club_name="Starlight"), [team], [], [])

    (roster,) = club.rosters
    assert roster.team_id == "team-1"
    assert [person.id for person in roster.athletes] == ["p-1"]
    assert [person.id for person in roster.coaches] == ["p-2"]
    assert [person.id for person in roster.chaperones] == ["p-3"]
    assert roster.updated_at == datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert club.club_name == "Starlight"
    assert club.teams[0].size == 3


def test_club_data_without_club_row_has_no_name() -> None:
    assert _club_data_from_records(None, [], [], []).club_name is None


@pytest.mark.asyncio()
async def test_postgres_storage_requires_init() -> None:
    storage = PostgresStorage(database_url="postgresql+asyncpg://localhost/invoicing")

    with pytest.raises(RuntimeError, match="not initialised"):
        storage.clubs  # noqa: B018
    with pytest.raises(RuntimeError, match="not initialised"):
        storage.events  # noqa: B018
    await storage.close()
