from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from club_invoicing.domain.models import (  # noqa: E402
    ClubData,
    ClubTeamSnapshot,
    MemberRole,
    Person,
    RegisteredMember,
    RegisteredTeam,
    Roster,
    Team,
)
from tests.factories import EventFactory, RegistrationFactory  # noqa: E402


@pytest.fixture
def fixed_now() -> datetime:
    """Return a stable "now" so assembled invoices are comparable."""

    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_roster() -> Roster:
    """Return a roster with one person in every role bucket."""

    return Roster(
        team_id="team-1",
        coaches=(Person(id="p-coach", first_name="Casey", last_name="Coach"),),
        athletes=(
            Person(id="p-a1", first_name="Avery", last_name="Stone", email="avery@example.com"),
            Person(id="p-a2", first_name="Blake", last_name="River"),
        ),
        reservists=(Person(id="p-res", first_name="Riley", last_name="Bench"),),
        chaperones=(Person(id="p-chap", first_name="Jordan", last_name="Parent"),),
        updated_at=datetime(2025, 1, 10, tzinfo=timezone.utc),
    )


@pytest.fixture
def snapshot_team() -> RegisteredTeam:
    """Return a club-team snapshot of four athletes."""

    return RegisteredTeam(
        id="rt-1",
        name="Shooting Stars",
        division="U14 - Novice - 3",
        source=ClubTeamSnapshot(source_team_id="team-1"),
        members=tuple(
            RegisteredMember(
                id=f"rm-{index}",
                first_name=f"Kid{index}",
                last_name="Star",
                role=MemberRole.ATHLETE,
            )
            for index in range(1, 5)
        ),
        size=4,
        club_owner_id="club-001",
    )


@pytest.fixture
def club_data(snapshot_team: RegisteredTeam, sample_roster: Roster) -> ClubData:
    """Club owning one team, its roster and a four-athlete registration."""

    registration = RegistrationFactory(
        id="reg-1",
        team_id="team-1",
        registered_team_id=snapshot_team.id,
        snapshot_taken_at=datetime(2024, 12, 15, tzinfo=timezone.utc),
    )
    return ClubData(
        teams=(Team(id="team-1", name="Shooting Stars", division="U14 - Novice - 3", size=5),),
        rosters=(sample_roster,),
        registered_teams=(snapshot_team,),
        registrations=(registration,),
        club_name="Starlight Cheer",
    )


@pytest.fixture
def sample_event():
    return EventFactory()
