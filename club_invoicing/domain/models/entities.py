"""Club, roster, event and registration entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Sequence, Union

MoneyInput = Union[float, int, str, None]


class MemberRole(str, Enum):
    """Role a person plays inside a team."""

    COACH = "coach"
    ATHLETE = "athlete"
    RESERVIST = "reservist"
    CHAPERONE = "chaperone"

    @property
    def label(self) -> str:
        return self.value.capitalize()


ROLE_ORDER: tuple[MemberRole, ...] = (
    MemberRole.COACH,
    MemberRole.ATHLETE,
    MemberRole.RESERVIST,
    MemberRole.CHAPERONE,
)
"""Canonical role order for snapshots and any member listing."""


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class RegisteredTeamSource(str, Enum):
    """Provenance of a registered team snapshot."""

    CLUB_TEAM = "club_team"
    UPLOAD = "upload"


@dataclass(slots=True, frozen=True)
class Person:
    """An individual owned by a club."""

    id: str
    first_name: str
    last_name: str
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Team:
    """A club team as currently configured."""

    id: str
    name: str
    division: str
    size: int = 0
    coed_count: int = 0


@dataclass(slots=True, frozen=True)
class Roster:
    """Current, editable membership of a team split into role buckets."""

    team_id: str
    coaches: Sequence[Person] = field(default_factory=tuple)
    athletes: Sequence[Person] = field(default_factory=tuple)
    reservists: Sequence[Person] = field(default_factory=tuple)
    chaperones: Sequence[Person] = field(default_factory=tuple)
    updated_at: Optional[datetime] = None

    def people(self, role: MemberRole) -> Sequence[Person]:
        """Return the bucket holding ``role``."""

        if role is MemberRole.COACH:
            return self.coaches
        if role is MemberRole.ATHLETE:
            return self.athletes
        if role is MemberRole.RESERVIST:
            return self.reservists
        return self.chaperones


@dataclass(slots=True, frozen=True)
class RegisteredMember:
    """Immutable copy of a person captured at registration time."""

    id: str
    first_name: str
    last_name: str
    role: MemberRole
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    person_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(slots=True, frozen=True)
class ClubTeamSnapshot:
    """Snapshot derived from a club team roster."""

    source_team_id: Optional[str] = None


@dataclass(slots=True, frozen=True)
class UploadSnapshot:
    """Snapshot imported ad hoc, with no live roster behind it."""

    file_name: Optional[str] = None


SnapshotSource = Union[ClubTeamSnapshot, UploadSnapshot]


@dataclass(slots=True, frozen=True)
class RegisteredTeam:
    """Frozen composition of a team at signup."""

    id: str
    name: str
    division: str
    source: SnapshotSource
    members: Sequence[RegisteredMember] = field(default_factory=tuple)
    size: int = 0
    coed_count: int = 0
    club_owner_id: Optional[str] = None

    @property
    def source_type(self) -> RegisteredTeamSource:
        if isinstance(self.source, UploadSnapshot):
            return RegisteredTeamSource.UPLOAD
        return RegisteredTeamSource.CLUB_TEAM

    @property
    def source_team_id(self) -> Optional[str]:
        if isinstance(self.source, ClubTeamSnapshot):
            return self.source.source_team_id
        return None


@dataclass(slots=True, frozen=True)
class Registration:
    """A club entering one division of an event.

    Only ``status`` and ``paid_at`` change after creation, and only through
    the persistence layer.
    """

    id: str
    event_id: str
    event_name: str
    division: str
    event_date: Optional[datetime] = None
    location: Optional[str] = None
    organizer: Optional[str] = None
    club_owner_id: Optional[str] = None
    team_id: Optional[str] = None
    registered_team_id: Optional[str] = None
    registered_team: Optional[RegisteredTeam] = None
    athletes: Optional[int] = None
    invoice_total: MoneyInput = 0.0
    payment_deadline: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    status: RegistrationStatus = RegistrationStatus.PENDING
    paid_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    snapshot_taken_at: Optional[datetime] = None
    snapshot_source_team_id: Optional[str] = None
    snapshot_roster_hash: Optional[str] = None


@dataclass(slots=True, frozen=True)
class EarlyBirdTier:
    price: float
    deadline: Union[datetime, date]


@dataclass(slots=True, frozen=True)
class RegularTier:
    price: float


@dataclass(slots=True, frozen=True)
class DivisionPricing:
    """Pricing configuration of one event division."""

    name: str
    regular: RegularTier
    early_bird: Optional[EarlyBirdTier] = None


@dataclass(slots=True, frozen=True)
class Event:
    """Event exposing its division pricing."""

    id: str
    name: str
    date: Optional[datetime] = None
    available_divisions: Sequence[DivisionPricing] = field(default_factory=tuple)
    organizer: Optional[str] = None
    location: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    early_bird_deadline: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class ClubData:
    """Read-only view of everything a club owns."""

    teams: Sequence[Team] = field(default_factory=tuple)
    rosters: Sequence[Roster] = field(default_factory=tuple)
    registered_teams: Sequence[RegisteredTeam] = field(default_factory=tuple)
    registrations: Sequence[Registration] = field(default_factory=tuple)
    club_name: Optional[str] = None

    def find_team(self, team_id: Optional[str]) -> Optional[Team]:
        if not team_id:
            return None
        return next((team for team in self.teams if team.id == team_id), None)

    def find_roster(self, team_id: Optional[str]) -> Optional[Roster]:
        if not team_id:
            return None
        return next((roster for roster in self.rosters if roster.team_id == team_id), None)

    def find_registration(self, registration_id: str) -> Optional[Registration]:
        return next(
            (item for item in self.registrations if item.id == registration_id),
            None,
        )
