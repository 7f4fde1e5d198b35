"""Google Sheets backed implementation of the storage facade.

Every worksheet is a flat table with a header row. Rows belonging to a club
carry a ``club_owner_id`` column; child rows (roster people, registered
members, division pricing) point at their parent through ``team_id``,
``registered_team_id`` or ``event_id``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import gspread
from gspread import Worksheet

from club_invoicing.application.ports.repositories import ClubDataRepository, EventRepository
from club_invoicing.application.ports.storage import Storage
from club_invoicing.domain.dates import parse_calendar_date, parse_timestamp
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
from club_invoicing.domain.money import parse_money

logger = logging.getLogger(__name__)

_DATE_ONLY = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")


def _normalise_key(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")


def _parse_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return None


def _parse_price(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return parse_money(value)


def _parse_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    return parse_calendar_date(value)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    return parse_timestamp(value)


def _parse_deadline(value: Any) -> date | datetime | None:
    """Keep calendar dates as dates so the deadline covers the whole day."""

    if value in (None, ""):
        return None
    if isinstance(value, (date, datetime)):
        return value
    text = str(value).strip()
    if _DATE_ONLY.match(text):
        return _parse_date(text)
    return _parse_datetime(text)


def _parse_role(value: Any) -> Optional[MemberRole]:
    text = str(value or "").strip().lower()
    if not text:
        return MemberRole.ATHLETE
    if text == "coaches":
        text = MemberRole.COACH.value
    elif text.endswith("s") and text[:-1] in {role.value for role in MemberRole}:
        text = text[:-1]
    try:
        return MemberRole(text)
    except ValueError:
        return None


def _parse_status(value: Any) -> RegistrationStatus:
    text = str(value or "").strip().lower()
    return RegistrationStatus.PAID if text == RegistrationStatus.PAID.value else RegistrationStatus.PENDING


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _get_first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] not in (None, ""):
            return row[key]
    return None


async def _get_records(worksheet: Worksheet) -> list[dict[str, Any]]:
    return await asyncio.to_thread(worksheet.get_all_records)


@dataclass(slots=True)
class SheetsOptions:
    """Configuration for Google Sheets storage."""

    spreadsheet_key: str
    credentials_path: Path


class GoogleSheetsStorage(Storage):
    """Read-only storage facade backed by Google Sheets worksheets."""

    def __init__(self, *, spreadsheet_key: str, credentials_path: Path) -> None:
        self._options = SheetsOptions(spreadsheet_key=spreadsheet_key, credentials_path=credentials_path)
        self._client: gspread.Client | None = None
        self._spreadsheet: gspread.Spreadsheet | None = None
        self._clubs_repo = SheetsClubDataRepo(self)
        self._events_repo = SheetsEventsRepo(self)

    async def init(self) -> None:
        await asyncio.to_thread(self._connect)

    async def close(self) -> None:
        self._client = None
        self._spreadsheet = None

    @property
    def clubs(self) -> ClubDataRepository:
        return self._clubs_repo

    @property
    def events(self) -> EventRepository:
        return self._events_repo

    def _connect(self) -> None:
        if self._client is None:
            try:
                self._client = gspread.service_account(filename=str(self._options.credentials_path))
            except Exception as exc:  # pragma: no cover - depends on external creds
                raise RuntimeError(
                    f"Unable to create Google Sheets client using credentials at {self._options.credentials_path}."
                ) from exc
        try:
            self._spreadsheet = self._client.open_by_key(self._options.spreadsheet_key)
        except gspread.SpreadsheetNotFound as exc:
            raise RuntimeError(
                f"Spreadsheet with key '{self._options.spreadsheet_key}' not found or not shared with the service account."
            ) from exc

    def _require_spreadsheet(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            raise RuntimeError("Storage not initialised; call init() before usage.")
        return self._spreadsheet

    async def get_worksheet(self, name: str) -> Worksheet:
        spreadsheet = self._require_spreadsheet()
        try:
            return await asyncio.to_thread(spreadsheet.worksheet, name)
        except gspread.WorksheetNotFound:
            logger.warning("Worksheet '%s' is missing in spreadsheet %s", name, spreadsheet.id)
            raise

    async def fetch_records(self, worksheet_name: str) -> list[dict[str, Any]]:
        """Return rows of ``worksheet_name`` with normalised column names."""

        try:
            worksheet = await self.get_worksheet(worksheet_name)
        except gspread.WorksheetNotFound:
            return []
        records = await _get_records(worksheet)
        return [{_normalise_key(key): value for key, value in record.items()} for record in records]


def _owned_by(row: Mapping[str, Any], club_owner_id: str) -> bool:
    owner = _get_first(row, "club_owner_id", "owner_id", "club_id")
    return owner is not None and str(owner).strip() == club_owner_id


def _person_from_row(row: Mapping[str, Any]) -> Optional[Person]:
    identifier = _get_first(row, "person_id", "id")
    if identifier is None:
        logger.debug("Skipping roster row without identifier: %s", row)
        return None
    return Person(
        id=str(identifier),
        first_name=str(_get_first(row, "first_name", "firstname") or "").strip(),
        last_name=str(_get_first(row, "last_name", "lastname", "surname") or "").strip(),
        dob=_parse_date(_get_first(row, "dob", "date_of_birth")),
        email=_text(_get_first(row, "email")),
        phone=_text(_get_first(row, "phone", "phone_number")),
    )


class SheetsClubDataRepo(ClubDataRepository):
    """Assembles a club's teams, rosters, snapshots and registrations."""

    _teams_worksheet = "Teams"
    _rosters_worksheet = "Rosters"
    _registered_teams_worksheet = "RegisteredTeams"
    _registered_members_worksheet = "RegisteredMembers"
    _registrations_worksheet = "Registrations"
    _clubs_worksheet = "Clubs"

    def __init__(self, storage: GoogleSheetsStorage) -> None:
        self._storage = storage

    async def get_club_data(self, club_owner_id: str) -> ClubData:
        owner = str(club_owner_id).strip()
        team_rows, roster_rows, snapshot_rows, member_rows, registration_rows, club_rows = (
            await asyncio.gather(
                self._storage.fetch_records(self._teams_worksheet),
                self._storage.fetch_records(self._rosters_worksheet),
                self._storage.fetch_records(self._registered_teams_worksheet),
                self._storage.fetch_records(self._registered_members_worksheet),
                self._storage.fetch_records(self._registrations_worksheet),
                self._storage.fetch_records(self._clubs_worksheet),
            )
        )

        teams = tuple(
            team
            for team in (self._row_to_team(row) for row in team_rows if _owned_by(row, owner))
            if team is not None
        )
        rosters = self._rows_to_rosters(row for row in roster_rows if _owned_by(row, owner))
        members_by_snapshot = self._rows_to_members(member_rows)
        registered_teams = tuple(
            snapshot
            for snapshot in (
                self._row_to_registered_team(row, members_by_snapshot)
                for row in snapshot_rows
                if _owned_by(row, owner)
            )
            if snapshot is not None
        )
        registrations = tuple(
            registration
            for registration in (
                self._row_to_registration(row) for row in registration_rows if _owned_by(row, owner)
            )
            if registration is not None
        )
        club_name = next(
            (
                _text(_get_first(row, "club_name", "name"))
                for row in club_rows
                if _owned_by(row, owner)
            ),
            None,
        )
        return ClubData(
            teams=teams,
            rosters=rosters,
            registered_teams=registered_teams,
            registrations=registrations,
            club_name=club_name,
        )

    async def list_club_owner_ids(self) -> Sequence[str]:
        owners: dict[str, None] = {}
        for row in await self._storage.fetch_records(self._registrations_worksheet):
            owner = _text(_get_first(row, "club_owner_id", "owner_id", "club_id"))
            if owner:
                owners.setdefault(owner, None)
        return tuple(owners)

    def _row_to_team(self, row: Mapping[str, Any]) -> Optional[Team]:
        identifier = _get_first(row, "id", "team_id")
        if identifier is None:
            logger.debug("Skipping team row without identifier: %s", row)
            return None
        team_id = str(identifier)
        return Team(
            id=team_id,
            name=str(_get_first(row, "name", "team_name") or "").strip() or team_id,
            division=str(_get_first(row, "division") or "").strip(),
            size=_parse_int(_get_first(row, "size", "team_size")) or 0,
            coed_count=_parse_int(_get_first(row, "coed_count", "coed")) or 0,
        )

    def _rows_to_rosters(self, rows: Any) -> tuple[Roster, ...]:
        buckets: dict[str, dict[MemberRole, list[Person]]] = defaultdict(lambda: defaultdict(list))
        updated: dict[str, Optional[datetime]] = {}
        for row in rows:
            team_id = _text(_get_first(row, "team_id", "team"))
            role = _parse_role(_get_first(row, "role", "type"))
            person = _person_from_row(row)
            if team_id is None or role is None or person is None:
                logger.debug("Skipping roster row %s", row)
                continue
            buckets[team_id][role].append(person)
            row_updated = _parse_datetime(_get_first(row, "updated_at", "roster_updated_at"))
            current = updated.setdefault(team_id, None)
            if row_updated is not None and (current is None or row_updated > current):
                updated[team_id] = row_updated
        return tuple(
            Roster(
                team_id=team_id,
                coaches=tuple(people[MemberRole.COACH]),
                athletes=tuple(people[MemberRole.ATHLETE]),
                reservists=tuple(people[MemberRole.RESERVIST]),
                chaperones=tuple(people[MemberRole.CHAPERONE]),
                updated_at=updated.get(team_id),
            )
            for team_id, people in buckets.items()
        )

    def _rows_to_members(self, rows: Sequence[Mapping[str, Any]]) -> dict[str, list[RegisteredMember]]:
        members: dict[str, list[RegisteredMember]] = defaultdict(list)
        for row in rows:
            snapshot_id = _text(_get_first(row, "registered_team_id", "snapshot_id"))
            identifier = _get_first(row, "id", "member_id")
            role = _parse_role(_get_first(row, "role", "type"))
            if snapshot_id is None or identifier is None or role is None:
                logger.debug("Skipping registered member row %s", row)
                continue
            members[snapshot_id].append(
                RegisteredMember(
                    id=str(identifier),
                    first_name=str(_get_first(row, "first_name", "firstname") or "").strip(),
                    last_name=str(_get_first(row, "last_name", "lastname", "surname") or "").strip(),
                    role=role,
                    dob=_parse_date(_get_first(row, "dob", "date_of_birth")),
                    email=_text(_get_first(row, "email")),
                    phone=_text(_get_first(row, "phone", "phone_number")),
                    person_id=_text(_get_first(row, "person_id")),
                )
            )
        return members

    def _row_to_registered_team(
        self,
        row: Mapping[str, Any],
        members_by_snapshot: Mapping[str, Sequence[RegisteredMember]],
    ) -> Optional[RegisteredTeam]:
        identifier = _get_first(row, "id", "registered_team_id")
        if identifier is None:
            logger.debug("Skipping registered team row without identifier: %s", row)
            return None
        snapshot_id = str(identifier)
        source_type = str(_get_first(row, "source_type", "source") or "").strip().lower()
        source: ClubTeamSnapshot | UploadSnapshot
        if source_type == RegisteredTeamSource.UPLOAD.value:
            source = UploadSnapshot(file_name=_text(_get_first(row, "file_name", "upload_file")))
        else:
            source = ClubTeamSnapshot(source_team_id=_text(_get_first(row, "source_team_id", "team_id")))
        members = tuple(members_by_snapshot.get(snapshot_id, ()))
        return RegisteredTeam(
            id=snapshot_id,
            name=str(_get_first(row, "name", "team_name") or "").strip() or snapshot_id,
            division=str(_get_first(row, "division") or "").strip(),
            source=source,
            members=members,
            size=_parse_int(_get_first(row, "size", "team_size")) or len(members),
            coed_count=_parse_int(_get_first(row, "coed_count", "coed")) or 0,
            club_owner_id=_text(_get_first(row, "club_owner_id")),
        )

    def _row_to_registration(self, row: Mapping[str, Any]) -> Optional[Registration]:
        identifier = _get_first(row, "id", "registration_id")
        event_id = _get_first(row, "event_id")
        if identifier is None or event_id is None:
            logger.debug("Skipping registration row without identifiers: %s", row)
            return None
        return Registration(
            id=str(identifier),
            event_id=str(event_id),
            event_name=str(_get_first(row, "event_name", "event") or "").strip(),
            division=str(_get_first(row, "division") or "").strip(),
            event_date=_parse_datetime(_get_first(row, "event_date")),
            location=_text(_get_first(row, "location")),
            organizer=_text(_get_first(row, "organizer")),
            club_owner_id=_text(_get_first(row, "club_owner_id")),
            team_id=_text(_get_first(row, "team_id")),
            registered_team_id=_text(_get_first(row, "registered_team_id")),
            athletes=_parse_int(_get_first(row, "athletes", "athlete_count")),
            invoice_total=_get_first(row, "invoice_total", "total"),
            payment_deadline=_parse_datetime(_get_first(row, "payment_deadline")),
            registration_deadline=_parse_datetime(_get_first(row, "registration_deadline")),
            status=_parse_status(_get_first(row, "status")),
            paid_at=_parse_datetime(_get_first(row, "paid_at")),
            submitted_at=_parse_datetime(_get_first(row, "submitted_at")),
            snapshot_taken_at=_parse_datetime(_get_first(row, "snapshot_taken_at")),
            snapshot_source_team_id=_text(_get_first(row, "snapshot_source_team_id")),
            snapshot_roster_hash=_text(_get_first(row, "snapshot_roster_hash")),
        )


class SheetsEventsRepo(EventRepository):
    """Read-only event repository joining events with their division pricing."""

    _events_worksheet = "Events"
    _divisions_worksheet = "Divisions"

    def __init__(self, storage: GoogleSheetsStorage) -> None:
        self._storage = storage

    async def get(self, event_id: str) -> Optional[Event]:
        for event in await self.list_events():
            if event.id == str(event_id):
                return event
        return None

    async def list_events(self) -> Sequence[Event]:
        event_rows, division_rows = await asyncio.gather(
            self._storage.fetch_records(self._events_worksheet),
            self._storage.fetch_records(self._divisions_worksheet),
        )
        pricing: dict[str, list[DivisionPricing]] = defaultdict(list)
        for row in division_rows:
            event_id = _text(_get_first(row, "event_id"))
            option = self._row_to_pricing(row)
            if event_id is None or option is None:
                continue
            pricing[event_id].append(option)

        events: list[Event] = []
        for row in event_rows:
            identifier = _get_first(row, "id", "event_id")
            if identifier is None:
                logger.debug("Skipping event row without identifier: %s", row)
                continue
            event_id = str(identifier)
            events.append(
                Event(
                    id=event_id,
                    name=str(_get_first(row, "name", "event_name") or "").strip() or event_id,
                    date=_parse_datetime(_get_first(row, "date", "event_date")),
                    available_divisions=tuple(pricing.get(event_id, ())),
                    organizer=_text(_get_first(row, "organizer")),
                    location=_text(_get_first(row, "location")),
                    registration_deadline=_parse_datetime(_get_first(row, "registration_deadline")),
                    early_bird_deadline=_parse_datetime(_get_first(row, "early_bird_deadline")),
                )
            )
        return tuple(events)

    def _row_to_pricing(self, row: Mapping[str, Any]) -> Optional[DivisionPricing]:
        name = _text(_get_first(row, "name", "division"))
        regular_price = _parse_price(_get_first(row, "regular_price", "price"))
        if name is None or regular_price is None:
            logger.debug("Skipping division row without name or regular price: %s", row)
            return None
        early_price = _parse_price(_get_first(row, "early_bird_price"))
        early_deadline = _parse_deadline(_get_first(row, "early_bird_deadline"))
        early_bird = (
            EarlyBirdTier(price=early_price, deadline=early_deadline)
            if early_price is not None and early_deadline is not None
            else None
        )
        return DivisionPricing(name=name, regular=RegularTier(price=regular_price), early_bird=early_bird)
