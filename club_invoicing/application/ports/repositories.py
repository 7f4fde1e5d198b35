"""Repository contracts for reading club and event data."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from club_invoicing.domain.models import ClubData, Event


class ClubDataRepository(Protocol):
    """Provides read access to everything a club owns."""

    async def get_club_data(self, club_owner_id: str) -> ClubData:
        """Return teams, rosters, snapshots and registrations of a club."""

    async def list_club_owner_ids(self) -> Sequence[str]:
        """Return identifiers of clubs known to the backend."""


class EventRepository(Protocol):
    """Provides read access to events and their division pricing."""

    async def get(self, event_id: str) -> Optional[Event]:
        """Fetch an event by identifier; deleted events return ``None``."""

    async def list_events(self) -> Sequence[Event]:
        """Return every event with its division pricing."""
