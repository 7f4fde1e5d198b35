"""Dictionary-backed storage facade for application service tests."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from club_invoicing.domain.models import ClubData, Event


class _ClubsRepo:
    def __init__(self, clubs: Mapping[str, ClubData]) -> None:
        self._clubs = dict(clubs)
        self.calls: list[str] = []

    async def get_club_data(self, club_owner_id: str) -> ClubData:
        self.calls.append(club_owner_id)
        return self._clubs.get(club_owner_id, ClubData())

    async def list_club_owner_ids(self) -> Sequence[str]:
        return tuple(self._clubs)


class _EventsRepo:
    def __init__(self, events: Iterable[Event]) -> None:
        self._events = {event.id: event for event in events}
        self.calls: list[str] = []

    async def get(self, event_id: str) -> Optional[Event]:
        self.calls.append(event_id)
        return self._events.get(event_id)

    async def list_events(self) -> Sequence[Event]:
        return tuple(self._events.values())


class InMemoryStorage:
    """Storage facade serving fixed club data and events."""

    def __init__(
        self,
        clubs: Mapping[str, ClubData] | None = None,
        events: Iterable[Event] = (),
    ) -> None:
        self._clubs = _ClubsRepo(clubs or {})
        self._events = _EventsRepo(events)
        self.closed = False

    @property
    def clubs(self) -> _ClubsRepo:
        return self._clubs

    @property
    def events(self) -> _EventsRepo:
        return self._events

    async def init(self) -> None:
        self.closed = False

    async def close(self) -> None:
        self.closed = True
