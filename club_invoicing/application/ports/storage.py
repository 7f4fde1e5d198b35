"""Storage abstraction combining repositories behind a single backend."""

from __future__ import annotations

from typing import Protocol

from .repositories import ClubDataRepository, EventRepository


class Storage(Protocol):
    """Provides access to persistence backends grouped under a single facade."""

    @property
    def clubs(self) -> ClubDataRepository:
        """Return repository serving club data."""

    @property
    def events(self) -> EventRepository:
        """Return repository serving events."""

    async def init(self) -> None:
        """Initialise underlying connections or schemas if needed."""

    async def close(self) -> None:
        """Release any allocated resources (connections, pools, caches)."""
