"""Postgres backed implementation of the storage facade."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from club_invoicing.application.ports.repositories import ClubDataRepository, EventRepository
from club_invoicing.application.ports.storage import Storage
from infra.db import async_session_factory, create_engine
from infra.db.repositories import PostgresClubDataRepo, PostgresEventsRepo


class PostgresStorage(Storage):
    """Storage facade powered by Postgres and SQLAlchemy."""

    def __init__(self, *, database_url: str) -> None:
        self._database_url = database_url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._clubs_repo: PostgresClubDataRepo | None = None
        self._events_repo: PostgresEventsRepo | None = None

    async def init(self) -> None:
        self._engine = create_engine(self._database_url)
        self._session_factory = async_session_factory(self._engine)
        self._clubs_repo = PostgresClubDataRepo(self._session_factory)
        self._events_repo = PostgresEventsRepo(self._session_factory)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
        self._clubs_repo = None
        self._events_repo = None

    @property
    def clubs(self) -> ClubDataRepository:
        if self._clubs_repo is None:
            raise RuntimeError("Storage not initialised")
        return self._clubs_repo

    @property
    def events(self) -> EventRepository:
        if self._events_repo is None:
            raise RuntimeError("Storage not initialised")
        return self._events_repo
