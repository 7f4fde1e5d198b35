"""SQLAlchemy models and session utilities for Postgres storage."""

from .models import (
    Base,
    ClubRecord,
    DivisionPricingRecord,
    EventRecord,
    RegisteredMemberRecord,
    RegisteredTeamRecord,
    RegistrationRecord,
    RosterMemberRecord,
    TeamRecord,
)
from .session import async_session_factory, create_engine

__all__ = [
    "Base",
    "create_engine",
    "async_session_factory",
    "ClubRecord",
    "DivisionPricingRecord",
    "EventRecord",
    "RegisteredMemberRecord",
    "RegisteredTeamRecord",
    "RegistrationRecord",
    "RosterMemberRecord",
    "TeamRecord",
]
