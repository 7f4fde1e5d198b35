"""Factories for domain models used in tests."""

from .domain import (
    DivisionPricingFactory,
    EventFactory,
    PersonFactory,
    RegisteredMemberFactory,
    RegisteredTeamFactory,
    RegistrationFactory,
    TeamFactory,
)

__all__ = [
    "DivisionPricingFactory",
    "EventFactory",
    "PersonFactory",
    "RegisteredMemberFactory",
    "RegisteredTeamFactory",
    "RegistrationFactory",
    "TeamFactory",
]
