"""Domain factories for club invoicing tests."""

from __future__ import annotations

import datetime as dt

import factory

from club_invoicing.domain.models import (
    ClubTeamSnapshot,
    DivisionPricing,
    EarlyBirdTier,
    Event,
    MemberRole,
    Person,
    RegisteredMember,
    RegisteredTeam,
    Registration,
    RegularTier,
    Team,
)


class PersonFactory(factory.Factory):
    """Factory building :class:`~club_invoicing.domain.models.Person` entities."""

    id = factory.Sequence(lambda n: f"person-{n:04d}")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    dob = factory.LazyFunction(lambda: dt.date(2012, 5, 17))
    email = factory.LazyAttribute(lambda obj: f"{obj.id}@example.com")
    phone = "555-0100"

    class Meta:
        model = Person


class TeamFactory(factory.Factory):
    id = factory.Sequence(lambda n: f"team-{n:03d}")
    name = factory.Sequence(lambda n: f"Team {n}")
    division = "U14 - Novice - 3"
    size = 0
    coed_count = 0

    class Meta:
        model = Team


class RegisteredMemberFactory(factory.Factory):
    """Factory constructing frozen registered members."""

    id = factory.Sequence(lambda n: f"member-{n:04d}")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    role = MemberRole.ATHLETE
    dob = None
    email = None
    phone = None
    person_id = None

    class Meta:
        model = RegisteredMember


class RegisteredTeamFactory(factory.Factory):
    id = factory.Sequence(lambda n: f"registered-team-{n:03d}")
    name = factory.Sequence(lambda n: f"Registered Team {n}")
    division = "U14 - Novice - 3"
    source = factory.LazyFunction(lambda: ClubTeamSnapshot(source_team_id=None))
    members = factory.LazyFunction(tuple)
    size = factory.LazyAttribute(lambda obj: len(obj.members))
    coed_count = 0
    club_owner_id = "club-001"

    class Meta:
        model = RegisteredTeam


class RegistrationFactory(factory.Factory):
    """Factory generating pending registrations of ``club-001``."""

    id = factory.Sequence(lambda n: f"reg-{n:04d}")
    event_id = "evt-1"
    event_name = "Winter Classic"
    division = "U14 - Novice - 3"
    event_date = factory.LazyFunction(lambda: dt.datetime(2025, 3, 15, tzinfo=dt.timezone.utc))
    club_owner_id = "club-001"
    team_id = None
    registered_team_id = None
    registered_team = None
    athletes = None
    invoice_total = 0.0

    class Meta:
        model = Registration


class DivisionPricingFactory(factory.Factory):
    name = "U14 - Novice - 3"
    regular = factory.LazyFunction(lambda: RegularTier(price=130.0))
    early_bird = factory.LazyFunction(
        lambda: EarlyBirdTier(price=100.0, deadline=dt.date(2025, 1, 1))
    )

    class Meta:
        model = DivisionPricing


class EventFactory(factory.Factory):
    id = "evt-1"
    name = "Winter Classic"
    date = factory.LazyFunction(lambda: dt.datetime(2025, 3, 15, tzinfo=dt.timezone.utc))
    available_divisions = factory.LazyFunction(lambda: (DivisionPricingFactory(),))
    organizer = "Sapphire Productions"

    class Meta:
        model = Event
