"""Declarative models for club invoicing persistence."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    type_annotation_map = {
        date: Date(),
        datetime: DateTime(timezone=True),
    }


class ClubRecord(Base):
    """Display data of a club account."""

    __tablename__ = "clubs"

    club_owner_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    club_name: Mapped[str | None] = mapped_column(String(255), nullable=True)


class TeamRecord(Base):
    """Club team as currently configured."""

    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    club_owner_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    division: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    coed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    roster: Mapped[list["RosterMemberRecord"]] = relationship(
        back_populates="team", cascade="all, delete-orphan", order_by="RosterMemberRecord.position"
    )


class RosterMemberRecord(Base):
    """Person currently on a team roster."""

    __tablename__ = "roster_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[str] = mapped_column(String(64), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False)
    person_id: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    team: Mapped[TeamRecord] = relationship(back_populates="roster")


class RegisteredTeamRecord(Base):
    """Frozen team composition captured at registration time."""

    __tablename__ = "registered_teams"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    club_owner_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    division: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    source_type: Mapped[str] = mapped_column(String(32), nullable=False, default="club_team")
    source_team_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    coed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    members: Mapped[list["RegisteredMemberRecord"]] = relationship(
        back_populates="registered_team",
        cascade="all, delete-orphan",
        order_by="RegisteredMemberRecord.position",
    )


class RegisteredMemberRecord(Base):
    """Immutable member copy belonging to a registered team."""

    __tablename__ = "registered_members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    registered_team_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("registered_teams.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    person_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    registered_team: Mapped[RegisteredTeamRecord] = relationship(back_populates="members")


class RegistrationRecord(Base):
    """Registration of a club team into an event division."""

    __tablename__ = "registrations"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    club_owner_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    event_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    event_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    division: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    organizer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    team_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    registered_team_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("registered_teams.id"), nullable=True
    )
    athletes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    invoice_total: Mapped[float | None] = mapped_column(Float, nullable=True)
    payment_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    registration_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    snapshot_taken_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    snapshot_source_team_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    snapshot_roster_hash: Mapped[str | None] = mapped_column(String(32), nullable=True)


class EventRecord(Base):
    """Event with its division pricing rows."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    organizer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    registration_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    early_bird_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    divisions: Mapped[list["DivisionPricingRecord"]] = relationship(
        back_populates="event", cascade="all, delete-orphan", order_by="DivisionPricingRecord.position"
    )


class DivisionPricingRecord(Base):
    """Price configuration of one event division.

    An early-bird deadline is stored either as a calendar date (covering the
    whole day) or as an exact instant.
    """

    __tablename__ = "division_pricing"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[str] = mapped_column(String(64), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    regular_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    early_bird_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    early_bird_deadline_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    early_bird_deadline_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    event: Mapped[EventRecord] = relationship(back_populates="divisions")
