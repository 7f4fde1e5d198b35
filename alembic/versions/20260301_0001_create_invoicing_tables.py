"""Create club, registration and event pricing tables"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20260301_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clubs",
        sa.Column("club_owner_id", sa.String(length=64), primary_key=True),
        sa.Column("club_name", sa.String(length=255), nullable=True),
    )

    op.create_table(
        "teams",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("club_owner_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("division", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("coed_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_teams_club_owner_id", "teams", ["club_owner_id"])

    op.create_table(
        "roster_members",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "team_id",
            sa.String(length=64),
            sa.ForeignKey("teams.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("person_id", sa.String(length=64), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("first_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "registered_teams",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("club_owner_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("division", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("source_type", sa.String(length=32), nullable=False, server_default="club_team"),
        sa.Column("source_team_id", sa.String(length=64), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        sa.Column("size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("coed_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_registered_teams_club_owner_id", "registered_teams", ["club_owner_id"])

    op.create_table(
        "registered_members",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column(
            "registered_team_id",
            sa.String(length=64),
            sa.ForeignKey("registered_teams.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("person_id", sa.String(length=64), nullable=True),
    )

    op.create_table(
        "registrations",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("club_owner_id", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.String(length=64), nullable=False),
        sa.Column("event_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("division", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("organizer", sa.String(length=255), nullable=True),
        sa.Column("team_id", sa.String(length=64), nullable=True),
        sa.Column(
            "registered_team_id",
            sa.String(length=64),
            sa.ForeignKey("registered_teams.id"),
            nullable=True,
        ),
        sa.Column("athletes", sa.Integer(), nullable=True),
        sa.Column("invoice_total", sa.Float(), nullable=True),
        sa.Column("payment_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("snapshot_taken_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("snapshot_source_team_id", sa.String(length=64), nullable=True),
        sa.Column("snapshot_roster_hash", sa.String(length=32), nullable=True),
    )
    op.create_index("ix_registrations_club_owner_id", "registrations", ["club_owner_id"])
    op.create_index("ix_registrations_event_id", "registrations", ["event_id"])

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("organizer", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("registration_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("early_bird_deadline", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "division_pricing",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "event_id",
            sa.String(length=64),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("regular_price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("early_bird_price", sa.Float(), nullable=True),
        sa.Column("early_bird_deadline_date", sa.Date(), nullable=True),
        sa.Column("early_bird_deadline_at", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("division_pricing")
    op.drop_table("events")
    op.drop_index("ix_registrations_event_id", table_name="registrations")
    op.drop_index("ix_registrations_club_owner_id", table_name="registrations")
    op.drop_table("registrations")
    op.drop_table("registered_members")
    op.drop_index("ix_registered_teams_club_owner_id", table_name="registered_teams")
    op.drop_table("registered_teams")
    op.drop_table("roster_members")
    op.drop_index("ix_teams_club_owner_id", table_name="teams")
    op.drop_table("teams")
    op.drop_table("clubs")
