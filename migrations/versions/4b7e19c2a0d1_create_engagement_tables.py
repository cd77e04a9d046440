"""create_engagement_tables

Revision ID: 4b7e19c2a0d1
Revises:
Create Date: 2026-10-18 09:12:44.318207

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "4b7e19c2a0d1"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create profile, preference, opportunity and activity tables."""
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("volunteer_hours", sa.Integer(), server_default="0", nullable=False),
        sa.Column("events_attended", sa.Integer(), server_default="0", nullable=False),
        sa.Column("donations_made", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("volunteer_hours >= 0", name="ck_user_profiles_volunteer_hours"),
        sa.CheckConstraint("events_attended >= 0", name="ck_user_profiles_events_attended"),
        sa.CheckConstraint("donations_made >= 0", name="ck_user_profiles_donations_made"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_volunteer_preferences",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("interest_areas", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column("time_preferences", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column("commitment_levels", postgresql.JSONB(), server_default="[]", nullable=False),
        sa.Column(
            "notification_settings", postgresql.JSONB(), server_default="{}", nullable=False
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        # Target of the ON CONFLICT (user_id) upsert.
        sa.UniqueConstraint("user_id", name="uq_user_volunteer_preferences_user_id"),
    )

    op.create_table(
        "volunteer_opportunities",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("interest_area", sa.String(length=100), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_volunteer_opportunities_interest_area",
        "volunteer_opportunities",
        ["interest_area"],
        unique=False,
    )
    op.create_index(
        "ix_volunteer_opportunities_created_at",
        "volunteer_opportunities",
        ["created_at"],
        unique=False,
    )

    op.create_table(
        "user_volunteer_sessions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("opportunity_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("hours_worked", sa.Float(), server_default="0", nullable=False),
        sa.Column("session_date", sa.DateTime(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), server_default="completed", nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("hours_worked >= 0", name="ck_user_volunteer_sessions_hours"),
        sa.CheckConstraint(
            "status IN ('registered', 'completed', 'cancelled')",
            name="ck_user_volunteer_sessions_status",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["opportunity_id"], ["volunteer_opportunities.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_user_volunteer_sessions_user_date",
        "user_volunteer_sessions",
        ["user_id", "session_date"],
        unique=False,
    )

    op.create_table(
        "user_event_registrations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=True),
        sa.Column("event_title", sa.String(length=255), nullable=False),
        sa.Column("registration_date", sa.DateTime(), nullable=False),
        sa.Column(
            "attendance_status", sa.String(length=20), server_default="registered", nullable=False
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "attendance_status IN ('registered', 'attended', 'no_show', 'cancelled')",
            name="ck_user_event_registrations_attendance",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_user_event_registrations_user_date",
        "user_event_registrations",
        ["user_id", "registration_date"],
        unique=False,
    )

    op.create_table(
        "user_donations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", sa.String(length=3), server_default="USD", nullable=False),
        sa.Column(
            "donation_type", sa.String(length=20), server_default="monetary", nullable=False
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("donation_date", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="completed", nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_user_donations_amount"),
        sa.CheckConstraint(
            "donation_type IN ('monetary', 'in_kind')", name="ck_user_donations_type"
        ),
        sa.CheckConstraint(
            "status IN ('completed', 'pending', 'cancelled')", name="ck_user_donations_status"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_user_donations_user_date",
        "user_donations",
        ["user_id", "donation_date"],
        unique=False,
    )


def downgrade() -> None:
    """Drop engagement tables."""
    op.drop_index("ix_user_donations_user_date", table_name="user_donations")
    op.drop_table("user_donations")
    op.drop_index("ix_user_event_registrations_user_date", table_name="user_event_registrations")
    op.drop_table("user_event_registrations")
    op.drop_index("ix_user_volunteer_sessions_user_date", table_name="user_volunteer_sessions")
    op.drop_table("user_volunteer_sessions")
    op.drop_index("ix_volunteer_opportunities_created_at", table_name="volunteer_opportunities")
    op.drop_index(
        "ix_volunteer_opportunities_interest_area", table_name="volunteer_opportunities"
    )
    op.drop_table("volunteer_opportunities")
    op.drop_table("user_volunteer_preferences")
    op.drop_table("user_profiles")
