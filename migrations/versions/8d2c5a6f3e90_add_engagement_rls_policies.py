"""add_engagement_rls_policies

Revision ID: 8d2c5a6f3e90
Revises: 4b7e19c2a0d1
Create Date: 2026-10-18 09:20:31.774120

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8d2c5a6f3e90"
down_revision: str | Sequence[str] | None = "4b7e19c2a0d1"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Tables whose rows belong to a single user via user_id.
USER_OWNED_TABLES = (
    "user_volunteer_preferences",
    "user_volunteer_sessions",
    "user_event_registrations",
    "user_donations",
)


def upgrade() -> None:
    """Add Row Level Security policies restricting rows to their owner.

    The API connects with a service account that bypasses RLS and enforces
    ownership in the service layer. These policies apply to direct Supabase
    client connections.
    """
    op.execute("ALTER TABLE user_profiles ENABLE ROW LEVEL SECURITY;")
    op.execute("""
        CREATE POLICY user_profiles_owner ON user_profiles
            FOR ALL USING (id = (SELECT auth.uid()))
            WITH CHECK (id = (SELECT auth.uid()));
    """)

    for table in USER_OWNED_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")
        op.execute(f"""
            CREATE POLICY {table}_owner ON {table}
                FOR ALL USING (user_id = (SELECT auth.uid()))
                WITH CHECK (user_id = (SELECT auth.uid()));
        """)

    # Opportunities are public listings, readable by any signed-in user.
    op.execute("ALTER TABLE volunteer_opportunities ENABLE ROW LEVEL SECURITY;")
    op.execute("""
        CREATE POLICY volunteer_opportunities_read ON volunteer_opportunities
            FOR SELECT USING ((SELECT auth.uid()) IS NOT NULL);
    """)


def downgrade() -> None:
    """Remove Row Level Security policies."""
    op.execute("DROP POLICY IF EXISTS volunteer_opportunities_read ON volunteer_opportunities;")
    op.execute("ALTER TABLE volunteer_opportunities DISABLE ROW LEVEL SECURITY;")

    for table in USER_OWNED_TABLES:
        op.execute(f"DROP POLICY IF EXISTS {table}_owner ON {table};")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")

    op.execute("DROP POLICY IF EXISTS user_profiles_owner ON user_profiles;")
    op.execute("ALTER TABLE user_profiles DISABLE ROW LEVEL SECURITY;")
