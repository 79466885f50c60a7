"""add_profiles_rls_policies

Revision ID: 8d41f0b6e2c7
Revises: 7c2e91a4d3b0
Create Date: 2026-10-19 09:40:03.118420

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8d41f0b6e2c7"
down_revision: str | Sequence[str] | None = "7c2e91a4d3b0"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Enable Row Level Security on profiles.

    The directory is public: anyone holding the anon key may read and write
    entries, and deletes go through one row at a time so the policy applies
    to each of them.
    """
    op.execute("ALTER TABLE profiles ENABLE ROW LEVEL SECURITY;")

    for action, clause in [
        ("SELECT", "USING (true)"),
        ("INSERT", "WITH CHECK (true)"),
        ("UPDATE", "USING (true) WITH CHECK (true)"),
        ("DELETE", "USING (true)"),
    ]:
        op.execute(
            f"CREATE POLICY profiles_{action.lower()} ON profiles "
            f"FOR {action} TO anon, authenticated {clause};"
        )

    # Keep updated_at current for writes that bypass the API
    op.execute("""
        CREATE OR REPLACE FUNCTION touch_profiles_updated_at()
        RETURNS trigger
        LANGUAGE plpgsql
        AS $$
        BEGIN
            NEW.updated_at = now();
            RETURN NEW;
        END;
        $$;
    """)
    op.execute("""
        CREATE TRIGGER profiles_touch_updated_at
            BEFORE UPDATE ON profiles
            FOR EACH ROW EXECUTE FUNCTION touch_profiles_updated_at();
    """)


def downgrade() -> None:
    """Remove profiles RLS policies and the updated_at trigger."""
    op.execute("DROP TRIGGER IF EXISTS profiles_touch_updated_at ON profiles;")
    op.execute("DROP FUNCTION IF EXISTS touch_profiles_updated_at();")
    for action in ["select", "insert", "update", "delete"]:
        op.execute(f"DROP POLICY IF EXISTS profiles_{action} ON profiles;")
    op.execute("ALTER TABLE profiles DISABLE ROW LEVEL SECURITY;")
