"""create_profiles_table

Revision ID: 7c2e91a4d3b0
Revises:
Create Date: 2026-10-19 09:12:44.201337

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c2e91a4d3b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the profiles table."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=80), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('native', sa.String(length=40), nullable=False),
        sa.Column('practice', sa.String(length=40), nullable=False),
        sa.Column('level', sa.String(length=2), nullable=False, server_default='B1'),
        sa.Column('availability', sa.String(length=120), nullable=True, server_default=''),
        sa.Column('interests', sa.Text(), nullable=True, server_default=''),
        sa.Column('bio', sa.String(length=200), nullable=True, server_default=''),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.text('now()')),
        sa.CheckConstraint("level IN ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')", name='ck_profiles_level'),
        sa.PrimaryKeyConstraint('id'),
    )
    # Index for the default "recent" ordering
    op.create_index('ix_profiles_updated_at', 'profiles', ['updated_at'], unique=False)


def downgrade() -> None:
    """Drop the profiles table."""
    op.drop_index('ix_profiles_updated_at', table_name='profiles')
    op.drop_table('profiles')
