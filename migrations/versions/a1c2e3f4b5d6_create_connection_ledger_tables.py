"""Create users and connection_requests tables

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c2e3f4b5d6'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the profile reference table and the connection ledger.

    The ledger enforces one row per ordered (from_user_id, to_user_id) pair
    and forbids self requests at the database level, so concurrent duplicate
    swipes fail on insert instead of creating a second row.
    """

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('about', sa.Text(), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('role', sa.String(length=100), nullable=True),
        sa.Column('experience', sa.String(length=50), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('availability', sa.String(length=50), nullable=True),
        sa.Column('github', sa.String(length=500), nullable=True),
        sa.Column('linkedin', sa.String(length=500), nullable=True),
        sa.Column('portfolio', sa.String(length=500), nullable=True),
        sa.Column('is_premium', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_profile_complete', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_experience', 'users', ['experience'])
    op.create_index('ix_users_availability', 'users', ['availability'])
    op.create_index('ix_users_is_profile_complete', 'users', ['is_profile_complete'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # Create connection_requests table
    op.create_table(
        'connection_requests',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('from_user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('to_user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['from_user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['to_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('from_user_id', 'to_user_id', name='unique_connection_pair'),
        sa.CheckConstraint('from_user_id <> to_user_id', name='ck_connection_not_self'),
        sa.CheckConstraint(
            "status IN ('interested', 'ignored', 'accepted')",
            name='ck_connection_status'
        ),
    )

    op.create_index('ix_connection_requests_id', 'connection_requests', ['id'])
    op.create_index('ix_connection_requests_from_user_id', 'connection_requests', ['from_user_id'])
    op.create_index('ix_connection_requests_to_user_id', 'connection_requests', ['to_user_id'])
    # Query views: pending received / pending sent / accepted on either side
    op.create_index('ix_connection_requests_to_status', 'connection_requests', ['to_user_id', 'status'])
    op.create_index('ix_connection_requests_from_status', 'connection_requests', ['from_user_id', 'status'])


def downgrade() -> None:
    """Drop the connection ledger and users tables."""
    op.drop_index('ix_connection_requests_from_status', table_name='connection_requests')
    op.drop_index('ix_connection_requests_to_status', table_name='connection_requests')
    op.drop_index('ix_connection_requests_to_user_id', table_name='connection_requests')
    op.drop_index('ix_connection_requests_from_user_id', table_name='connection_requests')
    op.drop_index('ix_connection_requests_id', table_name='connection_requests')
    op.drop_table('connection_requests')

    op.drop_index('ix_users_created_at', table_name='users')
    op.drop_index('ix_users_is_profile_complete', table_name='users')
    op.drop_index('ix_users_availability', table_name='users')
    op.drop_index('ix_users_experience', table_name='users')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
