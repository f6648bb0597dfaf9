"""create waitlist_entries

Revision ID: 20261019_01_waitlist
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_01_waitlist"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'waitlist_entries',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notified_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('email', name='uq_waitlist_entries_email'),
    )
    op.create_index('ix_waitlist_entries_created_at', 'waitlist_entries', ['created_at'])
    op.create_index('ix_waitlist_entries_notified', 'waitlist_entries', ['notified'])


def downgrade() -> None:
    op.drop_index('ix_waitlist_entries_notified', table_name='waitlist_entries')
    op.drop_index('ix_waitlist_entries_created_at', table_name='waitlist_entries')
    op.drop_table('waitlist_entries')
