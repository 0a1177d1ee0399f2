"""Create users, notes and note_tags tables

Revision ID: 5b1e0c7a9d42
Revises:
Create Date: 2026-10-18 10:12:31.408117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e0c7a9d42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('length(name) <= 50', name='ck_users_name_len'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'notes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('folder', sa.String(length=50), nullable=True),
        sa.Column('is_pinned', sa.Boolean(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('length(title) <= 100', name='ck_notes_title_len'),
        sa.CheckConstraint('length(content) <= 10000', name='ck_notes_content_len'),
        sa.CheckConstraint('folder IS NULL OR length(folder) <= 50', name='ck_notes_folder_len'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_owner_pinned_updated', 'notes', ['owner_id', 'is_pinned', 'updated_at'])
    op.create_index('idx_notes_owner_folder', 'notes', ['owner_id', 'folder'])

    op.create_table(
        'note_tags',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('note_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=20), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('name = lower(name)', name='ck_note_tags_name_lowercase'),
        sa.ForeignKeyConstraint(['note_id'], ['notes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('note_id', 'name', name='uq_note_tags_note_name'),
    )
    op.create_index('idx_note_tags_name', 'note_tags', ['name'])
    op.create_index('idx_note_tags_note_id', 'note_tags', ['note_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_note_tags_note_id', table_name='note_tags')
    op.drop_index('idx_note_tags_name', table_name='note_tags')
    op.drop_table('note_tags')
    op.drop_index('idx_notes_owner_folder', table_name='notes')
    op.drop_index('idx_notes_owner_pinned_updated', table_name='notes')
    op.drop_table('notes')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
