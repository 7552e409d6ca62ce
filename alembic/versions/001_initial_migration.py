# alembic/versions/001_initial_migration.py
"""Create essays table

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('essays',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('university', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('level', sa.String(length=20), nullable=False, server_default='undergrad'),
        sa.Column('word_count', sa.Integer(), nullable=False),
        sa.Column('char_count', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('assessment', sa.JSON(), nullable=True),
        sa.Column('overall_score', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_essays_level'), 'essays', ['level'], unique=False)
    op.create_index(op.f('ix_essays_status'), 'essays', ['status'], unique=False)
    op.create_index(op.f('ix_essays_overall_score'), 'essays', ['overall_score'], unique=False)
    op.create_index(op.f('ix_essays_created_at'), 'essays', ['created_at'], unique=False)
    op.create_index('ix_essays_status_created', 'essays', ['status', 'created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_essays_status_created', table_name='essays')
    op.drop_index(op.f('ix_essays_created_at'), table_name='essays')
    op.drop_index(op.f('ix_essays_overall_score'), table_name='essays')
    op.drop_index(op.f('ix_essays_status'), table_name='essays')
    op.drop_index(op.f('ix_essays_level'), table_name='essays')
    op.drop_table('essays')
