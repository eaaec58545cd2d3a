"""access badges and stands page content

Revision ID: 20261019_0002
Revises: 20261019_0001
Create Date: 2026-10-19
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_0002'
down_revision = '20261019_0001'
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column(
            'created_at', sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
        sa.Column(
            'updated_at', sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
    ]


def upgrade() -> None:
    op.create_table(
        'access_badges',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column(
            'type', sa.String(length=32), nullable=False,
            server_default='Media'
        ),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column(
            'is_active', sa.Boolean(), nullable=False,
            server_default=sa.true()
        ),
        *_timestamps(),
    )
    op.create_index('ix_access_badges_type', 'access_badges', ['type'])

    op.create_table(
        'stands_content',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column(
            'title', sa.String(length=200), nullable=False,
            server_default='Stands & Exhibitors'
        ),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(length=500), nullable=True),
        sa.Column(
            'is_active', sa.Boolean(), nullable=False,
            server_default=sa.true()
        ),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('stands_content')
    op.drop_index('ix_access_badges_type', table_name='access_badges')
    op.drop_table('access_badges')
