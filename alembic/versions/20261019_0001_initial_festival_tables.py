"""initial festival content tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_0001'
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column('id', sa.String(length=36), primary_key=True)


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
        'events',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('place', sa.String(length=200), nullable=False),
        sa.Column('event_date', sa.String(length=32), nullable=False),
        sa.Column('start_time', sa.String(length=16), nullable=True),
        sa.Column('end_time', sa.String(length=16), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_events_event_date', 'events', ['event_date'])

    op.create_table(
        'tickets',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column(
            'available', sa.Boolean(), nullable=False,
            server_default=sa.true()
        ),
        *_timestamps(),
    )

    op.create_table(
        'gallery_items',
        _id(),
        sa.Column('src', sa.Text(), nullable=False),
        sa.Column('alt', sa.String(length=300), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column(
            'type', sa.String(length=16), nullable=False,
            server_default='image'
        ),
        *_timestamps(),
    )
    op.create_index(
        'ix_gallery_items_category', 'gallery_items', ['category']
    )

    op.create_table(
        'slider_images',
        _id(),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('link', sa.Text(), nullable=True),
        sa.Column(
            'order_number', sa.Integer(), nullable=False, server_default='0'
        ),
        sa.Column(
            'active', sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(),
    )

    op.create_table(
        'social_links',
        _id(),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(length=64), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'header_menu_links',
        _id(),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column(
            'order_number', sa.Integer(), nullable=False, server_default='0'
        ),
        sa.Column(
            'is_active', sa.Boolean(), nullable=False,
            server_default=sa.true()
        ),
        *_timestamps(),
    )

    op.create_table(
        'schedule_days',
        _id(),
        sa.Column('day_name', sa.String(length=64), nullable=False),
        sa.Column('date', sa.String(length=32), nullable=False),
        sa.Column(
            'order_number', sa.Integer(), nullable=False, server_default='0'
        ),
        *_timestamps(),
    )

    op.create_table(
        'schedule_events',
        _id(),
        sa.Column(
            'day_id', sa.String(length=36),
            sa.ForeignKey('schedule_days.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('start_time', sa.String(length=16), nullable=False),
        sa.Column('end_time', sa.String(length=16), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column(
            'order_number', sa.Integer(), nullable=False, server_default='0'
        ),
        *_timestamps(),
    )
    op.create_index(
        'ix_schedule_events_day_id', 'schedule_events', ['day_id']
    )

    op.create_table(
        'partners',
        _id(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('logo_url', sa.Text(), nullable=False),
        sa.Column('website_url', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column(
            'order_number', sa.Integer(), nullable=False, server_default='0'
        ),
        sa.Column(
            'active', sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(),
    )

    op.create_table(
        'countdown_settings',
        _id(),
        sa.Column(
            'title', sa.String(length=200), nullable=False,
            server_default='COUNTDOWN TO FESTIVAL'
        ),
        sa.Column(
            'target_date', sa.String(length=32), nullable=False,
            server_default='2025-05-08T00:00:00'
        ),
        sa.Column(
            'background_color', sa.String(length=32), nullable=False,
            server_default='#1F1F3F'
        ),
        sa.Column(
            'text_color', sa.String(length=32), nullable=False,
            server_default='#00FFB9'
        ),
        sa.Column('background_image_url', sa.Text(), nullable=True),
        sa.Column(
            'enabled', sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column(
            'show_on_load', sa.Boolean(), nullable=False,
            server_default=sa.true()
        ),
        sa.Column(
            'display_duration', sa.Integer(), nullable=False,
            server_default='0'
        ),
        *_timestamps(),
    )

    op.create_table(
        'theme_settings',
        _id(),
        sa.Column(
            'primary_color', sa.String(length=32), nullable=False,
            server_default='#3b82f6'
        ),
        sa.Column(
            'secondary_color', sa.String(length=32), nullable=False,
            server_default='#6b7280'
        ),
        sa.Column(
            'accent_color', sa.String(length=32), nullable=False,
            server_default='#f97316'
        ),
        sa.Column(
            'background_color', sa.String(length=32), nullable=False,
            server_default='#ffffff'
        ),
        sa.Column(
            'text_color', sa.String(length=32), nullable=False,
            server_default='#111827'
        ),
        sa.Column(
            'font_heading', sa.String(length=64), nullable=False,
            server_default='Inter'
        ),
        sa.Column(
            'font_body', sa.String(length=64), nullable=False,
            server_default='Inter'
        ),
        *_timestamps(),
    )

    op.create_table(
        'general_content',
        _id(),
        sa.Column('section_key', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('subtitle', sa.String(length=300), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        'ix_general_content_section_key', 'general_content',
        ['section_key'], unique=True
    )

    op.create_table(
        'pages',
        _id(),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('path', sa.String(length=200), nullable=False),
        sa.Column('layout', sa.String(length=32), nullable=True),
        sa.Column('meta_description', sa.Text(), nullable=True),
        sa.Column(
            'is_published', sa.Boolean(), nullable=False,
            server_default=sa.false()
        ),
        *_timestamps(),
    )
    op.create_index('ix_pages_slug', 'pages', ['slug'], unique=True)

    op.create_table(
        'page_content',
        _id(),
        sa.Column('page_id', sa.String(length=100), nullable=False),
        sa.Column('content', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_page_content_page_id', 'page_content', ['page_id'])

    op.create_table(
        'newsletter_subscribers',
        _id(),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column(
            'subscribed_at', sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP')
        ),
    )
    op.create_index(
        'ix_newsletter_subscribers_email', 'newsletter_subscribers',
        ['email'], unique=True
    )


def downgrade() -> None:
    op.drop_index(
        'ix_newsletter_subscribers_email',
        table_name='newsletter_subscribers'
    )
    op.drop_table('newsletter_subscribers')
    op.drop_index('ix_page_content_page_id', table_name='page_content')
    op.drop_table('page_content')
    op.drop_index('ix_pages_slug', table_name='pages')
    op.drop_table('pages')
    op.drop_index(
        'ix_general_content_section_key', table_name='general_content'
    )
    op.drop_table('general_content')
    op.drop_table('theme_settings')
    op.drop_table('countdown_settings')
    op.drop_table('partners')
    op.drop_index('ix_schedule_events_day_id', table_name='schedule_events')
    op.drop_table('schedule_events')
    op.drop_table('schedule_days')
    op.drop_table('header_menu_links')
    op.drop_table('social_links')
    op.drop_table('slider_images')
    op.drop_index('ix_gallery_items_category', table_name='gallery_items')
    op.drop_table('gallery_items')
    op.drop_table('tickets')
    op.drop_index('ix_events_event_date', table_name='events')
    op.drop_table('events')
