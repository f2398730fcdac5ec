"""create_content_tables

Revision ID: 3c1d9a7e5b20
Revises:
Create Date: 2026-02-14 11:42:08.517302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1d9a7e5b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_created: bool = True):
    columns = []
    if with_created:
        columns.append(sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False))
    columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False))
    return columns


def _section_table(name: str):
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('section_type', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index(op.f(f'ix_{name}_display_order'), name, ['display_order'], unique=False)


def upgrade() -> None:
    op.create_table(
        'gallery_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('size', sa.String(length=16), nullable=False, server_default='medium'),
        sa.Column('column_index', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index(op.f('ix_gallery_items_display_order'), 'gallery_items', ['display_order'], unique=False)

    op.create_table(
        'site_content',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('value', sa.Text(), nullable=False, server_default=''),
        *_timestamps(with_created=False),
    )
    op.create_index(op.f('ix_site_content_key'), 'site_content', ['key'], unique=True)

    _section_table('commission_sections')
    _section_table('about_sections')

    op.create_table(
        'past_works',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('cover_image', sa.String(), nullable=False, server_default=''),
        sa.Column('images', sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column('specs', sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column('tags', sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column('visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_at', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f('ix_past_works_slug'), 'past_works', ['slug'], unique=True)
    op.create_index(op.f('ix_past_works_display_order'), 'past_works', ['display_order'], unique=False)

    # Default copy slots edited from the admin content page
    site_content = sa.table('site_content', sa.column('key', sa.String), sa.column('value', sa.Text))
    op.bulk_insert(site_content, [
        {'key': 'hero_meta', 'value': 'Keyboards'},
        {'key': 'hero_title', 'value': 'Slowwwy'},
        {'key': 'gallery_label', 'value': 'Recent builds'},
        {'key': 'commission_meta', 'value': 'Commissions'},
        {'key': 'commission_title', 'value': 'Commission a build'},
        {'key': 'commission_description', 'value': ''},
    ])


def downgrade() -> None:
    op.drop_index(op.f('ix_past_works_display_order'), table_name='past_works')
    op.drop_index(op.f('ix_past_works_slug'), table_name='past_works')
    op.drop_table('past_works')
    for name in ('about_sections', 'commission_sections'):
        op.drop_index(op.f(f'ix_{name}_display_order'), table_name=name)
        op.drop_table(name)
    op.drop_index(op.f('ix_site_content_key'), table_name='site_content')
    op.drop_table('site_content')
    op.drop_index(op.f('ix_gallery_items_display_order'), table_name='gallery_items')
    op.drop_table('gallery_items')
