"""Create media, products and product_gallery tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create media, products and product_gallery tables."""
    # Media table
    op.create_table(
        'media',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('alt', sa.String(500), nullable=False),
        sa.Column('filename', sa.String(500), nullable=True),
        sa.Column('mime_type', sa.String(100), nullable=True),
        sa.Column('url', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Products table
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('type', sa.String(20), nullable=False, server_default='stickers', index=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='false', index=True),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default='false', index=True),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('slug', sa.String(500), nullable=False),
        sa.Column('main_image_id', postgresql.UUID(as_uuid=False),
                  sa.ForeignKey('media.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('old_price', sa.Numeric(12, 2), nullable=True),
        sa.Column('characteristics', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('description', postgresql.JSONB(), nullable=True),
        sa.Column('seo_text', sa.Text(), nullable=True),
        sa.Column('seo_title', sa.String(500), nullable=True),
        sa.Column('seo_description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('price >= 0', name='ck_products_price_non_negative'),
        sa.CheckConstraint('old_price IS NULL OR old_price >= 0', name='ck_products_old_price_non_negative'),
    )

    # Unique slug index backs slug lookups and duplicate detection
    op.create_index('ix_products_slug', 'products', ['slug'], unique=True)

    # Newest-first listings
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    # Ordered gallery
    op.create_table(
        'product_gallery',
        sa.Column('product_id', postgresql.UUID(as_uuid=False),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('position', sa.Integer(), primary_key=True),
        sa.Column('media_id', postgresql.UUID(as_uuid=False),
                  sa.ForeignKey('media.id', ondelete='CASCADE'), nullable=False),
    )


def downgrade() -> None:
    """Drop product_gallery, products and media tables."""
    op.drop_table('product_gallery')
    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_index('ix_products_slug', table_name='products')
    op.drop_table('products')
    op.drop_table('media')
