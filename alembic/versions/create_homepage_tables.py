"""create homepage tables

Revision ID: 8d2c5a7e4f10
Revises: 3b7e1f2a9c41
Create Date: 2026-10-06 14:40:02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d2c5a7e4f10'
down_revision: Union[str, Sequence[str], None] = '3b7e1f2a9c41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'heroes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('button_content', sa.String(length=255), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'carousel_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('link', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order', name='uq_carousel_items_order'),
    )

    op.create_table(
        'presentation_content',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('section_name', sa.String(length=100), nullable=False),
        sa.Column('content_blocks', sa.Text(), nullable=False),
        sa.Column('director_name', sa.String(length=255), nullable=True),
        sa.Column('director_position', sa.String(length=255), nullable=True),
        sa.Column('director_image', sa.String(length=500), nullable=True),
        sa.Column('counter1_value', sa.Integer(), nullable=True),
        sa.Column('counter1_label', sa.String(length=100), nullable=True),
        sa.Column('counter2_value', sa.Integer(), nullable=True),
        sa.Column('counter2_label', sa.String(length=100), nullable=True),
        sa.Column('counter3_value', sa.Integer(), nullable=True),
        sa.Column('counter3_label', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('section_name', name='uq_presentation_content_section_name'),
    )


def downgrade() -> None:
    op.drop_table('presentation_content')
    op.drop_table('carousel_items')
    op.drop_table('heroes')
