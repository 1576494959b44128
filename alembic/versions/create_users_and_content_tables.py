"""create users and content tables

Revision ID: 3b7e1f2a9c41
Revises:
Create Date: 2026-10-05 10:12:31

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e1f2a9c41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _owner_column() -> sa.Column:
    return sa.Column(
        'user_id',
        sa.Uuid(),
        sa.ForeignKey('users.id', ondelete='SET NULL'),
        nullable=True,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def _supervised_work_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('etablissement', sa.String(length=255), nullable=False),
        sa.Column('specialite', sa.String(length=255), nullable=False),
        sa.Column('encadrant', sa.String(length=255), nullable=False),
        sa.Column('membres', sa.Text(), nullable=True),
        _owner_column(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'MEMBER', name='role'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('orcid', sa.String(length=50), nullable=True),
        sa.Column('biography', sa.Text(), nullable=True),
        sa.Column('expertises', sa.Text(), nullable=True),
        sa.Column('research_interests', sa.Text(), nullable=True),
        sa.Column('university_education', sa.Text(), nullable=True),
        sa.Column('must_change_password', sa.Boolean(), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('is_archived', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('orcid', name='uq_users_orcid'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_is_archived', 'users', ['is_archived'])

    op.create_table(
        'publications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('authors', sa.Text(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('journal', sa.String(length=255), nullable=True),
        sa.Column('volume', sa.String(length=50), nullable=True),
        sa.Column('pages', sa.String(length=50), nullable=True),
        sa.Column('doi', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=30), nullable=False),
        _owner_column(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('doi', name='uq_publications_doi'),
    )
    op.create_index('ix_publications_user_id', 'publications', ['user_id'])
    op.create_index('ix_publications_year', 'publications', ['year'])

    for table in ('theses', 'master_sis'):
        op.create_table(table, *_supervised_work_columns())
        op.create_index(f'ix_{table}_year', table, ['year'])
        op.create_index(f'ix_{table}_user_id', table, ['user_id'])

    op.create_table(
        'actus',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('category', sa.String(length=30), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=True),
        sa.Column('short_description', sa.String(length=500), nullable=False),
        sa.Column('full_content', sa.Text(), nullable=True),
        _owner_column(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_actus_user_id', 'actus', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_actus_user_id', table_name='actus')
    op.drop_table('actus')

    for table in ('master_sis', 'theses'):
        op.drop_index(f'ix_{table}_user_id', table_name=table)
        op.drop_index(f'ix_{table}_year', table_name=table)
        op.drop_table(table)

    op.drop_index('ix_publications_year', table_name='publications')
    op.drop_index('ix_publications_user_id', table_name='publications')
    op.drop_table('publications')

    op.drop_index('ix_users_is_archived', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    sa.Enum(name='role').drop(op.get_bind(), checkfirst=True)
