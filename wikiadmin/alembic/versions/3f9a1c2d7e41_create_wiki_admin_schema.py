"""create_wiki_admin_schema

Revision ID: 3f9a1c2d7e41
Revises:
Create Date: 2026-10-19 10:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7e41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('external_id', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=False),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        # UserStatus codes: 1 registered, 2 active, 3 suspended, 4 deleted, 5 invited
        sa.Column('status', sa.Integer(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        sa.Column('image_url', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=True),
        sa.Column('is_gravatar_enabled', sa.Boolean(), nullable=False),
        sa.Column('image_url_cached', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_external_id'), 'users', ['external_id'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_status'), 'users', ['status'], unique=False)
    op.create_index(op.f('ix_users_created_at'), 'users', ['created_at'], unique=False)

    op.create_table(
        'pages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('path', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=False),
        sa.Column('creator_id', sa.Uuid(), nullable=False),
        sa.Column('last_update_user_id', sa.Uuid(), nullable=True),
        sa.Column('grant', sa.Integer(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('published', 'deleted', name='pagestatus'),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id']),
        sa.ForeignKeyConstraint(['last_update_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_pages_path'), 'pages', ['path'], unique=False)
    op.create_index(op.f('ix_pages_creator_id'), 'pages', ['creator_id'], unique=False)
    op.create_index(op.f('ix_pages_created_at'), 'pages', ['created_at'], unique=False)

    op.create_table(
        'external_accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('provider_type', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
        sa.Column('account_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider_type', 'account_id', name='uq_external_accounts_provider'),
    )
    op.create_index(op.f('ix_external_accounts_user_id'), 'external_accounts', ['user_id'], unique=False)
    op.create_index(op.f('ix_external_accounts_created_at'), 'external_accounts', ['created_at'], unique=False)

    op.create_table(
        'configs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ns', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('key', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('ns', 'key', name='uq_configs_ns_key'),
    )
    op.create_index(op.f('ix_configs_ns'), 'configs', ['ns'], unique=False)
    op.create_index(op.f('ix_configs_created_at'), 'configs', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_configs_created_at'), table_name='configs')
    op.drop_index(op.f('ix_configs_ns'), table_name='configs')
    op.drop_table('configs')

    op.drop_index(op.f('ix_external_accounts_created_at'), table_name='external_accounts')
    op.drop_index(op.f('ix_external_accounts_user_id'), table_name='external_accounts')
    op.drop_table('external_accounts')

    op.drop_index(op.f('ix_pages_created_at'), table_name='pages')
    op.drop_index(op.f('ix_pages_creator_id'), table_name='pages')
    op.drop_index(op.f('ix_pages_path'), table_name='pages')
    op.drop_table('pages')
    # Drop the enum type (PostgreSQL)
    sa.Enum(name='pagestatus').drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f('ix_users_created_at'), table_name='users')
    op.drop_index(op.f('ix_users_status'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_external_id'), table_name='users')
    op.drop_table('users')
