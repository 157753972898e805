"""create dashboard tables

Revision ID: 3f9a2c1d7e40
Revises:
Create Date: 2026-10-19 10:12:31.402117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a2c1d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _owned_columns() -> list:
    """id, user_id, created_at, updated_at - общие для всех таблиц пользователя"""
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # 1. users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    # 2. profiles (one-to-one with users)
    op.create_table(
        'profiles',
        *_owned_columns(),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'])
    op.create_index('uq_profiles_user_id', 'profiles', ['user_id'], unique=True)

    # 3. businesses + departments
    op.create_table(
        'businesses',
        *_owned_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('industry', sa.String(length=128), nullable=True),
        sa.Column('revenue', sa.Numeric(precision=20, scale=2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='active'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_businesses_user_id', 'businesses', ['user_id'])

    op.create_table(
        'departments',
        *_owned_columns(),
        sa.Column('business_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_departments_user_id', 'departments', ['user_id'])
    op.create_index('ix_departments_business_id', 'departments', ['business_id'])

    # 4. transactions
    op.create_table(
        'transactions',
        *_owned_columns(),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_user_date', 'transactions', ['user_id', 'date'])

    # 5. savings_targets + investments
    op.create_table(
        'savings_targets',
        *_owned_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('target_amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('current_amount', sa.Numeric(precision=20, scale=2), nullable=False, server_default='0'),
        sa.Column('deadline', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='active'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_savings_targets_user_id', 'savings_targets', ['user_id'])

    op.create_table(
        'investments',
        *_owned_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('current_value', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_investments_user_id', 'investments', ['user_id'])

    # 6. goals
    op.create_table(
        'goals',
        *_owned_columns(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('priority', sa.String(length=16), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='not_started'),
        sa.Column('progress', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target_date', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('progress >= 0 AND progress <= 100', name='ck_goals_progress_range'),
    )
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    # 7. planner_events
    op.create_table(
        'planner_events',
        *_owned_columns(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=16), nullable=False, server_default='task'),
        sa.Column('priority', sa.String(length=16), nullable=False, server_default='medium'),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_planner_events_user_id', 'planner_events', ['user_id'])
    op.create_index('ix_planner_events_user_date', 'planner_events', ['user_id', 'date'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('planner_events')
    op.drop_table('goals')
    op.drop_table('investments')
    op.drop_table('savings_targets')
    op.drop_table('transactions')
    op.drop_table('departments')
    op.drop_table('businesses')
    op.drop_table('profiles')
    op.drop_table('users')
