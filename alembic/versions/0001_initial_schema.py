"""initial schema: users, activity, rewards, reminders, notifications, wearables, coach

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id():
    return sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()'))


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _user_fk(**kwargs):
    return sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, **kwargs)


def upgrade() -> None:
    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('fcm_token', sa.String(500), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'user_activities',
        _id(),
        _user_fk(index=True),
        sa.Column('activity_type', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('points_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'user_rewards',
        _id(),
        _user_fk(unique=True, index=True),
        sa.Column('level', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )

    op.create_table(
        'user_achievements',
        _id(),
        _user_fk(index=True),
        sa.Column('achievement_id', postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'user_reminder_settings',
        _id(),
        _user_fk(index=True),
        sa.Column('reminder_type', sa.String(20), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('frequency_hours', sa.Integer(), nullable=False, server_default='24'),
        sa.Column('preferred_time', sa.Time(), nullable=True),
        sa.Column('last_sent_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'reminder_type', name='uq_reminder_settings_user_type'),
    )

    op.create_table(
        'notifications',
        _id(),
        _user_fk(index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('type', sa.String(50), nullable=False, server_default='general'),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'wearable_connections',
        _id(),
        _user_fk(index=True),
        sa.Column('provider', sa.String(30), nullable=False),
        sa.Column('access_token', sa.Text(), nullable=True),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('last_sync_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'wearable_data',
        _id(),
        _user_fk(index=True),
        sa.Column('connection_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('wearable_connections.id', ondelete='SET NULL'), nullable=True),
        sa.Column('data_type', sa.String(30), nullable=False, index=True),
        sa.Column('value', sa.Numeric(), nullable=False),
        sa.Column('unit', sa.String(20), nullable=True),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('source', sa.String(30), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'ai_coach_conversations',
        _id(),
        _user_fk(index=True),
        sa.Column('title', sa.String(200), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'ai_coach_messages',
        _id(),
        sa.Column('conversation_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('ai_coach_conversations.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('ai_coach_messages')
    op.drop_table('ai_coach_conversations')
    op.drop_table('wearable_data')
    op.drop_table('wearable_connections')
    op.drop_table('notifications')
    op.drop_table('user_reminder_settings')
    op.drop_table('user_achievements')
    op.drop_table('user_rewards')
    op.drop_table('user_activities')
    op.drop_table('users')
