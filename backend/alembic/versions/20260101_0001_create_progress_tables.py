"""Create users, activity and achievement unlock tables.

Revision ID: 0001
Revises:
Create Date: 2026-01-01
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('badge', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'lessons',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
    )
    op.create_index('ix_lessons_id', 'lessons', ['id'])

    op.create_table(
        'lesson_user',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('lesson_id', sa.Integer(), sa.ForeignKey('lessons.id', ondelete='CASCADE'), nullable=False),
        sa.Column('watched', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('user_id', 'lesson_id', name='uq_lesson_user'),
    )
    op.create_index('ix_lesson_user_id', 'lesson_user', ['id'])
    op.create_index('ix_lesson_user_user_id', 'lesson_user', ['user_id'])
    op.create_index('ix_lesson_user_lesson_id', 'lesson_user', ['lesson_id'])
    op.create_index('ix_lesson_user_user_watched', 'lesson_user', ['user_id', 'watched'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_comments_id', 'comments', ['id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])

    # Unique pair backs exactly-once unlocks under concurrent candidates
    op.create_table(
        'user_achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('unlocked_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'name', name='uq_user_achievement'),
    )
    op.create_index('ix_user_achievements_id', 'user_achievements', ['id'])
    op.create_index('ix_user_achievements_user_id', 'user_achievements', ['user_id'])


def downgrade():
    op.drop_index('ix_user_achievements_user_id')
    op.drop_index('ix_user_achievements_id')
    op.drop_table('user_achievements')
    op.drop_index('ix_comments_user_id')
    op.drop_index('ix_comments_id')
    op.drop_table('comments')
    op.drop_index('ix_lesson_user_user_watched')
    op.drop_index('ix_lesson_user_lesson_id')
    op.drop_index('ix_lesson_user_user_id')
    op.drop_index('ix_lesson_user_id')
    op.drop_table('lesson_user')
    op.drop_index('ix_lessons_id')
    op.drop_table('lessons')
    op.drop_index('ix_users_email')
    op.drop_index('ix_users_id')
    op.drop_table('users')
