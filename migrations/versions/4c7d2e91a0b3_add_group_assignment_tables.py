"""add_group_assignment_tables

Revision ID: 4c7d2e91a0b3
Revises:
Create Date: 2026-10-19 09:12:04.311582

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c7d2e91a0b3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create assignments, groups, group_members and peer_responses tables."""
    op.create_table('assignments',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('course_id', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('title', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('group_assignment', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('max_group_size', sa.Integer(), nullable=True),
        sa.Column('enable_peer_responses', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('response_due_date', sa.DateTime(), nullable=True),
        sa.Column('response_word_limit', sa.Integer(), nullable=True),
        sa.Column('response_character_limit', sa.Integer(), nullable=True),
        sa.Column('min_responses_required', sa.Integer(), nullable=True),
        sa.Column('max_responses_per_video', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('groups',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('assignment_id', sa.String(length=64), nullable=False),
        sa.Column('join_code', sa.String(length=6), nullable=False),
        sa.Column('group_name', sa.String(length=100), nullable=False),
        sa.Column('leader_id', sa.String(length=64), nullable=False),
        sa.Column('leader_name', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('max_size', sa.Integer(), nullable=False),
        sa.Column('current_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='forming'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('current_size <= max_size', name='ck_groups_capacity'),
        sa.CheckConstraint(
            "status IN ('forming', 'ready', 'submitted')", name='ck_groups_status'
        ),
        sa.ForeignKeyConstraint(['assignment_id'], ['assignments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_groups_assignment_id', 'groups', ['assignment_id'], unique=False)
    op.create_index('ix_groups_join_code', 'groups', ['join_code'], unique=True)

    op.create_table('group_members',
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('assignment_id', sa.String(length=64), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='member'),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("role IN ('leader', 'member')", name='ck_group_members_role'),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('group_id', 'user_id'),
        sa.UniqueConstraint(
            'assignment_id', 'user_id', name='uq_group_members_assignment_user'
        ),
    )

    op.create_table('peer_responses',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('assignment_id', sa.String(length=64), nullable=False),
        sa.Column('video_id', sa.String(length=64), nullable=False),
        sa.Column('student_id', sa.String(length=64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_peer_responses_video_id', 'peer_responses', ['video_id'], unique=False)
    op.create_index(
        'ix_peer_responses_assignment_student',
        'peer_responses',
        ['assignment_id', 'student_id'],
        unique=False,
    )


def downgrade() -> None:
    """Drop the group assignment and peer response tables."""
    op.drop_index('ix_peer_responses_assignment_student', table_name='peer_responses')
    op.drop_index('ix_peer_responses_video_id', table_name='peer_responses')
    op.drop_table('peer_responses')
    op.drop_table('group_members')
    op.drop_index('ix_groups_join_code', table_name='groups')
    op.drop_index('ix_groups_assignment_id', table_name='groups')
    op.drop_table('groups')
    op.drop_table('assignments')
