"""Create plant growth tables

Revision ID: 001
Revises:
Create Date: 2024-03-01 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create plant_states table"""

    op.create_table('plant_states',
        sa.Column('user_id', sa.String(128), nullable=False, comment='External user identifier'),
        sa.Column('timezone', sa.String(64), nullable=False, server_default='UTC', comment='IANA zone for day boundaries'),
        sa.Column('stage', sa.String(32), nullable=False, server_default='seed'),
        sa.Column('health', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('last_entry_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('days_since_last_entry', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_decay_days', sa.Integer(), nullable=False, server_default='0',
                  comment='Idle day count already penalised since the last entry'),
        sa.Column('total_entries', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('growth_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('current_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('longest_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('flowers', sa.JSON(), nullable=False),
        sa.Column('fruits', sa.JSON(), nullable=False),
        sa.Column('special_effects', sa.JSON(), nullable=False),
        sa.Column('wilting_started', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1', comment='Optimistic concurrency counter'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('last_health_check_at', sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint('user_id', name='pk_plant_states'),
        sa.CheckConstraint('health >= 0 AND health <= 100', name='ck_plant_states_health_range'),
        sa.CheckConstraint('longest_streak >= current_streak', name='ck_plant_states_longest_streak_floor'),
        sa.CheckConstraint(
            "stage IN ('seed', 'sprout', 'plant', 'blooming', 'tree', 'fruiting_tree')",
            name='ck_plant_states_stage_values'
        ),
    )

    op.create_index('ix_plant_states_last_entry_at', 'plant_states', ['last_entry_at'])


def downgrade() -> None:
    """Drop plant_states table"""
    op.drop_index('ix_plant_states_last_entry_at', table_name='plant_states')
    op.drop_table('plant_states')
