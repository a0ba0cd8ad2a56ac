"""add enrollment

Revision ID: 8e41b07f5d23
Revises: 3c9d2a7e41f0
Create Date: 2026-10-19 09:03:27.550912

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8e41b07f5d23'
down_revision: Union[str, None] = '3c9d2a7e41f0'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'enrollment',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('course_id', sa.String(length=36), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('progress', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['course.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'course_id', name='enrollment_user_course_key')
    )
    op.create_index('ix_enrollment_user_id', 'enrollment', ['user_id'], unique=False)
    op.create_index('ix_enrollment_course_id', 'enrollment', ['course_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_enrollment_course_id', table_name='enrollment')
    op.drop_index('ix_enrollment_user_id', table_name='enrollment')
    op.drop_table('enrollment')
