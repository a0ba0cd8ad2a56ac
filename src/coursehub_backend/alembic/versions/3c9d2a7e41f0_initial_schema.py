"""initial schema

Revision ID: 3c9d2a7e41f0
Revises:
Create Date: 2026-09-28 10:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9d2a7e41f0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('given_name', sa.String(length=255), nullable=True),
        sa.Column('family_name', sa.String(length=255), nullable=True),
        sa.Column('profile_image_url', sa.String(length=2048), nullable=True),
        sa.Column('role', sa.String(length=32), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('country', sa.String(length=255), nullable=True),
        sa.Column('timezone', sa.String(length=64), nullable=True),
        sa.CheckConstraint("role IS NULL OR role IN ('student', 'instructor', 'admin')", name='ck_user_role'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='user_email_key')
    )
    op.create_table(
        'session',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('token_hash', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('token_hash', name='session_token_hash_key')
    )
    op.create_index('ix_session_user_id', 'session', ['user_id'], unique=False)

    op.create_table(
        'category',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug', name='category_slug_key')
    )
    op.create_table(
        'course',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('subtitle', sa.String(length=300), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('instructor_id', sa.String(length=36), nullable=True),
        sa.Column('category_id', sa.String(length=36), nullable=True),
        sa.Column('level', sa.String(length=32), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=2048), nullable=True),
        sa.Column('duration_hours', sa.Integer(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.CheckConstraint("level IN ('beginner', 'intermediate', 'advanced')", name='ck_course_level'),
        sa.ForeignKeyConstraint(['category_id'], ['category.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['instructor_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_course_instructor_id', 'course', ['instructor_id'], unique=False)

    op.create_table(
        'course_module',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('course_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['course.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_course_module_course_id', 'course_module', ['course_id'], unique=False)

    op.create_table(
        'lesson',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('module_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('video_url', sa.String(length=2048), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('is_preview', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['module_id'], ['course_module.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_lesson_module_id', 'lesson', ['module_id'], unique=False)

    op.create_table(
        'instructor_application',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('experience', sa.Text(), nullable=False),
        sa.Column('qualifications', sa.Text(), nullable=False),
        sa.Column('previous_teaching', sa.Text(), nullable=False),
        sa.Column('areas_of_expertise', sa.JSON(), nullable=False),
        sa.Column('cv_url', sa.String(length=2048), nullable=True),
        sa.Column('video_intro_url', sa.String(length=2048), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.String(length=36), nullable=True),
        sa.Column('review_comments', sa.Text(), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name='ck_instructor_application_status'
        ),
        sa.ForeignKeyConstraint(['reviewed_by'], ['user.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_instructor_application_user_id', 'instructor_application', ['user_id'], unique=False)

    # at most one pending or approved application per user
    op.execute("""
        CREATE UNIQUE INDEX instructor_application_active_user_key
        ON instructor_application (user_id)
        WHERE status IN ('pending', 'approved')
    """)


def downgrade() -> None:
    op.drop_index('instructor_application_active_user_key', table_name='instructor_application')
    op.drop_index('ix_instructor_application_user_id', table_name='instructor_application')
    op.drop_table('instructor_application')
    op.drop_index('ix_lesson_module_id', table_name='lesson')
    op.drop_table('lesson')
    op.drop_index('ix_course_module_course_id', table_name='course_module')
    op.drop_table('course_module')
    op.drop_index('ix_course_instructor_id', table_name='course')
    op.drop_table('course')
    op.drop_table('category')
    op.drop_index('ix_session_user_id', table_name='session')
    op.drop_table('session')
    op.drop_table('user')
