from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Index, JSON, String, Text, text
)
from sqlalchemy.orm import relationship

from .base import Base
from .auth import _now, _uuid

_ACTIVE_STATUS_CLAUSE = text("status IN ('pending', 'approved')")


class InstructorApplication(Base):
    __tablename__ = 'instructor_application'
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name='ck_instructor_application_status'
        ),
        # at most one pending or approved application per user
        Index(
            'instructor_application_active_user_key',
            'user_id',
            unique=True,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
            sqlite_where=_ACTIVE_STATUS_CLAUSE
        ),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    updated_at = Column(DateTime(True), nullable=False, default=_now, onupdate=_now)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    bio = Column(Text, nullable=False)
    experience = Column(Text, nullable=False)
    qualifications = Column(Text, nullable=False)
    previous_teaching = Column(Text, nullable=False)
    areas_of_expertise = Column(JSON, nullable=False, default=list)
    cv_url = Column(String(2048))
    video_intro_url = Column(String(2048))
    status = Column(String(32), nullable=False, default='pending')
    submitted_at = Column(DateTime(True), nullable=False, default=_now)
    reviewed_at = Column(DateTime(True))
    reviewed_by = Column(ForeignKey('user.id', ondelete='SET NULL'))
    review_comments = Column(Text)

    user = relationship('User', foreign_keys=[user_id], back_populates='instructor_applications')
    reviewer = relationship('User', foreign_keys=[reviewed_by])
