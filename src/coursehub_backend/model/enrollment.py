from sqlalchemy import (
    Column, DateTime, ForeignKey, Numeric, String, UniqueConstraint
)
from sqlalchemy.orm import relationship

from .base import Base
from .auth import _now, _uuid


class Enrollment(Base):
    __tablename__ = 'enrollment'
    __table_args__ = (
        UniqueConstraint('user_id', 'course_id', name='enrollment_user_course_key'),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    course_id = Column(ForeignKey('course.id', ondelete='CASCADE'), nullable=False, index=True)
    enrolled_at = Column(DateTime(True), nullable=False, default=_now)
    completed_at = Column(DateTime(True))
    # percent complete, 0 to 100
    progress = Column(Numeric(5, 2), nullable=False, default=0)

    user = relationship('User', back_populates='enrollments')
    course = relationship('Course', back_populates='enrollments')
