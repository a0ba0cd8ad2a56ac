from datetime import datetime, timezone
from uuid import uuid4
from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, String, Text
)
from sqlalchemy.orm import relationship

from .base import Base


def _uuid() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = 'user'
    __table_args__ = (
        CheckConstraint(
            "role IS NULL OR role IN ('student', 'instructor', 'admin')",
            name='ck_user_role'
        ),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    updated_at = Column(DateTime(True), nullable=False, default=_now, onupdate=_now)
    email = Column(String(320), unique=True, nullable=False)
    given_name = Column(String(255))
    family_name = Column(String(255))
    profile_image_url = Column(String(2048))
    # NULL is read as student by the role policy
    role = Column(String(32), default='student')
    bio = Column(Text)
    country = Column(String(255))
    timezone = Column(String(64))

    # Relationships
    sessions = relationship("Session", back_populates="user", cascade="all, delete-orphan", lazy="select")
    courses = relationship("Course", back_populates="instructor", lazy="select")
    enrollments = relationship("Enrollment", back_populates="user", cascade="all, delete-orphan", lazy="select")
    instructor_applications = relationship(
        "InstructorApplication",
        foreign_keys="InstructorApplication.user_id",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="select"
    )


class Session(Base):
    __tablename__ = 'session'

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    user_id = Column(ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    token_hash = Column(String(64), nullable=False, unique=True)
    expires_at = Column(DateTime(True), nullable=False)

    user = relationship('User', back_populates='sessions')
