from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey,
    Integer, Numeric, String, Text
)
from sqlalchemy.orm import relationship

from .base import Base
from .auth import _now, _uuid


class Category(Base):
    __tablename__ = 'category'

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True)
    description = Column(Text)

    courses = relationship('Course', back_populates='category')


class Course(Base):
    __tablename__ = 'course'
    __table_args__ = (
        CheckConstraint("level IN ('beginner', 'intermediate', 'advanced')", name='ck_course_level'),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    updated_at = Column(DateTime(True), nullable=False, default=_now, onupdate=_now)
    title = Column(String(200), nullable=False)
    subtitle = Column(String(300))
    description = Column(Text)
    instructor_id = Column(ForeignKey('user.id', ondelete='SET NULL'), index=True)
    category_id = Column(ForeignKey('category.id', ondelete='SET NULL'))
    level = Column(String(32), nullable=False, default='beginner')
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default='USD')
    thumbnail_url = Column(String(2048))
    duration_hours = Column(Integer)
    is_published = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)

    # Relationships
    instructor = relationship('User', back_populates='courses')
    category = relationship('Category', back_populates='courses')
    modules = relationship(
        'CourseModule',
        back_populates='course',
        cascade='all, delete-orphan',
        order_by='CourseModule.position'
    )
    enrollments = relationship('Enrollment', back_populates='course', cascade='all, delete-orphan')


class CourseModule(Base):
    __tablename__ = 'course_module'

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    course_id = Column(ForeignKey('course.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    position = Column(Integer, nullable=False)

    course = relationship('Course', back_populates='modules')
    lessons = relationship(
        'Lesson',
        back_populates='module',
        cascade='all, delete-orphan',
        order_by='Lesson.position'
    )


class Lesson(Base):
    __tablename__ = 'lesson'

    id = Column(String(36), primary_key=True, default=_uuid)
    created_at = Column(DateTime(True), nullable=False, default=_now)
    module_id = Column(ForeignKey('course_module.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text)
    video_url = Column(String(2048))
    duration_minutes = Column(Integer)
    position = Column(Integer, nullable=False)
    is_preview = Column(Boolean, nullable=False, default=False)

    module = relationship('CourseModule', back_populates='lessons')
