from .base import Base, metadata
from .auth import User, Session
from .course import Category, Course, CourseModule, Lesson
from .application import InstructorApplication
from .enrollment import Enrollment

__all__ = [
    'Base',
    'metadata',
    # Auth models
    'User',
    'Session',
    # Catalog models
    'Category',
    'Course',
    'CourseModule',
    'Lesson',
    # Instructor onboarding
    'InstructorApplication',
    # Learning
    'Enrollment',
]
