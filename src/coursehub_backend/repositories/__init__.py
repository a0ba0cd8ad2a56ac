"""
Repository pattern implementation for direct database access.

Services and the CLI use these classes instead of issuing queries
themselves.
"""

from .base import (
    BaseRepository,
    RepositoryError,
    NotFoundError,
    DuplicateError
)
from .user import UserRepository
from .session import SessionRepository
from .course import CategoryRepository, CourseRepository
from .instructor_application import InstructorApplicationRepository
from .enrollment import EnrollmentRepository

__all__ = [
    "BaseRepository",
    "RepositoryError", 
    "NotFoundError",
    "DuplicateError",
    "UserRepository",
    "SessionRepository",
    "CategoryRepository",
    "CourseRepository",
    "InstructorApplicationRepository",
    "EnrollmentRepository"
]
