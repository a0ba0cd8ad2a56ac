"""
Test fixtures for the test suite.

Builders for users, tokens, courses and applications on a real SQLite
database, plus a mocked session for failure injection.
"""

from typing import Dict, Optional
from unittest.mock import MagicMock
from uuid import uuid4
from sqlalchemy.orm import Session

from coursehub_backend.model import Course, InstructorApplication, User
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import SessionRepository


APPLICATION_PAYLOAD = {
    "first_name": "Sam",
    "last_name": "Student",
    "email": "sam@example.com",
    "phone": "+43 1 234567",
    "bio": "Backend developer",
    "experience": "Eight years of Python",
    "qualifications": "MSc Computer Science",
    "previous_teaching": "Internal workshops",
    "areas_of_expertise": ["python", "databases"],
}


def create_user(db: Session, role: Optional[str] = "student", email: Optional[str] = None) -> User:
    user = User(
        email=email or f"{uuid4().hex[:10]}@example.com",
        given_name="Test",
        family_name="User",
        role=role
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_token(db: Session, user: User, hours: int = 1) -> str:
    return SessionRepository(db).issue(user.id, hours)


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def create_course(db: Session, owner: Optional[User], published: bool = True, **kwargs) -> Course:
    course = Course(
        title=kwargs.pop("title", "Intro to SQL"),
        price=kwargs.pop("price", 10),
        instructor_id=owner.id if owner else None,
        is_published=published,
        **kwargs
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def create_application(db: Session, user: User, status: str = "pending") -> InstructorApplication:
    application = InstructorApplication(user_id=user.id, status=status, **APPLICATION_PAYLOAD)
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def principal_for(user: User) -> Principal:
    return Principal.from_user(user)


def make_principal(role: Optional[str] = "student", user_id: Optional[str] = None) -> Principal:
    return Principal(user_id=user_id or str(uuid4()), email="mock@example.com", role=role or "student")


def create_mock_db() -> MagicMock:
    """Create a mock database session with common query patterns."""
    db = MagicMock(spec=Session)

    query_mock = MagicMock()
    query_mock.filter = MagicMock(return_value=query_mock)
    query_mock.order_by = MagicMock(return_value=query_mock)
    query_mock.first = MagicMock(return_value=None)
    query_mock.all = MagicMock(return_value=[])
    query_mock.count = MagicMock(return_value=0)

    db.query = MagicMock(return_value=query_mock)
    db.commit = MagicMock()
    db.rollback = MagicMock()
    db.close = MagicMock()

    return db
