"""
User account operations: own profile, administrative role changes and
platform statistics.

There is no demotion path. A role change only ever moves a user up the
student < instructor < admin order, as a compare-and-set on the role the
caller last saw.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import (
    BadRequestException,
    InvalidTransitionException,
    NotFoundException,
    ServiceUnavailableException,
)
from coursehub_backend.interface.courses import AdminStats
from coursehub_backend.interface.users import UserProfileUpdate
from coursehub_backend.model.application import InstructorApplication
from coursehub_backend.model.auth import User
from coursehub_backend.model.course import Course
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.permissions.roles import Role
from coursehub_backend.repositories import NotFoundError, RepositoryError, UserRepository

logger = logging.getLogger(__name__)


def update_profile(principal: Principal, payload: UserProfileUpdate, db: Session) -> User:
    """Update the acting user's own profile. The role is never touched."""
    updates = payload.model_dump(exclude_unset=True)
    updates.pop("role", None)

    try:
        return UserRepository(db).update(principal.user_id, updates)
    except NotFoundError:
        raise NotFoundException("User not found")
    except RepositoryError as e:
        logger.error(f"Profile update for {principal.user_id} failed: {e}")
        raise ServiceUnavailableException()


def set_role(user_id: str, new_role: Role | str, db: Session) -> User:
    """
    Raise a user's role to ``new_role``.

    Setting the current role again is a no-op. Lowering a role raises
    BadRequestException. If the role changed since it was read, the write
    is refused with InvalidTransitionException.
    """
    if not Role.is_valid(str(new_role)):
        raise BadRequestException("Invalid role")
    new_role = Role.normalize(new_role)

    users = UserRepository(db)
    user = users.get_by_id_optional(user_id)
    if user is None:
        raise NotFoundException("User not found")

    current = Role.normalize(user.role)
    if new_role == current:
        return user
    if new_role.rank < current.rank:
        raise BadRequestException(f"Cannot change role from {current} to {new_role}")

    try:
        changed = users.compare_and_set_role(user_id, [current.value], new_role.value)
        if changed == 0:
            db.rollback()
            raise InvalidTransitionException("Role was changed concurrently")
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Role change for {user_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"Role of user {user_id} changed from {current} to {new_role}")
    db.refresh(user)
    return user


@authorize_operation("user:change_role").guard
def change_role(principal: Principal, user_id: str, new_role: Role | str, db: Session) -> User:
    return set_role(user_id, new_role, db)


def ensure_admin(email: str, db: Session) -> User:
    """Create the user for ``email`` if needed and make it an admin."""
    user, created = UserRepository(db).get_or_create_by_email(email)
    if created:
        logger.info(f"Created user {user.email}")
    return set_role(user.id, Role.ADMIN, db)


def platform_stats(db: Session) -> AdminStats:
    users = UserRepository(db)
    return AdminStats(
        total_users=users.count(),
        total_instructors=users.count_with_role(Role.INSTRUCTOR.value),
        pending_applications=db.query(InstructorApplication).filter(
            InstructorApplication.status == "pending"
        ).count(),
        total_courses=db.query(Course).count()
    )
