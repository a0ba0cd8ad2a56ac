"""
Course enrollment.

Enrollments always belong to the acting principal; a user id supplied by
the client is never used.
"""

import logging
from typing import List, Tuple
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import (
    BadRequestException,
    NotFoundException,
    ServiceUnavailableException,
)
from coursehub_backend.interface.enrollments import EnrollmentCreate
from coursehub_backend.model.enrollment import Enrollment
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import (
    CourseRepository,
    DuplicateError,
    EnrollmentRepository,
    RepositoryError,
)

logger = logging.getLogger(__name__)

ALREADY_ENROLLED = "Already enrolled in this course"


def enroll(principal: Principal, payload: EnrollmentCreate, db: Session) -> Enrollment:
    """
    Enroll the acting principal in a published course.

    Raises NotFoundException for unknown or unpublished courses and
    BadRequestException when the principal is already enrolled.
    """
    if CourseRepository(db).find_published(payload.course_id) is None:
        raise NotFoundException("Course not found")

    enrollments = EnrollmentRepository(db)
    if enrollments.is_enrolled(principal.user_id, payload.course_id):
        raise BadRequestException(ALREADY_ENROLLED)

    try:
        enrollment = enrollments.create(Enrollment(user_id=principal.user_id, course_id=payload.course_id))
    except DuplicateError:
        # lost a race against a concurrent enrollment of the same user
        raise BadRequestException(ALREADY_ENROLLED)
    except RepositoryError as e:
        logger.error(f"Enrolling {principal.user_id} in {payload.course_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"User {principal.user_id} enrolled in course {payload.course_id}")
    return enrollment


def list_my_enrollments(principal: Principal, db: Session, skip: int = 0, limit: int = 20) -> Tuple[List[Enrollment], int]:
    return EnrollmentRepository(db).list_for_user(principal.user_id, skip=skip, limit=limit)


def is_enrolled(principal: Principal, course_id: str, db: Session) -> bool:
    return EnrollmentRepository(db).is_enrolled(principal.user_id, course_id)
