"""
Course and category mutations.

Authorization happens before these run; the functions here only stamp
ownership on creation and translate storage errors.
"""

import logging
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import (
    BadRequestException,
    NotFoundException,
    ServiceUnavailableException,
)
from coursehub_backend.interface.categories import CategoryCreate
from coursehub_backend.interface.courses import CourseCreate, CourseUpdate
from coursehub_backend.model.course import Category, Course
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import (
    CategoryRepository,
    CourseRepository,
    DuplicateError,
    NotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)


def create_category(payload: CategoryCreate, db: Session) -> Category:
    try:
        return CategoryRepository(db).create(Category(**payload.model_dump()))
    except DuplicateError:
        raise BadRequestException(f"Category with slug '{payload.slug}' already exists")
    except RepositoryError as e:
        logger.error(f"Creating category failed: {e}")
        raise ServiceUnavailableException()


def create_course(principal: Principal, payload: CourseCreate, db: Session) -> Course:
    """Create a course owned by the acting principal."""
    course = Course(**payload.model_dump(), instructor_id=principal.user_id)

    try:
        course = CourseRepository(db).create(course)
    except DuplicateError:
        # only the category foreign key can fail here
        raise BadRequestException("Invalid course data")
    except RepositoryError as e:
        logger.error(f"Creating course for {principal.user_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"User {principal.user_id} created course {course.id}")
    return course


def update_course(principal: Principal, course_id: str, payload: CourseUpdate, db: Session) -> Course:
    updates = payload.model_dump(exclude_unset=True)
    updates.pop("instructor_id", None)

    try:
        course = CourseRepository(db).update(course_id, updates)
    except NotFoundError:
        raise NotFoundException("Course not found")
    except DuplicateError:
        raise BadRequestException("Invalid course data")
    except RepositoryError as e:
        logger.error(f"Updating course {course_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"User {principal.user_id} updated course {course_id}")
    return course


def delete_course(principal: Principal, course_id: str, db: Session) -> None:
    """Delete a course together with its modules and lessons."""
    try:
        CourseRepository(db).delete(course_id)
    except NotFoundError:
        raise NotFoundException("Course not found")
    except RepositoryError as e:
        logger.error(f"Deleting course {course_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"User {principal.user_id} deleted course {course_id}")


def set_featured(principal: Principal, course_id: str, is_featured: bool, db: Session) -> Course:
    """Mark a course as featured in the catalog, or clear the mark."""
    try:
        course = CourseRepository(db).update(course_id, {"is_featured": is_featured})
    except NotFoundError:
        raise NotFoundException("Course not found")
    except RepositoryError as e:
        logger.error(f"Featuring course {course_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"User {principal.user_id} set featured={is_featured} on course {course_id}")
    return course
