"""
Instructor application state machine.

An application starts as ``pending`` and is moved exactly once, by an
admin, to ``approved`` or ``rejected``. Status changes are conditional
updates on the current status, so of two concurrent reviews only one
succeeds and the other sees an invalid transition. Approval promotes the
applicant to instructor in the same transaction.
"""

import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import (
    BadRequestException,
    DuplicateApplicationException,
    ForbiddenException,
    InvalidTransitionException,
    NotFoundException,
    ServiceUnavailableException,
)
from coursehub_backend.interface.instructor_applications import (
    ApplicationStatus,
    InstructorApplicationCreate,
)
from coursehub_backend.model.application import InstructorApplication
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.permissions.roles import Role
from coursehub_backend.repositories import (
    DuplicateError,
    InstructorApplicationRepository,
    RepositoryError,
    UserRepository,
)

logger = logging.getLogger(__name__)

APPROVE = "approve"
REJECT = "reject"

TRANSITIONS = {
    (ApplicationStatus.pending, APPROVE): ApplicationStatus.approved,
    (ApplicationStatus.pending, REJECT): ApplicationStatus.rejected,
}

REVIEW_ACTIONS = {
    ApplicationStatus.approved.value: APPROVE,
    ApplicationStatus.rejected.value: REJECT,
}

_review_gate = authorize_operation("application:review")


def submit(principal: Principal, payload: InstructorApplicationCreate, db: Session) -> InstructorApplication:
    """
    Submit an instructor application for the acting user.

    Only students may apply. A user holding a pending or approved
    application gets DuplicateApplicationException naming that status.
    """
    if principal.role != Role.STUDENT:
        raise ForbiddenException("Only students can apply to become instructors")

    repo = InstructorApplicationRepository(db)

    existing = repo.find_active_for_user(principal.user_id)
    if existing is not None:
        raise DuplicateApplicationException(existing.status)

    application = InstructorApplication(
        user_id=principal.user_id,
        status=ApplicationStatus.pending.value,
        **payload.model_dump()
    )

    try:
        application = repo.create(application)
    except DuplicateError:
        # a concurrent submit won the partial unique index
        existing = repo.find_active_for_user(principal.user_id)
        raise DuplicateApplicationException(existing.status if existing else ApplicationStatus.pending.value)
    except RepositoryError as e:
        logger.error(f"Storing application for {principal.user_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"User {principal.user_id} submitted instructor application {application.id}")
    return application


def _source_status(action: str) -> ApplicationStatus:
    for (source, name) in TRANSITIONS:
        if name == action:
            return source
    raise ValueError(f"Unknown transition: {action}")


def _transition(principal: Principal, application_id: str, action: str, db: Session, comments: Optional[str]) -> InstructorApplication:
    source = _source_status(action)
    target = TRANSITIONS[(source, action)]
    applications = InstructorApplicationRepository(db)

    try:
        changed = applications.update_status_if(
            application_id,
            source.value,
            target.value,
            reviewer_id=principal.user_id,
            comments=comments
        )

        if changed == 0:
            db.rollback()
            current = applications.get_by_id_optional(application_id)
            if current is None:
                raise NotFoundException("Application not found")
            raise InvalidTransitionException(f"Application is already {current.status}")

        if target == ApplicationStatus.approved:
            owner_id = (
                db.query(InstructorApplication.user_id)
                .filter(InstructorApplication.id == application_id)
                .scalar()
            )
            # owners already at instructor or admin keep their role
            promoted = UserRepository(db).compare_and_set_role(
                owner_id, [Role.STUDENT.value], Role.INSTRUCTOR.value
            )
            if promoted:
                logger.info(f"Promoted user {owner_id} to instructor")

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transition {action} of application {application_id} failed: {e}")
        raise ServiceUnavailableException()

    logger.info(f"Application {application_id} {source.value} -> {target.value} by {principal.user_id}")
    return applications.get_by_id(application_id)


@_review_gate.guard
def approve(principal: Principal, application_id: str, db: Session, comments: Optional[str] = None) -> InstructorApplication:
    return _transition(principal, application_id, APPROVE, db, comments)


@_review_gate.guard
def reject(principal: Principal, application_id: str, db: Session, comments: Optional[str] = None) -> InstructorApplication:
    return _transition(principal, application_id, REJECT, db, comments)


@_review_gate.guard
def review(principal: Principal, application_id: str, status: str, comments: Optional[str], db: Session) -> InstructorApplication:
    """Approve or reject depending on ``status``"""
    action = REVIEW_ACTIONS.get(status)
    if action is None:
        raise BadRequestException("Invalid status. Must be 'approved' or 'rejected'")

    if action == APPROVE:
        return approve(principal, application_id, db, comments)
    return reject(principal, application_id, db, comments)


def get_my_application(principal: Principal, db: Session) -> InstructorApplication:
    application = InstructorApplicationRepository(db).latest_for_user(principal.user_id)
    if application is None:
        raise NotFoundException("No application found")
    return application


def list_applications(db: Session, status: Optional[str] = None, skip: int = 0, limit: int = 20) -> Tuple[List[InstructorApplication], int]:
    return InstructorApplicationRepository(db).list_by_status(status, skip=skip, limit=limit)
