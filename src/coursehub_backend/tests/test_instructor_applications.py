"""
Instructor application state machine: submission, review and promotion.
"""

import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError

from coursehub_backend.api.exceptions import (
    BadRequestException,
    DuplicateApplicationException,
    ForbiddenException,
    InvalidTransitionException,
    NotFoundException,
    ServiceUnavailableException,
)
from coursehub_backend.interface.instructor_applications import InstructorApplicationCreate
from coursehub_backend.model import InstructorApplication, User
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import UserRepository
from coursehub_backend.services import instructor_applications as service
from coursehub_backend.tests.fixtures import (
    APPLICATION_PAYLOAD,
    create_application,
    create_user,
    principal_for,
)


def payload():
    return InstructorApplicationCreate(**APPLICATION_PAYLOAD)


def role_of(db, user_id):
    db.expire_all()
    return db.get(User, user_id).role


class TestSubmit:

    def test_student_submits_pending_application(self, db):
        student = create_user(db)

        application = service.submit(principal_for(student), payload(), db)

        assert application.status == "pending"
        assert application.user_id == student.id
        assert application.areas_of_expertise == ["python", "databases"]
        assert application.reviewed_by is None

    def test_null_role_user_may_submit(self, db):
        user = create_user(db, role=None)

        assert service.submit(principal_for(user), payload(), db).status == "pending"

    @pytest.mark.parametrize("role", ["instructor", "admin"])
    def test_only_students_may_submit(self, db, role):
        user = create_user(db, role=role)

        with pytest.raises(ForbiddenException):
            service.submit(principal_for(user), payload(), db)

    def test_second_submission_while_pending(self, db):
        student = create_user(db)
        principal = principal_for(student)
        service.submit(principal, payload(), db)

        with pytest.raises(DuplicateApplicationException) as exc:
            service.submit(principal, payload(), db)

        assert exc.value.status_code == 400
        assert exc.value.existing_status == "pending"
        assert exc.value.detail == "You already have a pending instructor application."
        assert db.query(InstructorApplication).count() == 1

    def test_submission_while_approved(self, db):
        # an approved applicant who was never promoted still cannot re-apply
        student = create_user(db)
        create_application(db, student, status="approved")

        with pytest.raises(DuplicateApplicationException) as exc:
            service.submit(principal_for(student), payload(), db)

        assert exc.value.existing_status == "approved"

    def test_resubmission_after_rejection(self, db):
        student = create_user(db)
        create_application(db, student, status="rejected")

        application = service.submit(principal_for(student), payload(), db)

        assert application.status == "pending"
        assert db.query(InstructorApplication).filter_by(user_id=student.id).count() == 2

    def test_index_violation_maps_to_duplicate(self, db):
        student = create_user(db)
        create_application(db, student, status="pending")

        # the pre-check misses a row inserted by a concurrent request
        with patch.object(service.InstructorApplicationRepository, "find_active_for_user", side_effect=[None, None]):
            with pytest.raises(DuplicateApplicationException) as exc:
                service.submit(principal_for(student), payload(), db)

        assert exc.value.existing_status == "pending"

    def test_status_cannot_be_supplied(self, db):
        student = create_user(db)
        data = dict(APPLICATION_PAYLOAD, status="approved", reviewed_by="someone")

        application = service.submit(principal_for(student), InstructorApplicationCreate(**data), db)

        assert application.status == "pending"
        assert application.reviewed_by is None


class TestReview:

    def test_approve_promotes_owner(self, db):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student)

        result = service.approve(principal_for(admin), application.id, db, comments="Welcome")

        assert result.status == "approved"
        assert result.reviewed_by == admin.id
        assert result.reviewed_at is not None
        assert result.review_comments == "Welcome"
        assert role_of(db, student.id) == "instructor"

    def test_approve_promotes_null_role_owner(self, db):
        user = create_user(db, role=None)
        admin = create_user(db, role="admin")
        application = create_application(db, user)

        service.approve(principal_for(admin), application.id, db)

        assert role_of(db, user.id) == "instructor"

    def test_approve_keeps_higher_role(self, db):
        user = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, user)
        user.role = "admin"
        db.commit()

        service.approve(principal_for(admin), application.id, db)

        assert role_of(db, user.id) == "admin"

    def test_reject_leaves_role(self, db):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student)

        result = service.reject(principal_for(admin), application.id, db, comments="Not yet")

        assert result.status == "rejected"
        assert role_of(db, student.id) == "student"

    @pytest.mark.parametrize("second", [service.approve, service.reject])
    def test_second_review_is_invalid_transition(self, db, second):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student)
        service.approve(principal_for(admin), application.id, db)

        with pytest.raises(InvalidTransitionException) as exc:
            second(principal_for(admin), application.id, db)

        assert exc.value.status_code == 409
        db.expire_all()
        assert db.get(InstructorApplication, application.id).status == "approved"
        assert role_of(db, student.id) == "instructor"

    def test_rejected_application_cannot_be_approved(self, db):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student, status="rejected")

        with pytest.raises(InvalidTransitionException):
            service.approve(principal_for(admin), application.id, db)

        assert role_of(db, student.id) == "student"

    def test_missing_application(self, db):
        admin = create_user(db, role="admin")

        with pytest.raises(NotFoundException):
            service.approve(principal_for(admin), "missing", db)

    @pytest.mark.parametrize("role", ["student", "instructor", None])
    def test_only_admins_review(self, db, role):
        student = create_user(db)
        reviewer = create_user(db, role=role)
        application = create_application(db, student)

        with pytest.raises(ForbiddenException):
            service.approve(principal_for(reviewer), application.id, db)

        db.expire_all()
        assert db.get(InstructorApplication, application.id).status == "pending"

    def test_review_dispatch(self, db):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student)

        result = service.review(principal_for(admin), application.id, "rejected", "no", db)

        assert result.status == "rejected"

    def test_review_rejects_unknown_status(self, db):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student)

        with pytest.raises(BadRequestException):
            service.review(principal_for(admin), application.id, "pending", None, db)

    def test_failed_promotion_rolls_back_approval(self, db):
        student = create_user(db)
        admin = create_user(db, role="admin")
        application = create_application(db, student)
        error = OperationalError("UPDATE", {}, Exception("disk I/O error"))

        with patch.object(UserRepository, "compare_and_set_role", side_effect=error):
            with pytest.raises(ServiceUnavailableException):
                service.approve(principal_for(admin), application.id, db)

        db.expire_all()
        assert db.get(InstructorApplication, application.id).status == "pending"
        assert role_of(db, student.id) == "student"


class TestConcurrentReview:

    def test_racing_approvals_have_one_winner(self, file_session_factory):
        setup = file_session_factory()
        student = create_user(setup)
        admin = create_user(setup, role="admin")
        application = create_application(setup, student)
        ids = (student.id, admin.id, application.id)
        setup.close()
        student_id, admin_id, application_id = ids

        first, second = file_session_factory(), file_session_factory()
        admin_principal = Principal(user_id=admin_id, role="admin")

        # both requests have seen the application as pending
        assert first.get(InstructorApplication, application_id).status == "pending"
        assert second.get(InstructorApplication, application_id).status == "pending"
        first.commit()
        second.commit()

        outcomes = []
        for session in (first, second):
            try:
                service.approve(admin_principal, application_id, session)
                outcomes.append("approved")
            except InvalidTransitionException:
                outcomes.append("conflict")

        assert sorted(outcomes) == ["approved", "conflict"]

        check = file_session_factory()
        assert check.get(User, student_id).role == "instructor"
        assert check.get(InstructorApplication, application_id).reviewed_by == admin_id
        for session in (first, second, check):
            session.close()

    def test_approve_and_reject_race(self, file_session_factory):
        setup = file_session_factory()
        student = create_user(setup)
        admin = create_user(setup, role="admin")
        application = create_application(setup, student)
        student_id, admin_id, application_id = student.id, admin.id, application.id
        setup.close()

        admin_principal = Principal(user_id=admin_id, role="admin")
        rejecting, approving = file_session_factory(), file_session_factory()

        service.reject(admin_principal, application_id, rejecting)
        with pytest.raises(InvalidTransitionException):
            service.approve(admin_principal, application_id, approving)

        check = file_session_factory()
        assert check.get(InstructorApplication, application_id).status == "rejected"
        assert check.get(User, student_id).role == "student"
        for session in (rejecting, approving, check):
            session.close()


class TestReadApplications:

    def test_my_application_returns_latest(self, db):
        student = create_user(db)
        create_application(db, student, status="rejected")
        latest = service.submit(principal_for(student), payload(), db)

        assert service.get_my_application(principal_for(student), db).id == latest.id

    def test_my_application_missing(self, db):
        student = create_user(db)

        with pytest.raises(NotFoundException):
            service.get_my_application(principal_for(student), db)

    def test_list_by_status(self, db):
        for status in ("pending", "pending", "rejected"):
            create_application(db, create_user(db), status=status)

        items, total = service.list_applications(db, status="pending")

        assert total == 2
        assert all(a.status == "pending" for a in items)
        assert service.list_applications(db, limit=1)[1] == 3
