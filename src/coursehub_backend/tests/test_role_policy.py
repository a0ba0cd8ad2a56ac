"""
Role policy decisions over every role and requirement.
"""

import pytest

from coursehub_backend.permissions.policy import POLICY_TABLE, decide, is_allowed
from coursehub_backend.permissions.roles import Decision, Requirement, Role


EXPECTED = {
    # (role, requirement): allowed
    ("student", Requirement.STUDENT): True,
    ("student", Requirement.INSTRUCTOR): False,
    ("student", Requirement.ADMIN): False,
    ("student", Requirement.INSTRUCTOR_OR_ABOVE): False,
    ("instructor", Requirement.STUDENT): False,
    ("instructor", Requirement.INSTRUCTOR): True,
    ("instructor", Requirement.ADMIN): False,
    ("instructor", Requirement.INSTRUCTOR_OR_ABOVE): True,
    ("admin", Requirement.STUDENT): True,
    ("admin", Requirement.INSTRUCTOR): True,
    ("admin", Requirement.ADMIN): True,
    ("admin", Requirement.INSTRUCTOR_OR_ABOVE): True,
}


@pytest.mark.parametrize("role,requirement", list(EXPECTED.keys()))
def test_decision_matrix(role, requirement):
    expected = Decision.ALLOW if EXPECTED[(role, requirement)] else Decision.DENY
    assert decide(role, requirement) is expected


@pytest.mark.parametrize("requirement", list(Requirement))
def test_admin_is_allowed_everything(requirement):
    assert decide(Role.ADMIN, requirement) is Decision.ALLOW


def test_admin_is_allowed_unknown_requirement():
    assert decide("admin", "publish_everything") is Decision.ALLOW


@pytest.mark.parametrize("requirement", list(Requirement))
def test_missing_role_reads_as_student(requirement):
    assert decide(None, requirement) is decide(Role.STUDENT, requirement)


@pytest.mark.parametrize("role", [None, "", "superuser", "ADMINISTRATOR", "root"])
@pytest.mark.parametrize("requirement", [Requirement.INSTRUCTOR, Requirement.ADMIN, Requirement.INSTRUCTOR_OR_ABOVE])
def test_missing_or_unknown_role_never_passes_privileged_requirements(role, requirement):
    assert decide(role, requirement) is Decision.DENY


def test_unknown_requirement_denies_non_admins():
    assert decide("student", "anything") is Decision.DENY
    assert decide("instructor", "anything") is Decision.DENY


def test_requirement_accepted_as_string():
    assert decide("instructor", "instructor_or_above") is Decision.ALLOW
    assert is_allowed("student", "student")
    assert not is_allowed("student", "admin")


@pytest.mark.parametrize("role", ["ADMIN", "Admin", " admin", "admin ", " Instructor ", "INSTRUCTOR"])
def test_non_canonical_role_values_are_student(role):
    assert Role.normalize(role) is Role.STUDENT
    assert not Role.is_valid(role)
    assert decide(role, Requirement.INSTRUCTOR) is Decision.DENY
    assert decide(role, Requirement.ADMIN) is Decision.DENY
    assert decide(role, Requirement.STUDENT) is Decision.ALLOW


def test_every_requirement_has_a_policy_entry():
    assert set(POLICY_TABLE) == set(Requirement)
    for roles in POLICY_TABLE.values():
        assert Role.ADMIN in roles


def test_decision_truthiness():
    assert Decision.ALLOW
    assert not Decision.DENY


def test_role_normalize():
    assert Role.normalize(None) is Role.STUDENT
    assert Role.normalize("bogus") is Role.STUDENT
    assert Role.normalize("admin") is Role.ADMIN
    assert Role.normalize(Role.INSTRUCTOR) is Role.INSTRUCTOR


def test_role_rank_orders_roles():
    assert Role.STUDENT.rank < Role.INSTRUCTOR.rank < Role.ADMIN.rank
