"""
Ownership guard decisions and owner lookups.
"""

import pytest

from coursehub_backend.model import Course
from coursehub_backend.permissions.ownership import OwnershipRegistry, decide_ownership, ownership_registry
from coursehub_backend.permissions.roles import Decision
from coursehub_backend.tests.fixtures import create_course, create_user


def test_owner_is_allowed():
    assert decide_ownership("u-1", "instructor", "u-1") is Decision.ALLOW


@pytest.mark.parametrize("role", ["student", "instructor", None])
def test_non_owner_is_denied(role):
    assert decide_ownership("u-2", role, "u-1") is Decision.DENY


def test_admin_is_allowed_on_any_resource():
    assert decide_ownership("u-9", "admin", "u-1") is Decision.ALLOW
    assert decide_ownership("u-9", "admin", None) is Decision.ALLOW


def test_missing_owner_never_matches():
    assert decide_ownership("u-1", "instructor", None) is Decision.DENY
    assert decide_ownership(None, "instructor", None) is Decision.DENY


def test_course_is_registered():
    assert Course in ownership_registry
    assert ownership_registry.get_lookup(Course).owner_column == "instructor_id"


def test_registry_without_entries():
    registry = OwnershipRegistry()
    assert Course not in registry
    assert registry.get_lookup(Course) is None


def test_owner_lookup_reads_owner(db):
    owner = create_user(db, role="instructor")
    course = create_course(db, owner)

    lookup = ownership_registry.get_lookup(Course)

    assert lookup.get_owner_id(course.id, db) == (True, owner.id)


def test_owner_lookup_missing_resource(db):
    lookup = ownership_registry.get_lookup(Course)

    assert lookup.get_owner_id("does-not-exist", db) == (False, None)


def test_owner_lookup_orphaned_resource(db):
    course = create_course(db, None)
    lookup = ownership_registry.get_lookup(Course)

    assert lookup.get_owner_id(course.id, db) == (True, None)
