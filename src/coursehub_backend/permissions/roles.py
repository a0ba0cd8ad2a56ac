"""
Role and requirement definitions for the authorization layer
"""
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Platform-wide role of a user"""
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"

    def __str__(self):
        return self.value

    @classmethod
    def normalize(cls, value: Optional[str]) -> 'Role':
        """Map a stored role value to a Role.

        Only the exact stored values map to a role. A missing or
        unrecognized role, including a differently cased or padded one,
        is read as STUDENT, the least privileged role. This is never an
        error.
        """
        if value is None:
            return cls.STUDENT
        if isinstance(value, Role):
            return value
        for role in cls:
            if role.value == value:
                return role
        return cls.STUDENT

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return isinstance(value, str) and value in cls.get_all()

    @classmethod
    def get_all(cls) -> list[str]:
        return [role.value for role in cls]

    @property
    def rank(self) -> int:
        return ROLE_RANK[self]


ROLE_RANK = {
    Role.STUDENT: 0,
    Role.INSTRUCTOR: 1,
    Role.ADMIN: 2,
}


class Requirement(str, Enum):
    """What a protected operation demands from the acting principal"""
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"
    INSTRUCTOR_OR_ABOVE = "instructor_or_above"

    def __str__(self):
        return self.value


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"

    def __bool__(self):
        return self is Decision.ALLOW
