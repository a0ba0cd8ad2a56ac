"""
Role policy: the single place that decides whether a role meets a requirement.
"""
from typing import Dict, FrozenSet, Optional

from coursehub_backend.permissions.roles import Decision, Requirement, Role

# Roles that satisfy each requirement. Admin appears everywhere on purpose,
# and decide() also short-circuits on it.
POLICY_TABLE: Dict[Requirement, FrozenSet[Role]] = {
    Requirement.STUDENT: frozenset({Role.STUDENT, Role.ADMIN}),
    Requirement.INSTRUCTOR: frozenset({Role.INSTRUCTOR, Role.ADMIN}),
    Requirement.ADMIN: frozenset({Role.ADMIN}),
    Requirement.INSTRUCTOR_OR_ABOVE: frozenset({Role.INSTRUCTOR, Role.ADMIN}),
}


def _as_requirement(requirement: Requirement | str) -> Optional[Requirement]:
    if isinstance(requirement, Requirement):
        return requirement
    try:
        return Requirement(str(requirement))
    except ValueError:
        return None


def decide(role: Optional[Role | str], requirement: Requirement | str) -> Decision:
    """Decide whether ``role`` satisfies ``requirement``.

    Total over its inputs: unknown requirements deny, a missing role is
    treated as student.
    """
    role = Role.normalize(role)

    if role == Role.ADMIN:
        return Decision.ALLOW

    requirement = _as_requirement(requirement)
    if requirement is None:
        return Decision.DENY

    if role in POLICY_TABLE.get(requirement, frozenset()):
        return Decision.ALLOW

    return Decision.DENY


def is_allowed(role: Optional[Role | str], requirement: Requirement | str) -> bool:
    return decide(role, requirement) is Decision.ALLOW
