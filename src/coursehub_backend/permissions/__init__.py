"""
Authorization layer: roles, role policy, ownership guard and the
authorization gate that chains them for every protected operation.
"""

from coursehub_backend.permissions.roles import Role, Requirement, Decision
from coursehub_backend.permissions.policy import decide, is_allowed
from coursehub_backend.permissions.ownership import decide_ownership, ownership_registry
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.permissions.auth import get_current_principal, resolve_principal
from coursehub_backend.permissions.core import (
    AuthorizationGate,
    OPERATION_POLICIES,
    authorize,
    authorize_operation,
)

__all__ = [
    'Role',
    'Requirement',
    'Decision',
    'decide',
    'is_allowed',
    'decide_ownership',
    'ownership_registry',
    'Principal',
    'get_current_principal',
    'resolve_principal',
    'AuthorizationGate',
    'OPERATION_POLICIES',
    'authorize',
    'authorize_operation',
]
