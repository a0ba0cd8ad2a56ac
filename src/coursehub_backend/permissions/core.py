"""
Authorization middleware chain.

Every protected operation runs through an AuthorizationGate: the principal
is resolved, the role policy is applied, and for ownership-scoped operations
the owner of the target resource is looked up and compared. The route body
only runs when all steps allow. OPERATION_POLICIES declares the requirement
and ownership scope of every protected operation in one place.
"""

import functools
import inspect
import logging
from typing import Any, Callable, Dict, NamedTuple, Optional, Type
from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import (
    ForbiddenException,
    ServiceUnavailableException,
    UnauthorizedException,
)
from coursehub_backend.database import get_db
from coursehub_backend.model.course import Course
from coursehub_backend.permissions.auth import get_current_principal
from coursehub_backend.permissions.ownership import ownership_registry
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.permissions.roles import Requirement

logger = logging.getLogger(__name__)


def initialize_ownership_lookups():
    """Register the owner column of every ownership-scoped model"""
    ownership_registry.register(Course, "instructor_id")


class OperationPolicy(NamedTuple):
    # None means any authenticated principal
    requirement: Optional[Requirement]
    owned_by: Optional[Type[Any]] = None


OPERATION_POLICIES: Dict[str, OperationPolicy] = {
    # own account
    "user:read": OperationPolicy(None),
    "user:update_profile": OperationPolicy(None),
    # catalog
    "category:create": OperationPolicy(Requirement.ADMIN),
    "course:list_own": OperationPolicy(Requirement.INSTRUCTOR_OR_ABOVE),
    "course:create": OperationPolicy(Requirement.INSTRUCTOR_OR_ABOVE),
    "course:update": OperationPolicy(Requirement.INSTRUCTOR_OR_ABOVE, Course),
    "course:delete": OperationPolicy(Requirement.INSTRUCTOR_OR_ABOVE, Course),
    "instructor:stats": OperationPolicy(Requirement.INSTRUCTOR_OR_ABOVE),
    # instructor onboarding; submit narrows to exactly student in the service
    "application:submit": OperationPolicy(None),
    "application:read_own": OperationPolicy(None),
    "application:list": OperationPolicy(Requirement.ADMIN),
    "application:review": OperationPolicy(Requirement.ADMIN),
    # learning
    "enrollment:create": OperationPolicy(None),
    "enrollment:read_own": OperationPolicy(None),
    # administration
    "user:list": OperationPolicy(Requirement.ADMIN),
    "user:change_role": OperationPolicy(Requirement.ADMIN),
    "course:list_all": OperationPolicy(Requirement.ADMIN),
    "course:feature": OperationPolicy(Requirement.ADMIN),
    "admin:stats": OperationPolicy(Requirement.ADMIN),
}


class AuthorizationGate:
    """
    A single authorization check, usable as a FastAPI dependency.

    Steps run in a fixed order and stop at the first denial:
    principal present (401), role policy (403), ownership (403).
    Admins never trigger the owner lookup.
    """

    def __init__(
        self,
        requirement: Optional[Requirement | str],
        owned_by: Optional[Type[Any]] = None,
        id_param: str = "id",
        name: Optional[str] = None
    ):
        if owned_by is not None and owned_by not in ownership_registry:
            raise ValueError(f"No owner lookup registered for {owned_by.__name__}")

        self.requirement = requirement
        self.owned_by = owned_by
        self.id_param = id_param
        self.name = name or str(requirement)

    def check(self, principal: Optional[Principal], db: Optional[Session] = None, resource_id: Optional[str] = None) -> Principal:
        if principal is None:
            raise UnauthorizedException()

        if self.requirement is not None and not principal.permitted(self.requirement):
            logger.info(f"Denied {self.name} for user {principal.user_id}: role {principal.role} does not meet {self.requirement}")
            raise ForbiddenException()

        if self.owned_by is None or principal.is_admin:
            return principal

        if db is None:
            raise ValueError(f"{self.name} needs a database session for the ownership check")

        lookup = ownership_registry.get_lookup(self.owned_by)

        try:
            exists, owner_id = lookup.get_owner_id(resource_id, db)
        except SQLAlchemyError as e:
            logger.error(f"Owner lookup for {lookup.resource_name} {resource_id} failed: {e}")
            raise ServiceUnavailableException()

        # a missing resource is reported exactly like a foreign one
        if not exists or not principal.owns(owner_id):
            logger.info(f"Denied {self.name} on {lookup.resource_name} {resource_id} for user {principal.user_id}")
            raise ForbiddenException()

        return principal

    def __call__(
        self,
        request: Request,
        principal: Principal = Depends(get_current_principal),
        db: Session = Depends(get_db)
    ) -> Principal:
        resource_id = request.path_params.get(self.id_param)
        return self.check(principal, db, resource_id)

    def guard(self, operation: Callable) -> Callable:
        """
        Wrap a plain callable so it only runs for an authorized principal.

        The principal is passed as first argument. For ownership-scoped gates
        the session and resource id are taken from the ``db`` and ``id_param``
        arguments of the call, whether passed by position or by keyword.
        """
        signature = inspect.signature(operation)

        if self.owned_by is not None:
            missing = [p for p in ("db", self.id_param) if p not in signature.parameters]
            if missing:
                raise ValueError(f"{operation.__name__} has no parameter {', '.join(missing)} for the ownership check of {self.name}")

        @functools.wraps(operation)
        def wrapper(principal: Principal, *args, **kwargs):
            bound = signature.bind(principal, *args, **kwargs)
            bound.apply_defaults()
            self.check(principal, bound.arguments.get("db"), bound.arguments.get(self.id_param))
            return operation(principal, *args, **kwargs)

        return wrapper


def authorize(requirement: Optional[Requirement | str], owned_by: Optional[Type[Any]] = None, id_param: str = "id") -> AuthorizationGate:
    return AuthorizationGate(requirement, owned_by=owned_by, id_param=id_param)


def authorize_operation(operation: str, id_param: str = "id") -> AuthorizationGate:
    """Gate for a named operation declared in OPERATION_POLICIES"""
    try:
        policy = OPERATION_POLICIES[operation]
    except KeyError:
        raise ValueError(f"Unknown operation: {operation}")

    return AuthorizationGate(policy.requirement, owned_by=policy.owned_by, id_param=id_param, name=operation)


initialize_ownership_lookups()
