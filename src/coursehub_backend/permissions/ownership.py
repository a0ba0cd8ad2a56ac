"""
Ownership guard and the registry of owner columns per resource type.
"""
from typing import Any, Dict, Optional, Type
from sqlalchemy.orm import Session

from coursehub_backend.permissions.roles import Decision, Role


def decide_ownership(user_id: Optional[str], role: Optional[Role | str], owner_id: Optional[str]) -> Decision:
    """Allow admins, and the owner of the resource. Nothing else."""
    if Role.normalize(role) == Role.ADMIN:
        return Decision.ALLOW

    if user_id is not None and owner_id is not None and str(user_id) == str(owner_id):
        return Decision.ALLOW

    return Decision.DENY


class OwnerLookup:
    """Reads the owning user id of one resource row"""

    def __init__(self, entity: Type[Any], owner_column: str):
        self.entity = entity
        self.owner_column = owner_column
        self.resource_name = entity.__tablename__

    def get_owner_id(self, resource_id: str, db: Session) -> tuple[bool, Optional[str]]:
        """Return ``(exists, owner_id)`` for the resource."""
        row = (
            db.query(getattr(self.entity, self.owner_column))
            .filter(self.entity.id == resource_id)
            .first()
        )
        if row is None:
            return False, None
        return True, row[0]


class OwnershipRegistry:
    """Registry of owner lookups keyed by model class"""

    def __init__(self):
        self._lookups: Dict[Type[Any], OwnerLookup] = {}

    def register(self, entity: Type[Any], owner_column: str):
        self._lookups[entity] = OwnerLookup(entity, owner_column)

    def get_lookup(self, entity: Type[Any]) -> Optional[OwnerLookup]:
        return self._lookups.get(entity)

    def __contains__(self, entity: Type[Any]) -> bool:
        return entity in self._lookups


ownership_registry = OwnershipRegistry()
