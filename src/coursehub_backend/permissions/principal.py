from typing import Optional
from pydantic import BaseModel, ConfigDict

from coursehub_backend.permissions.ownership import decide_ownership
from coursehub_backend.permissions.policy import decide
from coursehub_backend.permissions.roles import Decision, Requirement, Role


class Principal(BaseModel):
    """The acting user for one request.

    Built fresh by the principal resolver for every request and passed
    along by value; it is never stored or shared between requests.
    """
    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    role: Role = Role.STUDENT

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(user_id=str(user.id), email=user.email, role=Role.normalize(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def permitted(self, requirement: Requirement | str) -> bool:
        return decide(self.role, requirement) is Decision.ALLOW

    def owns(self, owner_id: Optional[str]) -> bool:
        """True when the principal may mutate a resource owned by ``owner_id``"""
        return decide_ownership(self.user_id, self.role, owner_id) is Decision.ALLOW
