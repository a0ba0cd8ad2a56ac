"""
User repository for direct database access.
"""

from typing import Iterable, List, Optional, Tuple
from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.auth import User
from ..permissions.roles import Role


class UserRepository(BaseRepository[User]):
    """Repository for User entity database operations."""
    
    def __init__(self, db: Session):
        super().__init__(db, User)
    
    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_one_by(email=email.strip().lower())
    
    def get_or_create_by_email(
        self,
        email: str,
        given_name: Optional[str] = None,
        family_name: Optional[str] = None
    ) -> Tuple[User, bool]:
        """
        Return the user for an email, creating it on first authentication.
        
        New users always start as students.
        
        Returns:
            Tuple of (user, created)
        """
        user = self.find_by_email(email)
        if user is not None:
            return user, False
        
        user = User(
            email=email.strip().lower(),
            given_name=given_name,
            family_name=family_name,
            role=Role.STUDENT.value
        )
        return self.create(user), True
    
    def search(
        self,
        search: Optional[str] = None,
        role: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[User], int]:
        """
        Search users by name or email, optionally filtered by role.
        
        A NULL role is listed under ``student``.
        
        Returns:
            Tuple of (page of users, total count)
        """
        query = self.db.query(User)
        
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                User.email.ilike(pattern),
                User.given_name.ilike(pattern),
                User.family_name.ilike(pattern)
            ))
        
        if role:
            query = query.filter(self._role_clause([role]))
        
        return self.paginate(query, User.created_at.desc(), skip, limit)
    
    def count_with_role(self, role: str) -> int:
        return self.db.query(User).filter(self._role_clause([role])).count()
    
    def compare_and_set_role(self, user_id: str, expected: Iterable[str], new_role: str) -> int:
        """
        Set a user's role only if it currently is one of ``expected``.
        
        Does not commit; the caller owns the transaction.
        
        Returns:
            Number of rows changed (0 or 1)
        """
        stmt = (
            update(User)
            .where(User.id == user_id, self._role_clause(expected))
            .values(role=new_role)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount
    
    @staticmethod
    def _role_clause(roles: Iterable[str]):
        roles = [str(r) for r in roles]
        clause = User.role.in_(roles)
        # stored NULL counts as student
        if Role.STUDENT.value in roles:
            clause = or_(clause, User.role.is_(None))
        return clause
