"""
Session repository: issues and revokes bearer tokens.

Only the sha256 of a token is stored.
"""

import datetime
import secrets
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.auth import Session as UserSession
from ..permissions.auth import hash_token


class SessionRepository(BaseRepository[UserSession]):
    """Repository for Session entity database operations."""
    
    def __init__(self, db: Session):
        super().__init__(db, UserSession)
    
    def issue(self, user_id: str, hours: int) -> str:
        """
        Create a session for a user and return the raw bearer token.
        
        The raw token is not recoverable afterwards.
        """
        token = secrets.token_urlsafe(32)
        expires_at = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(hours=hours)
        self.create(UserSession(user_id=user_id, token_hash=hash_token(token), expires_at=expires_at))
        return token
    
    def revoke_for_user(self, user_id: str) -> int:
        count = self.db.query(UserSession).filter(UserSession.user_id == user_id).delete()
        self.db.commit()
        return count
