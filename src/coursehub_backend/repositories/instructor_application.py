"""
Instructor application repository.
"""

import datetime
from typing import List, Optional, Tuple
from sqlalchemy import update
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.application import InstructorApplication

ACTIVE_STATUSES = ("pending", "approved")


class InstructorApplicationRepository(BaseRepository[InstructorApplication]):
    """Repository for InstructorApplication entity database operations."""
    
    def __init__(self, db: Session):
        super().__init__(db, InstructorApplication)
    
    def find_active_for_user(self, user_id: str) -> Optional[InstructorApplication]:
        """Find the user's pending or approved application, if any."""
        return self.db.query(InstructorApplication).filter(
            InstructorApplication.user_id == user_id,
            InstructorApplication.status.in_(ACTIVE_STATUSES)
        ).first()
    
    def latest_for_user(self, user_id: str) -> Optional[InstructorApplication]:
        return (
            self.db.query(InstructorApplication)
            .filter(InstructorApplication.user_id == user_id)
            .order_by(InstructorApplication.submitted_at.desc())
            .first()
        )
    
    def list_by_status(
        self,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[InstructorApplication], int]:
        """
        List applications, newest first.
        
        Returns:
            Tuple of (page of applications, total count)
        """
        query = self.db.query(InstructorApplication)
        if status:
            query = query.filter(InstructorApplication.status == status)
        
        return self.paginate(query, InstructorApplication.submitted_at.desc(), skip, limit)
    
    def update_status_if(
        self,
        application_id: str,
        expected_status: str,
        new_status: str,
        reviewer_id: Optional[str] = None,
        comments: Optional[str] = None
    ) -> int:
        """
        Move an application to ``new_status`` only if it is in ``expected_status``.
        
        Does not commit; the caller owns the transaction.
        
        Returns:
            Number of rows changed (0 or 1)
        """
        now = datetime.datetime.now(datetime.timezone.utc)
        stmt = (
            update(InstructorApplication)
            .where(
                InstructorApplication.id == application_id,
                InstructorApplication.status == expected_status
            )
            .values(
                status=new_status,
                reviewed_by=reviewer_id,
                reviewed_at=now,
                review_comments=comments,
                updated_at=now
            )
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount
