"""
Enrollment repository.
"""

from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.enrollment import Enrollment


class EnrollmentRepository(BaseRepository[Enrollment]):
    """Repository for Enrollment entity database operations."""
    
    def __init__(self, db: Session):
        super().__init__(db, Enrollment)
    
    def find_for_user(self, user_id: str, course_id: str) -> Optional[Enrollment]:
        return self.find_one_by(user_id=user_id, course_id=course_id)
    
    def is_enrolled(self, user_id: str, course_id: str) -> bool:
        return self.count(user_id=user_id, course_id=course_id) > 0
    
    def list_for_user(self, user_id: str, skip: int = 0, limit: int = 20) -> Tuple[List[Enrollment], int]:
        """
        List one user's enrollments, most recent first.
        
        Returns:
            Tuple of (page of enrollments, total count)
        """
        query = self.db.query(Enrollment).filter(Enrollment.user_id == user_id)
        return self.paginate(query, Enrollment.enrolled_at.desc(), skip, limit)
