"""
Course and category repositories.
"""

from typing import Dict, List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import BaseRepository
from ..model.course import Category, Course


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category entity database operations."""
    
    def __init__(self, db: Session):
        super().__init__(db, Category)
    
    def list_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()
    
    def find_by_slug(self, slug: str) -> Optional[Category]:
        return self.find_one_by(slug=slug)


class CourseRepository(BaseRepository[Course]):
    """Repository for Course entity database operations."""
    
    def __init__(self, db: Session):
        super().__init__(db, Course)
    
    def list_published(
        self,
        category_id: Optional[str] = None,
        level: Optional[str] = None,
        search: Optional[str] = None,
        featured: Optional[bool] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Course], int]:
        """
        List published courses with optional catalog filters.
        
        Returns:
            Tuple of (page of courses, total count)
        """
        query = self.db.query(Course).filter(Course.is_published.is_(True))
        
        if category_id:
            query = query.filter(Course.category_id == category_id)
        if level:
            query = query.filter(Course.level == level)
        if featured is not None:
            query = query.filter(Course.is_featured.is_(featured))
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Course.title.ilike(pattern),
                Course.subtitle.ilike(pattern),
                Course.description.ilike(pattern)
            ))
        
        return self.paginate(query, Course.created_at.desc(), skip, limit)
    
    def find_published(self, course_id: str) -> Optional[Course]:
        return self.db.query(Course).filter(
            Course.id == course_id,
            Course.is_published.is_(True)
        ).first()
    
    def list_by_instructor(self, instructor_id: str) -> List[Course]:
        return (
            self.db.query(Course)
            .filter(Course.instructor_id == instructor_id)
            .order_by(Course.created_at.desc())
            .all()
        )
    
    def list_all(
        self,
        published: Optional[bool] = None,
        instructor_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Course], int]:
        """List every course regardless of publication, newest first."""
        query = self.db.query(Course)
        
        if published is not None:
            query = query.filter(Course.is_published.is_(published))
        if instructor_id:
            query = query.filter(Course.instructor_id == instructor_id)
        
        return self.paginate(query, Course.created_at.desc(), skip, limit)
    
    def instructor_stats(self, instructor_id: str) -> Dict[str, int]:
        query = self.db.query(Course).filter(Course.instructor_id == instructor_id)
        return {
            "total_courses": query.count(),
            "published_courses": query.filter(Course.is_published.is_(True)).count(),
        }
