from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import NotFoundException
from coursehub_backend.database import get_db
from coursehub_backend.interface.courses import CourseGet, CourseList, CourseQuery
from coursehub_backend.repositories import CourseRepository

courses_router = APIRouter()

@courses_router.get("", response_model=list[CourseList])
def list_courses(response: Response, params: CourseQuery = Depends(), db: Session = Depends(get_db)):
    """List published courses"""
    courses, total = CourseRepository(db).list_published(
        category_id=params.category_id,
        level=params.level.value if params.level else None,
        search=params.search,
        featured=params.featured,
        skip=params.skip,
        limit=params.limit
    )
    response.headers["X-Total-Count"] = str(total)

    return courses

@courses_router.get("/{course_id}", response_model=CourseGet)
def get_course(course_id: str, db: Session = Depends(get_db)):
    course = CourseRepository(db).find_published(course_id)

    if course is None:
        raise NotFoundException("Course not found")

    return course
