from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from coursehub_backend.database import get_db
from coursehub_backend.interface.courses import CourseCreate, CourseGet, CourseList, CourseUpdate, InstructorStats
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import CourseRepository
from coursehub_backend.services import courses as course_service

instructor_router = APIRouter()

@instructor_router.get("/courses", response_model=list[CourseList])
def list_own_courses(
    principal: Annotated[Principal, Depends(authorize_operation("course:list_own"))],
    response: Response,
    db: Session = Depends(get_db)
):
    """List the courses owned by the current instructor"""
    courses = CourseRepository(db).list_by_instructor(principal.user_id)
    response.headers["X-Total-Count"] = str(len(courses))

    return courses

@instructor_router.post("/courses", response_model=CourseGet, status_code=201)
def create_course(
    principal: Annotated[Principal, Depends(authorize_operation("course:create"))],
    payload: CourseCreate,
    db: Session = Depends(get_db)
):
    return course_service.create_course(principal, payload, db)

@instructor_router.put("/courses/{course_id}", response_model=CourseGet)
def update_course(
    course_id: str,
    principal: Annotated[Principal, Depends(authorize_operation("course:update", id_param="course_id"))],
    payload: CourseUpdate,
    db: Session = Depends(get_db)
):
    return course_service.update_course(principal, course_id, payload, db)

@instructor_router.delete("/courses/{course_id}", status_code=204)
def delete_course(
    course_id: str,
    principal: Annotated[Principal, Depends(authorize_operation("course:delete", id_param="course_id"))],
    db: Session = Depends(get_db)
):
    course_service.delete_course(principal, course_id, db)

@instructor_router.get("/stats", response_model=InstructorStats)
def get_instructor_stats(
    principal: Annotated[Principal, Depends(authorize_operation("instructor:stats"))],
    db: Session = Depends(get_db)
):
    return InstructorStats(**CourseRepository(db).instructor_stats(principal.user_id))
