from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from coursehub_backend.database import get_db
from coursehub_backend.interface.courses import (
    AdminCourseQuery,
    AdminStats,
    CourseFeaturedUpdate,
    CourseGet,
    CourseList,
    CourseStatus,
)
from coursehub_backend.interface.instructor_applications import (
    InstructorApplicationGet,
    InstructorApplicationQuery,
    InstructorApplicationReview,
)
from coursehub_backend.interface.users import UserGet, UserList, UserQuery, UserRoleUpdate
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import CourseRepository, UserRepository
from coursehub_backend.services import courses as course_service
from coursehub_backend.services import instructor_applications as application_service
from coursehub_backend.services import users as user_service

admin_router = APIRouter()

@admin_router.get("/instructor-applications", response_model=list[InstructorApplicationGet])
def list_instructor_applications(
    principal: Annotated[Principal, Depends(authorize_operation("application:list"))],
    response: Response,
    params: InstructorApplicationQuery = Depends(),
    db: Session = Depends(get_db)
):
    applications, total = application_service.list_applications(
        db,
        status=params.status.value if params.status else None,
        skip=params.skip,
        limit=params.limit
    )
    response.headers["X-Total-Count"] = str(total)

    return applications

@admin_router.put("/instructor-applications/{application_id}", response_model=InstructorApplicationGet)
def review_instructor_application(
    application_id: str,
    principal: Annotated[Principal, Depends(authorize_operation("application:review"))],
    payload: InstructorApplicationReview,
    db: Session = Depends(get_db)
):
    """Approve or reject a pending application. Approval makes the applicant an instructor."""
    return application_service.review(principal, application_id, payload.status, payload.comments, db)

@admin_router.get("/users", response_model=list[UserList])
def list_users(
    principal: Annotated[Principal, Depends(authorize_operation("user:list"))],
    response: Response,
    params: UserQuery = Depends(),
    db: Session = Depends(get_db)
):
    users, total = UserRepository(db).search(
        search=params.search,
        role=params.role.value if params.role else None,
        skip=params.skip,
        limit=params.limit
    )
    response.headers["X-Total-Count"] = str(total)

    return users

@admin_router.put("/users/{user_id}/role", response_model=UserGet)
def change_user_role(
    user_id: str,
    principal: Annotated[Principal, Depends(authorize_operation("user:change_role"))],
    payload: UserRoleUpdate,
    db: Session = Depends(get_db)
):
    return user_service.change_role(principal, user_id, payload.role, db)

@admin_router.get("/courses", response_model=list[CourseList])
def list_all_courses(
    principal: Annotated[Principal, Depends(authorize_operation("course:list_all"))],
    response: Response,
    params: AdminCourseQuery = Depends(),
    db: Session = Depends(get_db)
):
    """List all courses, published or not, optionally by status and instructor"""
    courses, total = CourseRepository(db).list_all(
        published=params.status == CourseStatus.published if params.status else None,
        instructor_id=params.instructor,
        skip=params.skip,
        limit=params.limit
    )
    response.headers["X-Total-Count"] = str(total)

    return courses

@admin_router.put("/courses/{course_id}/featured", response_model=CourseGet)
def set_course_featured(
    course_id: str,
    principal: Annotated[Principal, Depends(authorize_operation("course:feature"))],
    payload: CourseFeaturedUpdate,
    db: Session = Depends(get_db)
):
    return course_service.set_featured(principal, course_id, payload.is_featured, db)

@admin_router.get("/stats", response_model=AdminStats)
def get_platform_stats(
    principal: Annotated[Principal, Depends(authorize_operation("admin:stats"))],
    db: Session = Depends(get_db)
):
    return user_service.platform_stats(db)
