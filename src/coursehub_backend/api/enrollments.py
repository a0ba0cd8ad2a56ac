from typing import Annotated
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from coursehub_backend.database import get_db
from coursehub_backend.interface.base import ListQuery
from coursehub_backend.interface.enrollments import EnrollmentCheck, EnrollmentCreate, EnrollmentGet
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.services import enrollments as enrollment_service

enrollments_router = APIRouter()

@enrollments_router.post("", response_model=EnrollmentGet, status_code=201)
def create_enrollment(
    principal: Annotated[Principal, Depends(authorize_operation("enrollment:create"))],
    payload: EnrollmentCreate,
    db: Session = Depends(get_db)
):
    """Enroll the caller in a published course"""
    return enrollment_service.enroll(principal, payload, db)

@enrollments_router.get("", response_model=list[EnrollmentGet])
def list_my_enrollments(
    principal: Annotated[Principal, Depends(authorize_operation("enrollment:read_own"))],
    response: Response,
    params: ListQuery = Depends(),
    db: Session = Depends(get_db)
):
    enrollments, total = enrollment_service.list_my_enrollments(principal, db, skip=params.skip, limit=params.limit)
    response.headers["X-Total-Count"] = str(total)

    return enrollments

@enrollments_router.get("/check/{course_id}", response_model=EnrollmentCheck)
def check_enrollment(
    course_id: str,
    principal: Annotated[Principal, Depends(authorize_operation("enrollment:read_own"))],
    db: Session = Depends(get_db)
):
    return EnrollmentCheck(is_enrolled=enrollment_service.is_enrolled(principal, course_id, db))
