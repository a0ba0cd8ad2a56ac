from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursehub_backend.database import get_db
from coursehub_backend.interface.instructor_applications import (
    InstructorApplicationCreate,
    InstructorApplicationGet,
)
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.services import instructor_applications as application_service

instructor_applications_router = APIRouter()

@instructor_applications_router.post("", response_model=InstructorApplicationGet, status_code=201)
def submit_application(
    principal: Annotated[Principal, Depends(authorize_operation("application:submit"))],
    payload: InstructorApplicationCreate,
    db: Session = Depends(get_db)
):
    """Apply to become an instructor. Only students may apply."""
    return application_service.submit(principal, payload, db)

@instructor_applications_router.get("/my-application", response_model=InstructorApplicationGet)
def get_my_application(
    principal: Annotated[Principal, Depends(authorize_operation("application:read_own"))],
    db: Session = Depends(get_db)
):
    return application_service.get_my_application(principal, db)
