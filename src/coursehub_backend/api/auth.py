from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursehub_backend.api.exceptions import NotFoundException
from coursehub_backend.database import get_db
from coursehub_backend.interface.users import UserGet, UserProfileUpdate
from coursehub_backend.model.auth import User
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.services import users as user_service

auth_router = APIRouter()

@auth_router.get("/user", response_model=UserGet)
def get_current_user(
    principal: Annotated[Principal, Depends(authorize_operation("user:read"))],
    db: Session = Depends(get_db)
):
    """Get the current authenticated user"""
    user = db.query(User).filter(User.id == principal.user_id).first()

    if user is None:
        raise NotFoundException()

    return user

@auth_router.put("/profile", response_model=UserGet)
def update_current_profile(
    principal: Annotated[Principal, Depends(authorize_operation("user:update_profile"))],
    payload: UserProfileUpdate,
    db: Session = Depends(get_db)
):
    """Update the current user's profile. The role cannot be changed here."""
    return user_service.update_profile(principal, payload, db)
