from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursehub_backend.database import get_db
from coursehub_backend.interface.categories import CategoryCreate, CategoryGet
from coursehub_backend.permissions.core import authorize_operation
from coursehub_backend.permissions.principal import Principal
from coursehub_backend.repositories import CategoryRepository
from coursehub_backend.services import courses as course_service

categories_router = APIRouter()

@categories_router.get("", response_model=list[CategoryGet])
def list_categories(db: Session = Depends(get_db)):
    return CategoryRepository(db).list_all()

@categories_router.post("", response_model=CategoryGet, status_code=201)
def create_category(
    principal: Annotated[Principal, Depends(authorize_operation("category:create"))],
    payload: CategoryCreate,
    db: Session = Depends(get_db)
):
    return course_service.create_category(payload, db)
