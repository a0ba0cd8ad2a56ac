import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub_backend.api.admin import admin_router
from coursehub_backend.api.auth import auth_router
from coursehub_backend.api.categories import categories_router
from coursehub_backend.api.courses import courses_router
from coursehub_backend.api.enrollments import enrollments_router
from coursehub_backend.api.instructor import instructor_router
from coursehub_backend.api.instructor_applications import instructor_applications_router
from coursehub_backend.database import get_db, migrate_db
from coursehub_backend.services.users import ensure_admin
from coursehub_backend.settings import settings

logger = logging.getLogger(__name__)

async def init_admin_user(db: Session):

    email = settings.ADMIN_EMAIL

    if not email:
        logger.warning("ADMIN_EMAIL is not set, no bootstrap admin is created")
        return

    try:
        admin = ensure_admin(email, db)
        logger.info(f"Bootstrap admin is {admin.email}")
    except SQLAlchemyError as e:
        logger.critical(f"Admin user could not be created: {e}")
        raise

async def startup_logic():

    migrate_db()

    with next(get_db()) as db:
        await init_admin_user(db)

@asynccontextmanager
async def lifespan(app: FastAPI):

    if settings.DEBUG_MODE == "production":
        await startup_logic()

    yield

app = FastAPI(lifespan=lifespan, title="coursehub")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

app.include_router(
    auth_router,
    prefix="/auth",
    tags=["auth", "me"]
)

app.include_router(
    categories_router,
    prefix="/categories",
    tags=["categories"]
)

app.include_router(
    courses_router,
    prefix="/courses",
    tags=["courses"]
)

app.include_router(
    enrollments_router,
    prefix="/enrollments",
    tags=["enrollments"]
)

app.include_router(
    instructor_router,
    prefix="/instructor",
    tags=["instructor"]
)

app.include_router(
    instructor_applications_router,
    prefix="/instructor-applications",
    tags=["instructor applications"]
)

app.include_router(
    admin_router,
    prefix="/admin",
    tags=["admin"]
)

@app.head("/", status_code=204)
def get_status_head():
    return
