from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from coursehub_backend.interface.base import BaseEntityGet, ListQuery

class CourseLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"

class LessonGet(BaseModel):
    id: str
    title: str
    position: int
    duration_minutes: Optional[int] = None
    is_preview: bool = False

    model_config = ConfigDict(from_attributes=True)

class CourseModuleGet(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    position: int
    lessons: List[LessonGet] = []

    model_config = ConfigDict(from_attributes=True)

class CourseCreate(BaseModel):
    """New course. The owner is always the creating principal and cannot be supplied."""
    title: str = Field(min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    category_id: Optional[str] = None
    level: CourseLevel = CourseLevel.beginner
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    currency: str = Field("USD", min_length=3, max_length=3)
    thumbnail_url: Optional[str] = None
    duration_hours: Optional[int] = Field(None, ge=0)
    is_published: bool = False

    model_config = ConfigDict(use_enum_values=True, extra='ignore')

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    category_id: Optional[str] = None
    level: Optional[CourseLevel] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    thumbnail_url: Optional[str] = None
    duration_hours: Optional[int] = Field(None, ge=0)
    is_published: Optional[bool] = None

    # instructor_id is not updatable
    model_config = ConfigDict(use_enum_values=True, extra='ignore')

class CourseList(BaseModel):
    id: str
    title: str
    subtitle: Optional[str] = None
    instructor_id: Optional[str] = None
    category_id: Optional[str] = None
    level: CourseLevel
    price: Decimal
    currency: str
    thumbnail_url: Optional[str] = None
    is_published: bool
    is_featured: bool

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CourseGet(BaseEntityGet, CourseList):
    description: Optional[str] = None
    duration_hours: Optional[int] = None
    modules: List[CourseModuleGet] = []

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CourseQuery(ListQuery):
    category_id: Optional[str] = None
    level: Optional[CourseLevel] = None
    search: Optional[str] = None
    featured: Optional[bool] = None

class InstructorStats(BaseModel):
    total_courses: int
    published_courses: int

class AdminStats(BaseModel):
    total_users: int
    total_instructors: int
    pending_applications: int
    total_courses: int

class CourseStatus(str, Enum):
    published = "published"
    draft = "draft"

class AdminCourseQuery(ListQuery):
    status: Optional[CourseStatus] = None
    instructor: Optional[str] = Field(None, description="Instructor user id")

class CourseFeaturedUpdate(BaseModel):
    is_featured: bool
