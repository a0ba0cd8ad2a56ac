from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional

from coursehub_backend.interface.base import BaseEntityGet, ListQuery

class ApplicationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

class InstructorApplicationCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=50)
    bio: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    qualifications: str = Field(min_length=1)
    previous_teaching: str = Field(min_length=1)
    areas_of_expertise: List[str] = Field(default_factory=list)
    cv_url: Optional[str] = Field(None, max_length=2048)
    video_intro_url: Optional[str] = Field(None, max_length=2048)

    # status and review fields are never taken from the applicant
    model_config = ConfigDict(extra='ignore')

class InstructorApplicationGet(BaseEntityGet):
    id: str
    user_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    bio: str
    experience: str
    qualifications: str
    previous_teaching: str
    areas_of_expertise: List[str] = []
    cv_url: Optional[str] = None
    video_intro_url: Optional[str] = None
    status: ApplicationStatus
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    review_comments: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class InstructorApplicationReview(BaseModel):
    status: str = Field(description="approved or rejected")
    comments: Optional[str] = None

class InstructorApplicationQuery(ListQuery):
    status: Optional[ApplicationStatus] = None
