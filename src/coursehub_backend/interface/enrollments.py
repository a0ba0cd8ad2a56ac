from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class EnrollmentCreate(BaseModel):
    course_id: str = Field(min_length=1)

    # the enrolling user is always the caller
    model_config = ConfigDict(extra='ignore')

class EnrollmentGet(BaseModel):
    id: str
    user_id: str
    course_id: str
    enrolled_at: datetime
    completed_at: Optional[datetime] = None
    progress: Decimal

    model_config = ConfigDict(from_attributes=True)

class EnrollmentCheck(BaseModel):
    is_enrolled: bool
