from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class ListQuery(BaseModel):
    skip: Optional[int] = Field(0, ge=0)
    limit: Optional[int] = Field(20, ge=1, le=100)

class BaseEntityList(BaseModel):
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

class BaseEntityGet(BaseEntityList):
    updated_at: Optional[datetime] = Field(None, description="Update timestamp")
