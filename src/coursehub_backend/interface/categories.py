import re
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from coursehub_backend.interface.base import BaseEntityList

_SLUG = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator('slug')
    @classmethod
    def validate_slug(cls, v):
        if not _SLUG.match(v):
            raise ValueError('Slug may only contain lowercase letters, digits and single hyphens')
        return v

class CategoryGet(BaseEntityList):
    id: str
    name: str
    slug: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
