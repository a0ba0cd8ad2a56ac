from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from coursehub_backend.interface.base import BaseEntityGet, ListQuery
from coursehub_backend.permissions.roles import Role

class UserGet(BaseEntityGet):
    id: str = Field(description="User unique identifier")
    email: str = Field(description="User's email address")
    given_name: Optional[str] = Field(None, description="User's given name")
    family_name: Optional[str] = Field(None, description="User's family name")
    profile_image_url: Optional[str] = None
    role: Role = Field(Role.STUDENT, description="Platform role, a stored NULL reads as student")
    bio: Optional[str] = None
    country: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator('role', mode='before')
    @classmethod
    def normalize_role(cls, v):
        return Role.normalize(v)

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class UserList(BaseModel):
    id: str
    email: str
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    role: Role = Role.STUDENT
    created_at: Optional[datetime] = None

    @field_validator('role', mode='before')
    @classmethod
    def normalize_role(cls, v):
        return Role.normalize(v)

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class UserProfileUpdate(BaseModel):
    """Fields a user may change on their own account. Role is not one of them."""
    given_name: Optional[str] = Field(None, min_length=1, max_length=255)
    family_name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None
    country: Optional[str] = Field(None, max_length=255)
    timezone: Optional[str] = Field(None, max_length=64)
    profile_image_url: Optional[str] = Field(None, max_length=2048)

    @field_validator('given_name', 'family_name')
    @classmethod
    def validate_names(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Name cannot be empty or only whitespace')
        return v.strip() if v else v

    # unknown keys such as "role" are dropped
    model_config = ConfigDict(extra='ignore')

class UserRoleUpdate(BaseModel):
    role: str = Field(description="student, instructor or admin")

class UserQuery(ListQuery):
    search: Optional[str] = None
    role: Optional[Role] = None
