"""
User schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_serializer, field_validator, ConfigDict
from app.models.user import Role
from app.utils.datetime_utils import iso_utc


class UserBrief(BaseModel):
    """Compact user info embedded in attendance, leave and report listings"""
    id: int
    name: str
    email: str
    employee_id: str
    department: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserOut(BaseModel):
    """Schema for user output"""
    id: int
    name: str
    email: str
    role: Role
    employee_id: str
    department: Optional[str] = None
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("last_login", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class ProfileUpdate(BaseModel):
    """Schema for editing one's own profile"""
    name: Optional[str] = Field(None, description="Display name")
    department: Optional[str] = Field(None, description="Department")

    @field_validator("name", "department")
    @classmethod
    def strip_and_require(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserOut
