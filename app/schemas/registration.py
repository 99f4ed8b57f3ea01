"""
Registration request schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_serializer
from app.models.registration_request import RegistrationStatus
from app.schemas.user import UserBrief, UserOut
from app.utils.datetime_utils import iso_utc


class RegistrationRequestOut(BaseModel):
    """Registration request as shown to managers (never exposes the password hash)"""
    id: int
    name: str
    email: str
    employee_id: str
    department: str
    status: RegistrationStatus
    reviewed_by_id: Optional[int] = None
    reviewed_by: Optional[UserBrief] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("reviewed_at", "created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class RegistrationRequestListResponse(BaseModel):
    items: List[RegistrationRequestOut]
    total: int


class RegistrationRejectRequest(BaseModel):
    reason: Optional[str] = Field(None, description="Why the registration was rejected")


class RegistrationSubmitResponse(BaseModel):
    message: str
    request_id: int


class RegistrationApproveResponse(BaseModel):
    message: str
    user: UserOut
