"""
Leave schemas
"""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_serializer, field_validator
from app.models.leave import LeaveType, LeaveStatus
from app.schemas.user import UserBrief
from app.utils.datetime_utils import iso_utc


class LeaveApplyRequest(BaseModel):
    """Schema for applying leave"""
    leave_type: LeaveType = Field(..., description="Type of leave")
    start_date: date = Field(..., description="First day of leave")
    end_date: date = Field(..., description="Last day of leave")
    reason: str = Field(..., description="Reason for leave")

    @field_validator("reason")
    @classmethod
    def reason_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Reason is required")
        return v


class LeaveReviewRequest(BaseModel):
    """Approve/reject body; rejection enforces a non-empty comment in the service"""
    comment: Optional[str] = Field(None, description="Reviewer comment")


class LeaveOut(BaseModel):
    """Schema for leave output"""
    id: int
    user_id: int
    user: Optional[UserBrief] = None
    start_date: date
    end_date: date
    leave_type: LeaveType
    reason: str
    status: LeaveStatus
    reviewed_by_id: Optional[int] = None
    reviewed_by: Optional[UserBrief] = None
    review_comment: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("reviewed_at", "created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class LeaveListResponse(BaseModel):
    items: List[LeaveOut]
    total: int


class LeaveActionResponse(BaseModel):
    message: str
    leave: LeaveOut
