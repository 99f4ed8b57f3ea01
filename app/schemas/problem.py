"""
Problem report schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_serializer, field_validator
from app.models.problem_report import ProblemCategory, ProblemStatus, ProblemPriority
from app.schemas.user import UserBrief
from app.utils.datetime_utils import iso_utc


class ProblemReportCreate(BaseModel):
    """Schema for filing a problem report"""
    subject: str = Field(..., description="Short summary")
    description: str = Field(..., description="What went wrong")
    category: ProblemCategory = Field(ProblemCategory.OTHER, description="Problem category")
    priority: ProblemPriority = Field(ProblemPriority.MEDIUM, description="Priority")

    @field_validator("subject", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class ProblemResolveRequest(BaseModel):
    """Resolve (or close) a report; resolution text is required by the service"""
    resolution: Optional[str] = Field(None, description="Resolution text")
    status: ProblemStatus = Field(ProblemStatus.RESOLVED, description="resolved or closed")


class ProblemStatusUpdate(BaseModel):
    """Set any status; resolved/closed need resolution text"""
    status: ProblemStatus = Field(..., description="New status")
    resolution: Optional[str] = Field(None, description="Resolution text")


class ProblemReportOut(BaseModel):
    id: int
    user_id: int
    user: Optional[UserBrief] = None
    subject: str
    description: str
    category: ProblemCategory
    status: ProblemStatus
    priority: ProblemPriority
    resolved_by_id: Optional[int] = None
    resolved_by: Optional[UserBrief] = None
    resolution: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("resolved_at", "created_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class ProblemReportListResponse(BaseModel):
    items: List[ProblemReportOut]
    total: int


class ProblemReportActionResponse(BaseModel):
    message: str
    report: ProblemReportOut
