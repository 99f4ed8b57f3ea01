"""
Attendance schemas
"""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_serializer

from app.models.attendance import AttendanceStatus
from app.schemas.user import UserBrief
from app.utils.datetime_utils import iso_utc


class AttendanceOut(BaseModel):
    """Schema for attendance output. Datetimes are UTC (Z)."""
    id: int
    user_id: int
    date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: AttendanceStatus
    total_hours: Optional[float] = None
    user: Optional[UserBrief] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("check_in_time", "check_out_time", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class AttendanceListResponse(BaseModel):
    """Schema for attendance list response"""
    items: List[AttendanceOut]
    total: int


class TodayAttendanceResponse(BaseModel):
    """Own check-in state for today"""
    checked_in: bool
    checked_out: bool
    attendance: Optional[AttendanceOut] = None


class MonthlySummaryOut(BaseModel):
    """Own monthly summary; absent days are inferred, not stored"""
    month: int
    year: int
    present: int
    absent: int
    late: int
    half_day: int
    total_hours: float
    total_days: int
    working_days: int
    score: float
    attendance_rate: float


class TeamSummaryOut(BaseModel):
    """Monthly summary across all employees"""
    month: int
    year: int
    total_employees: int
    total_records: int
    present: int
    absent: int
    late: int
    half_day: int
    total_hours: float


class AbsentEmployeeOut(BaseModel):
    id: int
    name: str
    employee_id: str
    department: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TodayStatusOut(BaseModel):
    """Who is in today, for managers"""
    date: date
    total_employees: int
    present: int
    absent: int
    late: int
    absent_employees: List[AbsentEmployeeOut]


class AttendanceActionResponse(BaseModel):
    """Check-in / check-out result"""
    message: str
    attendance: AttendanceOut
