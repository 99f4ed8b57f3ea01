"""
Dashboard schemas
"""
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, field_serializer
from app.models.attendance import AttendanceStatus
from app.schemas.attendance import AbsentEmployeeOut
from app.utils.datetime_utils import iso_utc


class TodayStatusCard(BaseModel):
    checked_in: bool
    checked_out: bool
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    @field_serializer("check_in_time", "check_out_time", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class MonthlyStats(BaseModel):
    present: int
    absent: int
    late: int
    total_hours: float


class RecentAttendanceItem(BaseModel):
    date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: AttendanceStatus
    total_hours: Optional[float] = None

    @field_serializer("check_in_time", "check_out_time", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class EmployeeDashboardOut(BaseModel):
    today_status: TodayStatusCard
    monthly_stats: MonthlyStats
    recent_attendance: List[RecentAttendanceItem]


class DayCounts(BaseModel):
    present: int
    absent: int
    late: int


class TrendPoint(DayCounts):
    date: date


class DepartmentStats(BaseModel):
    department: str
    total: int
    present: int
    absent: int


class ManagerDashboardOut(BaseModel):
    total_employees: int
    today_stats: DayCounts
    absent_employees_today: List[AbsentEmployeeOut]
    weekly_trend: List[TrendPoint]
    department_wise: List[DepartmentStats]


class EmployeeScoreOut(BaseModel):
    id: int
    employee_id: str
    name: str
    email: str
    department: Optional[str] = None
    present: int
    late: int
    absent: int
    half_day: int
    total_hours: float
    score: float
    attendance_rate: float


class BestEmployeesOut(BaseModel):
    month: int
    year: int
    working_days: int
    top_performers: List[EmployeeScoreOut]
    all_employees: List[EmployeeScoreOut]
