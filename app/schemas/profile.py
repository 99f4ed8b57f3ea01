"""
Profile schemas (heat map and yearly score)
"""
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, field_serializer
from app.models.attendance import AttendanceStatus
from app.utils.datetime_utils import iso_utc


class HeatmapDay(BaseModel):
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    total_hours: Optional[float] = None

    @field_serializer("check_in_time", "check_out_time", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_utc(dt)


class HeatmapResponse(BaseModel):
    year: int
    data: Dict[str, HeatmapDay]
    total_days: int


class AttendanceScoreResponse(BaseModel):
    year: int
    score: float
    attendance_rate: float
    present: int
    late: int
    absent: int
    half_day: int
    total_working_days: int
    total_days: int
