"""
Attendance model
"""
import enum
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, String, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)  # Local work date (settings.TIMEZONE)
    check_in_time = Column(DateTime(timezone=True), nullable=True)  # UTC
    check_out_time = Column(DateTime(timezone=True), nullable=True)  # UTC
    status = Column(String(20), nullable=False, default=AttendanceStatus.ABSENT.value)
    total_hours = Column(Numeric(6, 2, asdecimal=False), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
    )

    # Relationships
    user = relationship("User", backref="attendance_records")
