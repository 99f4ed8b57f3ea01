"""
Database models
"""
from app.models.user import User, Role
from app.models.audit_log import AuditLog
from app.models.attendance import Attendance, AttendanceStatus
from app.models.leave import Leave, LeaveType, LeaveStatus
from app.models.problem_report import (
    ProblemReport,
    ProblemCategory,
    ProblemStatus,
    ProblemPriority,
    TERMINAL_PROBLEM_STATUSES,
)
from app.models.registration_request import RegistrationRequest, RegistrationStatus

__all__ = [
    "User",
    "Role",
    "AuditLog",
    "Attendance",
    "AttendanceStatus",
    "Leave",
    "LeaveType",
    "LeaveStatus",
    "ProblemReport",
    "ProblemCategory",
    "ProblemStatus",
    "ProblemPriority",
    "TERMINAL_PROBLEM_STATUSES",
    "RegistrationRequest",
    "RegistrationStatus",
]
