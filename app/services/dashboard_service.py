"""
Dashboard service - employee and manager overviews, best-employee ranking
"""
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.models.attendance import Attendance, AttendanceStatus
from app.models.user import User, Role
from app.services import attendance_service, scoring_service
from app.utils.datetime_utils import local_today

TREND_DAYS = 7
DEFAULT_DEPARTMENT = "General"


def employee_dashboard(db: Session, user: User, now: Optional[datetime] = None) -> Dict:
    today = local_today(now)
    today_record = db.query(Attendance).filter(
        Attendance.user_id == user.id,
        Attendance.date == today
    ).first()

    month_start, month_end = scoring_service.month_bounds(today.year, today.month)
    month_records = db.query(Attendance).filter(
        Attendance.user_id == user.id,
        Attendance.date >= month_start,
        Attendance.date <= month_end
    ).all()
    tally = scoring_service.tally_records(month_records, month_start, month_end, today=today)

    return {
        "today_status": {
            "checked_in": bool(today_record and today_record.check_in_time),
            "checked_out": bool(today_record and today_record.check_out_time),
            "status": today_record.status if today_record else AttendanceStatus.ABSENT,
            "check_in_time": today_record.check_in_time if today_record else None,
            "check_out_time": today_record.check_out_time if today_record else None,
        },
        "monthly_stats": {
            "present": tally.present,
            "absent": tally.absent,
            "late": tally.late,
            "total_hours": tally.total_hours,
        },
        "recent_attendance": attendance_service.recent_records(db, user.id, today, TREND_DAYS),
    }


def manager_dashboard(db: Session, now: Optional[datetime] = None) -> Dict:
    """
    Team overview for today plus a 7-day trend and a per-department split.

    Late employees count as present; absence means no present/late record.
    """
    today = local_today(now)
    today_status = attendance_service.day_status(db, today)

    weekly_trend = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_counts = today_status if offset == 0 else attendance_service.day_status(db, day)
        weekly_trend.append({
            "date": day,
            "present": day_counts["present"],
            "absent": day_counts["absent"],
            "late": day_counts["late"],
        })

    absent_ids = {e.id for e in today_status["absent_employees"]}
    departments: "OrderedDict[str, Dict[str, int]]" = OrderedDict()
    employees = db.query(User).filter(User.role == Role.EMPLOYEE.value).order_by(User.id).all()
    for employee in employees:
        stats = departments.setdefault(
            employee.department or DEFAULT_DEPARTMENT,
            {"total": 0, "present": 0, "absent": 0}
        )
        stats["total"] += 1
        if employee.id in absent_ids:
            stats["absent"] += 1
        else:
            stats["present"] += 1

    return {
        "total_employees": today_status["total_employees"],
        "today_stats": {
            "present": today_status["present"],
            "absent": today_status["absent"],
            "late": today_status["late"],
        },
        "absent_employees_today": today_status["absent_employees"],
        "weekly_trend": weekly_trend,
        "department_wise": [
            {"department": name, **stats} for name, stats in departments.items()
        ],
    }


def best_employees(db: Session, month: int, year: int, now: Optional[datetime] = None) -> Dict:
    """Monthly score per employee, ranked best first; ties keep employee id order."""
    start, end = scoring_service.month_bounds(year, month)
    today = local_today(now)

    employees = db.query(User).filter(User.role == Role.EMPLOYEE.value).order_by(User.id).all()
    records = db.query(Attendance).filter(
        Attendance.date >= start,
        Attendance.date <= end
    ).all()

    by_user: Dict[int, list] = {}
    for record in records:
        by_user.setdefault(record.user_id, []).append(record)

    stats = []
    for employee in employees:
        tally = scoring_service.tally_records(by_user.get(employee.id, []), start, end, today=today)
        stats.append({
            "id": employee.id,
            "employee_id": employee.employee_id,
            "name": employee.name,
            "email": employee.email,
            "department": employee.department,
            "present": tally.present,
            "late": tally.late,
            "absent": tally.absent,
            "half_day": tally.half_day,
            "total_hours": tally.total_hours,
            "score": tally.score,
            "attendance_rate": tally.attendance_rate,
        })

    ranked = scoring_service.rank_employees(stats)
    return {
        "month": month,
        "year": year,
        "working_days": scoring_service.count_working_days(start, end),
        "top_performers": scoring_service.top_performers(ranked),
        "all_employees": ranked,
    }
