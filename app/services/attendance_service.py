"""
Attendance service - check-in/check-out state machine and attendance queries
"""
import logging
from datetime import datetime, date, time, timedelta
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.models.attendance import Attendance, AttendanceStatus
from app.models.user import User, Role
from app.services import scoring_service
from app.services.audit_service import log_audit
from app.utils.datetime_utils import ensure_utc, iso_utc, local_today, now_utc, to_local

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Date",
    "Employee ID",
    "Name",
    "Department",
    "Check In",
    "Check Out",
    "Status",
    "Total Hours",
]


def determine_check_in_status(local_time: time, cutoff: Optional[time] = None) -> AttendanceStatus:
    """
    Late when the local wall clock is strictly after the cutoff.

    A check-in exactly at the cutoff counts as present.
    """
    cutoff = cutoff or settings.LATE_CHECKIN_CUTOFF
    if local_time > cutoff:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


def compute_total_hours(check_in: datetime, check_out: datetime) -> float:
    """Elapsed hours between check-in and check-out, rounded half-up to 2 decimals."""
    elapsed = ensure_utc(check_out) - ensure_utc(check_in)
    return scoring_service.round_half_up(elapsed.total_seconds() / 3600)


def _get_record(db: Session, user_id: int, work_date: date) -> Optional[Attendance]:
    return db.query(Attendance).filter(
        Attendance.user_id == user_id,
        Attendance.date == work_date
    ).first()


def check_in(db: Session, user: User, now: Optional[datetime] = None) -> Attendance:
    """
    Record the first check-in of the local work day.

    Raises:
        HTTPException: 403 for managers, 400 if already checked in today
    """
    if user.role == Role.MANAGER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Managers cannot check in"
        )

    now = ensure_utc(now) if now else now_utc()
    work_date = local_today(now)
    record_status = determine_check_in_status(to_local(now).time())

    attendance = _get_record(db, user.id, work_date)
    if attendance is not None and attendance.check_in_time is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already checked in today"
        )

    if attendance is None:
        attendance = Attendance(user_id=user.id, date=work_date)
        db.add(attendance)
    attendance.check_in_time = now
    attendance.status = record_status.value

    try:
        db.commit()
    except IntegrityError:
        # A concurrent request created today's row first
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already checked in today"
        )
    db.refresh(attendance)

    logger.info(
        "Check-in: user_id=%s date=%s status=%s attendance_id=%s",
        user.id, work_date, record_status.value, attendance.id
    )
    log_audit(
        db=db,
        actor_id=user.id,
        action="ATTENDANCE_CHECK_IN",
        entity_type="attendance",
        entity_id=attendance.id,
        meta={"date": work_date, "status": record_status.value, "check_in_time": now}
    )
    return attendance


def check_out(db: Session, user: User, now: Optional[datetime] = None) -> Attendance:
    """
    Close today's attendance record and compute worked hours.

    Raises:
        HTTPException: 403 for managers, 400 without a check-in or when already checked out
    """
    if user.role == Role.MANAGER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Managers cannot check out"
        )

    now = ensure_utc(now) if now else now_utc()
    work_date = local_today(now)

    attendance = _get_record(db, user.id, work_date)
    if attendance is None or attendance.check_in_time is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please check in first"
        )
    if attendance.check_out_time is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Already checked out today"
        )

    attendance.check_out_time = now
    attendance.total_hours = compute_total_hours(attendance.check_in_time, now)
    db.commit()
    db.refresh(attendance)

    logger.info(
        "Check-out: user_id=%s date=%s total_hours=%s attendance_id=%s",
        user.id, work_date, attendance.total_hours, attendance.id
    )
    log_audit(
        db=db,
        actor_id=user.id,
        action="ATTENDANCE_CHECK_OUT",
        entity_type="attendance",
        entity_id=attendance.id,
        meta={"date": work_date, "total_hours": attendance.total_hours, "check_out_time": now}
    )
    return attendance


def get_today(db: Session, user: User, now: Optional[datetime] = None) -> Dict:
    """Own check-in state for the current work day."""
    attendance = _get_record(db, user.id, local_today(now))
    if attendance is None:
        return {"checked_in": False, "checked_out": False, "attendance": None}
    return {
        "checked_in": attendance.check_in_time is not None,
        "checked_out": attendance.check_out_time is not None,
        "attendance": attendance,
    }


def _query_range(db: Session, user_id: int, start: date, end: date) -> List[Attendance]:
    return db.query(Attendance).filter(
        Attendance.user_id == user_id,
        Attendance.date >= start,
        Attendance.date <= end
    ).order_by(Attendance.date.desc()).all()


def list_my_history(db: Session, user: User, month: int, year: int) -> List[Attendance]:
    """The month's records for one user, newest first."""
    start, end = scoring_service.month_bounds(year, month)
    return _query_range(db, user.id, start, end)


def get_my_summary(
    db: Session,
    user: User,
    month: int,
    year: int,
    now: Optional[datetime] = None
) -> Dict:
    """Monthly counts, hours, inferred absences, score and attendance rate."""
    start, end = scoring_service.month_bounds(year, month)
    records = _query_range(db, user.id, start, end)
    tally = scoring_service.tally_records(records, start, end, today=local_today(now))
    return {
        "month": month,
        "year": year,
        "present": tally.present,
        "absent": tally.absent,
        "late": tally.late,
        "half_day": tally.half_day,
        "total_hours": tally.total_hours,
        "total_days": tally.total_records,
        "working_days": tally.working_days,
        "score": tally.score,
        "attendance_rate": tally.attendance_rate,
    }


def _filtered_query(
    db: Session,
    user_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status_filter: Optional[AttendanceStatus] = None
):
    query = db.query(Attendance).options(joinedload(Attendance.user))
    if user_id is not None:
        query = query.filter(Attendance.user_id == user_id)
    if start_date:
        query = query.filter(Attendance.date >= start_date)
    if end_date:
        query = query.filter(Attendance.date <= end_date)
    if status_filter:
        query = query.filter(Attendance.status == status_filter.value)
    return query.order_by(Attendance.date.desc(), Attendance.id.desc())


def _find_by_employee_code(db: Session, employee_code: str) -> Optional[User]:
    return db.query(User).filter(User.employee_id == employee_code.strip()).first()


def list_all(
    db: Session,
    employee_code: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status_filter: Optional[AttendanceStatus] = None
) -> List[Attendance]:
    """
    All attendance records, newest first.

    An unknown employee code yields an empty list rather than an error.
    """
    user_id = None
    if employee_code:
        user = _find_by_employee_code(db, employee_code)
        if user is None:
            return []
        user_id = user.id
    return _filtered_query(db, user_id, start_date, end_date, status_filter).all()


def list_for_employee(
    db: Session,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[Attendance]:
    """Attendance of one user by id (404 if the user does not exist)."""
    if db.query(User).filter(User.id == user_id).first() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found"
        )
    return _filtered_query(db, user_id, start_date, end_date).all()


def get_team_summary(db: Session, month: int, year: int) -> Dict:
    """Stored record counts across everyone for one month."""
    start, end = scoring_service.month_bounds(year, month)
    records = db.query(Attendance).filter(
        Attendance.date >= start,
        Attendance.date <= end
    ).all()
    total_employees = db.query(User).filter(User.role == Role.EMPLOYEE.value).count()

    def count(record_status: AttendanceStatus) -> int:
        return sum(1 for r in records if r.status == record_status)

    return {
        "month": month,
        "year": year,
        "total_employees": total_employees,
        "total_records": len(records),
        "present": count(AttendanceStatus.PRESENT),
        "absent": count(AttendanceStatus.ABSENT),
        "late": count(AttendanceStatus.LATE),
        "half_day": count(AttendanceStatus.HALF_DAY),
        "total_hours": scoring_service.round_half_up(sum(r.total_hours or 0 for r in records)),
    }


def day_status(db: Session, day: date) -> Dict:
    """
    Present/late/absent counts for one day across all employees.

    Present includes late check-ins; absent is every employee without
    a present or late record that day.
    """
    employees = db.query(User).filter(
        User.role == Role.EMPLOYEE.value
    ).order_by(User.name).all()
    records = db.query(Attendance).filter(Attendance.date == day).all()

    showed_up = {
        r.user_id for r in records
        if r.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)
    }
    late = sum(1 for r in records if r.status == AttendanceStatus.LATE)
    absent_employees = [e for e in employees if e.id not in showed_up]
    return {
        "date": day,
        "total_employees": len(employees),
        "present": len(showed_up),
        "absent": len(absent_employees),
        "late": late,
        "absent_employees": absent_employees,
    }


def get_today_status(db: Session, now: Optional[datetime] = None) -> Dict:
    return day_status(db, local_today(now))


def get_export_rows(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    employee_code: Optional[str] = None
) -> List[Dict]:
    """
    Attendance rows for CSV export, keyed by column title.

    Raises:
        HTTPException: 404 if an employee code is given and not found
    """
    user_id = None
    if employee_code:
        user = _find_by_employee_code(db, employee_code)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Employee not found"
            )
        user_id = user.id

    rows = []
    for record in _filtered_query(db, user_id, start_date, end_date).all():
        rows.append({
            "Date": record.date.isoformat(),
            "Employee ID": record.user.employee_id,
            "Name": record.user.name,
            "Department": record.user.department or "N/A",
            "Check In": iso_utc(record.check_in_time) or "N/A",
            "Check Out": iso_utc(record.check_out_time) or "N/A",
            "Status": record.status,
            "Total Hours": record.total_hours or 0,
        })
    return rows


def recent_records(db: Session, user_id: int, today: date, days: int = 7) -> List[Attendance]:
    """Records from the last ``days`` local days (today included), newest first."""
    return _query_range(db, user_id, today - timedelta(days=days - 1), today)
