"""
Attendance endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_employee, require_manager
from app.models.attendance import AttendanceStatus
from app.models.user import User
from app.schemas.attendance import (
    AttendanceActionResponse,
    AttendanceListResponse,
    AttendanceOut,
    MonthlySummaryOut,
    TeamSummaryOut,
    TodayAttendanceResponse,
    TodayStatusOut,
)
from app.services import attendance_service
from app.services.audit_service import log_audit
from app.utils.csv_export import export_filename, stream_csv
from app.utils.datetime_utils import local_today, now_utc

router = APIRouter()


def _month_param():
    return Query(None, ge=1, le=12, description="Month (1-12), defaults to the current month")


def _year_param():
    return Query(None, ge=2000, le=9999, description="Year, defaults to the current year")


def _resolve_month(month: Optional[int], year: Optional[int]):
    today = local_today()
    return month or today.month, year or today.year


def _list_response(records) -> AttendanceListResponse:
    return AttendanceListResponse(
        items=[AttendanceOut.model_validate(r) for r in records],
        total=len(records)
    )


@router.post("/checkin", response_model=AttendanceActionResponse)
async def check_in_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Check in for today (employees only)

    Status is late when the local time is after the configured cutoff.
    """
    attendance = attendance_service.check_in(db, current_user)
    return AttendanceActionResponse(
        message="Checked in successfully",
        attendance=AttendanceOut.model_validate(attendance)
    )


@router.post("/checkout", response_model=AttendanceActionResponse)
async def check_out_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Check out for today and record total hours (employees only)"""
    attendance = attendance_service.check_out(db, current_user)
    return AttendanceActionResponse(
        message="Checked out successfully",
        attendance=AttendanceOut.model_validate(attendance)
    )


@router.get("/today", response_model=TodayAttendanceResponse)
async def today(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    return attendance_service.get_today(db, current_user)


@router.get("/my-history", response_model=AttendanceListResponse)
async def my_history(
    month: Optional[int] = _month_param(),
    year: Optional[int] = _year_param(),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Own attendance for one month, newest first"""
    month, year = _resolve_month(month, year)
    return _list_response(attendance_service.list_my_history(db, current_user, month, year))


@router.get("/my-summary", response_model=MonthlySummaryOut)
async def my_summary(
    month: Optional[int] = _month_param(),
    year: Optional[int] = _year_param(),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Own monthly counts, hours, score and attendance rate"""
    month, year = _resolve_month(month, year)
    return attendance_service.get_my_summary(db, current_user, month, year)


@router.get("/all", response_model=AttendanceListResponse)
async def list_all_attendance(
    employee_code: Optional[str] = Query(None, alias="employeeId", description="Filter by employee ID"),
    start_date: Optional[date] = Query(None, alias="startDate", description="From date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, alias="endDate", description="To date (YYYY-MM-DD)"),
    status: Optional[AttendanceStatus] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """
    All employees' attendance (managers only)

    An unknown employee ID returns an empty list.
    """
    records = attendance_service.list_all(db, employee_code, start_date, end_date, status)
    return _list_response(records)


@router.get("/employee/{user_id}", response_model=AttendanceListResponse)
async def employee_attendance(
    user_id: int,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    records = attendance_service.list_for_employee(db, user_id, start_date, end_date)
    return _list_response(records)


@router.get("/summary", response_model=TeamSummaryOut)
async def team_summary(
    month: Optional[int] = _month_param(),
    year: Optional[int] = _year_param(),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Team record counts and hours for one month (managers only)"""
    month, year = _resolve_month(month, year)
    return attendance_service.get_team_summary(db, month, year)


@router.get("/export")
async def export_attendance_csv(
    start_date: Optional[date] = Query(None, alias="startDate", description="From date (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, alias="endDate", description="To date (YYYY-MM-DD)"),
    employee_code: Optional[str] = Query(None, alias="employeeId", description="Filter by employee ID"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """
    Export attendance as CSV (managers only)

    Columns: Date, Employee ID, Name, Department, Check In, Check Out, Status, Total Hours.
    No matching records gives a header-only file; an unknown employee ID gives 404.
    """
    rows = attendance_service.get_export_rows(db, start_date, end_date, employee_code)

    log_audit(
        db=db,
        actor_id=current_user.id,
        action="REPORT_EXPORT",
        entity_type="report",
        entity_id=None,
        meta={
            "report_type": "attendance",
            "start_date": start_date,
            "end_date": end_date,
            "employee_id": employee_code,
            "row_count": len(rows)
        }
    )

    filename = export_filename("attendance", start_date, end_date, now_utc())
    return stream_csv(attendance_service.EXPORT_HEADERS, rows, filename)


@router.get("/today-status", response_model=TodayStatusOut)
async def today_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Who has checked in today; late counts as present"""
    return attendance_service.get_today_status(db)
