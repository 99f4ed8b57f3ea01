"""
Tests for attendance history, summaries and manager views
"""
from datetime import date, datetime, timezone

import pytest
from fastapi import HTTPException

from app.core.security import create_access_token
from app.models.attendance import Attendance, AttendanceStatus
from app.services import attendance_service


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


def add_record(db, user, day: date, record_status: AttendanceStatus, hours=None):
    record = Attendance(
        user_id=user.id,
        date=day,
        check_in_time=datetime(day.year, day.month, day.day, 9, 0, tzinfo=timezone.utc),
        status=record_status.value,
        total_hours=hours,
    )
    db.add(record)
    db.commit()
    return record


@pytest.fixture
def june_records(db, test_employee, second_employee):
    add_record(db, test_employee, date(2026, 6, 1), AttendanceStatus.PRESENT, 8.0)
    add_record(db, test_employee, date(2026, 6, 2), AttendanceStatus.LATE, 7.5)
    add_record(db, test_employee, date(2026, 6, 3), AttendanceStatus.HALF_DAY, 4.0)
    add_record(db, second_employee, date(2026, 6, 1), AttendanceStatus.LATE, 6.25)
    add_record(db, test_employee, date(2026, 7, 1), AttendanceStatus.PRESENT, 8.0)


def test_my_history_returns_month_newest_first(client, test_employee, june_records):
    response = client.get(
        "/api/attendance/my-history?month=6&year=2026",
        headers=auth_headers(test_employee)
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert [item["date"] for item in data["items"]] == ["2026-06-03", "2026-06-02", "2026-06-01"]


def test_my_history_rejects_bad_month(client, test_employee):
    response = client.get("/api/attendance/my-history?month=13", headers=auth_headers(test_employee))

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_my_summary_rejects_year_out_of_range(client, test_employee):
    response = client.get("/api/attendance/my-summary?month=1&year=10000", headers=auth_headers(test_employee))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "year"


def test_my_summary_infers_absences(db, test_employee, june_records):
    # As of Friday 5 June: Mon-Wed attended, Thu-Fri absent
    summary = attendance_service.get_my_summary(
        db, test_employee, 6, 2026, now=datetime(2026, 6, 5, 18, 0, tzinfo=timezone.utc)
    )

    assert summary["present"] == 1
    assert summary["late"] == 1
    assert summary["half_day"] == 1
    assert summary["absent"] == 2
    assert summary["total_hours"] == 19.5
    assert summary["total_days"] == 3
    assert summary["working_days"] == 22
    # (1 + 0.7 + 0.5) / 22 * 100
    assert summary["score"] == 10.0
    assert summary["attendance_rate"] == 13.64


def test_list_all_with_filters(client, manager_user, june_records):
    headers = auth_headers(manager_user)

    data = client.get("/api/attendance/all", headers=headers).json()
    assert data["total"] == 5
    assert data["items"][0]["date"] == "2026-07-01"
    assert data["items"][0]["user"]["employee_id"] == "EMP001"

    data = client.get("/api/attendance/all?employeeId=EMP002", headers=headers).json()
    assert data["total"] == 1

    data = client.get("/api/attendance/all?status=late", headers=headers).json()
    assert {item["status"] for item in data["items"]} == {"late"}
    assert data["total"] == 2

    data = client.get(
        "/api/attendance/all?startDate=2026-06-02&endDate=2026-06-30", headers=headers
    ).json()
    assert data["total"] == 2


def test_list_all_unknown_employee_is_empty(client, manager_user, june_records):
    response = client.get("/api/attendance/all?employeeId=NOPE", headers=auth_headers(manager_user))

    assert response.status_code == 200
    assert response.json() == {"items": [], "total": 0}


def test_employee_attendance_by_id(client, manager_user, test_employee, june_records):
    response = client.get(
        f"/api/attendance/employee/{test_employee.id}?startDate=2026-06-01&endDate=2026-06-30",
        headers=auth_headers(manager_user)
    )

    assert response.status_code == 200
    assert response.json()["total"] == 3


def test_employee_attendance_unknown_id(db):
    with pytest.raises(HTTPException) as exc_info:
        attendance_service.list_for_employee(db, 12345)

    assert exc_info.value.status_code == 404


def test_team_summary(client, manager_user, june_records):
    response = client.get("/api/attendance/summary?month=6&year=2026", headers=auth_headers(manager_user))

    assert response.status_code == 200
    data = response.json()
    assert data["total_employees"] == 2
    assert data["total_records"] == 4
    assert data["present"] == 1
    assert data["late"] == 2
    assert data["half_day"] == 1
    assert data["total_hours"] == 25.75


def test_today_status(db, test_employee, second_employee):
    add_record(db, test_employee, date(2026, 6, 1), AttendanceStatus.LATE)

    result = attendance_service.get_today_status(db, now=datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc))

    assert result["total_employees"] == 2
    assert result["present"] == 1
    assert result["late"] == 1
    assert result["absent"] == 1
    assert [e.employee_id for e in result["absent_employees"]] == ["EMP002"]


def test_today_status_endpoint(client, manager_user, test_employee):
    response = client.get("/api/attendance/today-status", headers=auth_headers(manager_user))

    assert response.status_code == 200
    data = response.json()
    assert data["total_employees"] == 1
    assert data["absent"] == 1
    assert data["absent_employees"][0]["employee_id"] == "EMP001"
