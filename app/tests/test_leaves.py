"""
Tests for the leave workflow
"""
import pytest
from fastapi import status

from app.core.security import create_access_token
from app.models.leave import Leave, LeaveStatus
from app.models.audit_log import AuditLog


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


def apply(client, user, **overrides):
    payload = {
        "leave_type": "vacation",
        "start_date": "2026-07-06",
        "end_date": "2026-07-08",
        "reason": "Family trip",
    }
    payload.update(overrides)
    return client.post("/api/leave/apply", json=payload, headers=auth_headers(user))


@pytest.fixture
def pending_leave(client, test_employee):
    response = apply(client, test_employee)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["leave"]


def test_apply_leave_creates_pending_request(client, test_employee):
    response = apply(client, test_employee)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["message"] == "Leave request submitted successfully"
    assert data["leave"]["status"] == "pending"
    assert data["leave"]["user"]["employee_id"] == "EMP001"
    assert data["leave"]["reviewed_by"] is None


def test_apply_leave_end_before_start(client, test_employee):
    response = apply(client, test_employee, start_date="2026-07-08", end_date="2026-07-06")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Start date must be before end date"


def test_apply_leave_blank_reason(client, test_employee):
    response = apply(client, test_employee, reason="   ")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"][0]["field"] == "reason"


def test_apply_leave_unknown_type(client, test_employee):
    response = apply(client, test_employee, leave_type="sabbatical")

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_manager_cannot_apply(client, manager_user):
    response = apply(client, manager_user)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Managers cannot apply for leave"


def test_my_leaves_only_own(client, test_employee, second_employee):
    apply(client, test_employee)
    apply(client, second_employee, reason="Doctor")
    apply(client, test_employee, leave_type="sick", reason="Flu")

    data = client.get("/api/leave/my-leaves", headers=auth_headers(test_employee)).json()

    assert data["total"] == 2
    # Newest first
    assert data["items"][0]["reason"] == "Flu"


def test_all_leaves_with_status_filter(client, manager_user, test_employee, pending_leave):
    headers = auth_headers(manager_user)

    assert client.get("/api/leave/all", headers=headers).json()["total"] == 1
    assert client.get("/api/leave/all?status=approved", headers=headers).json()["total"] == 0


def test_approve_leave(client, db, manager_user, pending_leave):
    response = client.put(
        f"/api/leave/{pending_leave['id']}/approve",
        json={"comment": "Enjoy"},
        headers=auth_headers(manager_user)
    )

    assert response.status_code == status.HTTP_200_OK
    leave = response.json()["leave"]
    assert leave["status"] == "approved"
    assert leave["review_comment"] == "Enjoy"
    assert leave["reviewed_by"]["employee_id"] == "MGR001"
    assert leave["reviewed_at"].endswith("Z")


def test_approve_without_body(client, manager_user, pending_leave):
    response = client.put(f"/api/leave/{pending_leave['id']}/approve", headers=auth_headers(manager_user))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["leave"]["review_comment"] is None


def test_reject_requires_comment(client, db, manager_user, pending_leave):
    headers = auth_headers(manager_user)

    response = client.put(f"/api/leave/{pending_leave['id']}/reject", json={"comment": "  "}, headers=headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Rejection comment is required"
    assert db.query(Leave).first().status == LeaveStatus.PENDING

    response = client.put(
        f"/api/leave/{pending_leave['id']}/reject", json={"comment": "Busy week"}, headers=headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["leave"]["status"] == "rejected"


def test_leave_reviewed_only_once(client, manager_user, pending_leave):
    headers = auth_headers(manager_user)
    client.put(f"/api/leave/{pending_leave['id']}/approve", headers=headers)

    response = client.put(
        f"/api/leave/{pending_leave['id']}/reject", json={"comment": "Changed my mind"}, headers=headers
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Leave request has already been reviewed"


def test_review_unknown_leave(client, manager_user):
    response = client.put("/api/leave/999/approve", headers=auth_headers(manager_user))

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Leave request not found"


def test_employee_cannot_review(client, test_employee, pending_leave):
    response = client.put(f"/api/leave/{pending_leave['id']}/approve", headers=auth_headers(test_employee))

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_leave_audit_trail(client, db, manager_user, pending_leave):
    client.put(f"/api/leave/{pending_leave['id']}/approve", headers=auth_headers(manager_user))

    trail = db.query(AuditLog).filter(
        AuditLog.entity_type == "leaves",
        AuditLog.entity_id == pending_leave["id"]
    ).order_by(AuditLog.id).all()

    assert [entry.action for entry in trail] == ["LEAVE_APPLY", "LEAVE_APPROVE"]
    assert trail[0].meta_json["start_date"] == "2026-07-06"
    assert trail[1].actor_id == manager_user.id
