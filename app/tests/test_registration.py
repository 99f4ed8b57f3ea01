"""
Tests for public registration and manager approval
"""
import pytest
from fastapi import status

from app.core.security import create_access_token, verify_password
from app.models.registration_request import RegistrationRequest, RegistrationStatus
from app.models.user import User, Role


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


def register(client, **overrides):
    payload = {
        "name": "New Hire",
        "email": "newhire@company.com",
        "password": "secret123",
        "employee_id": "EMP100",
        "department": "Sales",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


@pytest.fixture
def pending_request(client, db):
    response = register(client)
    assert response.status_code == status.HTTP_201_CREATED
    return db.query(RegistrationRequest).filter(RegistrationRequest.id == response.json()["request_id"]).first()


def test_register_creates_pending_request_not_user(client, db):
    response = register(client)

    assert response.status_code == status.HTTP_201_CREATED
    assert "Waiting for manager approval" in response.json()["message"]

    request = db.query(RegistrationRequest).one()
    assert request.status == RegistrationStatus.PENDING
    assert request.password_hash != "secret123"
    assert verify_password("secret123", request.password_hash)
    assert db.query(User).count() == 0


def test_register_short_password(client):
    response = register(client, password="123")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["message"] == "Validation error"
    assert data["errors"][0]["field"] == "password"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"email": "employee@company.com"}, "User already exists with this email"),
        ({"employee_id": "EMP001"}, "Employee ID already exists"),
    ],
)
def test_register_conflicts_with_existing_user(client, test_employee, overrides, message):
    response = register(client, **overrides)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == message


def test_register_conflicts_with_pending_request(client, pending_request):
    response = register(client, employee_id="EMP200")
    assert response.json()["message"] == "Registration request already submitted for this email"

    response = register(client, email="other@company.com")
    assert response.json()["message"] == "Employee ID already in use by pending request"


def test_list_pending_and_all(client, db, manager_user, pending_request):
    register(client, email="second@company.com", employee_id="EMP101")
    headers = auth_headers(manager_user)

    client.post(f"/api/registration-requests/{pending_request.id}/reject", json={"reason": "No"}, headers=headers)

    pending = client.get("/api/registration-requests", headers=headers).json()
    assert pending["total"] == 1
    assert "password_hash" not in pending["items"][0]

    everything = client.get("/api/registration-requests/all", headers=headers).json()
    assert everything["total"] == 2


def test_approve_creates_exactly_one_employee(client, db, manager_user, pending_request):
    response = client.post(
        f"/api/registration-requests/{pending_request.id}/approve", headers=auth_headers(manager_user)
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["role"] == "employee"

    users = db.query(User).filter(User.email == "newhire@company.com").all()
    assert len(users) == 1
    assert users[0].role == Role.EMPLOYEE
    # Stored hash is reused, so the original password works
    assert users[0].password_hash == pending_request.password_hash

    db.refresh(pending_request)
    assert pending_request.status == RegistrationStatus.APPROVED
    assert pending_request.reviewed_by_id == manager_user.id
    assert pending_request.reviewed_at is not None

    login = client.post("/api/auth/login", json={"email": "newhire@company.com", "password": "secret123"})
    assert login.status_code == status.HTTP_200_OK


def test_approve_twice(client, manager_user, pending_request):
    headers = auth_headers(manager_user)
    client.post(f"/api/registration-requests/{pending_request.id}/approve", headers=headers)

    response = client.post(f"/api/registration-requests/{pending_request.id}/approve", headers=headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Request has already been processed"


def test_approve_when_identifier_taken_meanwhile(client, db, manager_user, pending_request):
    db.add(User.with_password(
        "whatever1", name="Sneaky", email="other@company.com", employee_id="EMP100", role="employee"
    ))
    db.commit()

    response = client.post(
        f"/api/registration-requests/{pending_request.id}/approve", headers=auth_headers(manager_user)
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "User or Employee ID already exists"


def test_reject_requires_reason_and_creates_no_user(client, db, manager_user, pending_request):
    headers = auth_headers(manager_user)

    response = client.post(f"/api/registration-requests/{pending_request.id}/reject", json={}, headers=headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = client.post(
        f"/api/registration-requests/{pending_request.id}/reject",
        json={"reason": "Unknown employee ID"},
        headers=headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Registration request rejected successfully"

    db.refresh(pending_request)
    assert pending_request.status == RegistrationStatus.REJECTED
    assert pending_request.rejection_reason == "Unknown employee ID"
    assert db.query(User).filter(User.email == "newhire@company.com").count() == 0


def test_unknown_request(client, manager_user):
    response = client.post("/api/registration-requests/999/approve", headers=auth_headers(manager_user))

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_employee_cannot_list_requests(client, test_employee):
    response = client.get("/api/registration-requests", headers=auth_headers(test_employee))

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_password_with_surrounding_spaces_is_kept_as_typed(client, db, manager_user):
    response = register(client, password=" secret12 ")
    assert response.status_code == status.HTTP_201_CREATED

    client.post(
        f"/api/registration-requests/{response.json()['request_id']}/approve",
        headers=auth_headers(manager_user)
    )

    login = client.post("/api/auth/login", json={"email": "newhire@company.com", "password": " secret12 "})
    assert login.status_code == status.HTTP_200_OK

    trimmed = client.post("/api/auth/login", json={"email": "newhire@company.com", "password": "secret12"})
    assert trimmed.status_code == status.HTTP_401_UNAUTHORIZED


def test_register_blank_password(client):
    response = register(client, password="        ")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"][0]["field"] == "password"
