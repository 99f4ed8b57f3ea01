"""
Registration service - public sign-up requests reviewed by managers
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.core.security import hash_password
from app.models.registration_request import RegistrationRequest, RegistrationStatus
from app.models.user import User
from app.schemas.auth import RegisterRequest
from app.services.audit_service import log_audit
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def submit_registration(db: Session, request: RegisterRequest) -> RegistrationRequest:
    """
    Store a pending registration with a hashed password.

    Email and employee ID must be free among users and pending requests.
    """
    email = request.email.lower()
    employee_code = request.employee_id

    if db.query(User).filter(User.email == email).first():
        raise _bad_request("User already exists with this email")
    if db.query(RegistrationRequest).filter(
        RegistrationRequest.email == email,
        RegistrationRequest.status == RegistrationStatus.PENDING.value
    ).first():
        raise _bad_request("Registration request already submitted for this email")
    if db.query(User).filter(User.employee_id == employee_code).first():
        raise _bad_request("Employee ID already exists")
    if db.query(RegistrationRequest).filter(
        RegistrationRequest.employee_id == employee_code,
        RegistrationRequest.status == RegistrationStatus.PENDING.value
    ).first():
        raise _bad_request("Employee ID already in use by pending request")

    registration = RegistrationRequest(
        name=request.name,
        email=email,
        password_hash=hash_password(request.password),
        employee_id=employee_code,
        department=request.department,
        status=RegistrationStatus.PENDING.value,
    )
    db.add(registration)
    db.commit()
    db.refresh(registration)

    logger.info("Registration submitted: request_id=%s employee_id=%s", registration.id, employee_code)
    log_audit(
        db=db,
        actor_id=None,
        action="REGISTRATION_SUBMIT",
        entity_type="registration_requests",
        entity_id=registration.id,
        meta={"email": email, "employee_id": employee_code}
    )
    return registration


def list_requests(db: Session, pending_only: bool = True) -> List[RegistrationRequest]:
    query = db.query(RegistrationRequest).options(joinedload(RegistrationRequest.reviewed_by))
    if pending_only:
        query = query.filter(RegistrationRequest.status == RegistrationStatus.PENDING.value)
    return query.order_by(RegistrationRequest.created_at.desc(), RegistrationRequest.id.desc()).all()


def _get_pending_request(db: Session, request_id: int) -> RegistrationRequest:
    registration = db.query(RegistrationRequest).filter(RegistrationRequest.id == request_id).first()
    if not registration:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Registration request not found"
        )
    if registration.status != RegistrationStatus.PENDING:
        raise _bad_request("Request has already been processed")
    return registration


def approve_request(
    db: Session,
    request_id: int,
    manager: User,
    now: Optional[datetime] = None
) -> User:
    """
    Create the employee account and mark the request approved

    The stored hash is copied as-is through User.from_registration.

    Raises:
        HTTPException: 404 unknown request, 400 already processed or identifiers taken
    """
    registration = _get_pending_request(db, request_id)

    # TODO: lock the request row (SELECT ... FOR UPDATE) on PostgreSQL; concurrent
    # approvals can pass this check and then hit the users unique constraints.
    collision = db.query(User).filter(
        or_(User.email == registration.email, User.employee_id == registration.employee_id)
    ).first()
    if collision:
        raise _bad_request("User or Employee ID already exists")

    user = User.from_registration(registration)
    db.add(user)
    registration.status = RegistrationStatus.APPROVED.value
    registration.reviewed_by_id = manager.id
    registration.reviewed_at = ensure_utc(now) if now else now_utc()
    db.commit()
    db.refresh(user)

    logger.info("Registration approved: request_id=%s user_id=%s manager_id=%s", registration.id, user.id, manager.id)
    log_audit(
        db=db,
        actor_id=manager.id,
        action="REGISTRATION_APPROVE",
        entity_type="registration_requests",
        entity_id=registration.id,
        meta={"user_id": user.id, "employee_id": user.employee_id}
    )
    return user


def reject_request(
    db: Session,
    request_id: int,
    manager: User,
    reason: Optional[str],
    now: Optional[datetime] = None
) -> RegistrationRequest:
    """Mark a pending request rejected with a reason; no user is created."""
    registration = _get_pending_request(db, request_id)
    if not reason or not reason.strip():
        raise _bad_request("Rejection reason is required")

    registration.status = RegistrationStatus.REJECTED.value
    registration.reviewed_by_id = manager.id
    registration.reviewed_at = ensure_utc(now) if now else now_utc()
    registration.rejection_reason = reason.strip()
    db.commit()
    db.refresh(registration)

    logger.info("Registration rejected: request_id=%s manager_id=%s", registration.id, manager.id)
    log_audit(
        db=db,
        actor_id=manager.id,
        action="REGISTRATION_REJECT",
        entity_type="registration_requests",
        entity_id=registration.id,
        meta={"reason": registration.rejection_reason}
    )
    return registration
