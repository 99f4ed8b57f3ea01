"""
Leave service - apply, list and review leave requests
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.models.leave import Leave, LeaveStatus
from app.models.user import User, Role
from app.schemas.leave import LeaveApplyRequest
from app.services.audit_service import log_audit
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def apply_leave(db: Session, user: User, request: LeaveApplyRequest) -> Leave:
    """
    Create a pending leave request for an employee

    Overlapping date ranges are accepted; reviewers see them side by side.

    Raises:
        HTTPException: 403 for managers, 400 if start_date > end_date
    """
    if user.role == Role.MANAGER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Managers cannot apply for leave"
        )
    if request.start_date > request.end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start date must be before end date"
        )

    leave = Leave(
        user_id=user.id,
        start_date=request.start_date,
        end_date=request.end_date,
        leave_type=request.leave_type.value,
        reason=request.reason,
        status=LeaveStatus.PENDING.value,
    )
    db.add(leave)
    db.commit()
    db.refresh(leave)

    logger.info("Leave applied: leave_id=%s user_id=%s %s..%s", leave.id, user.id, leave.start_date, leave.end_date)
    log_audit(
        db=db,
        actor_id=user.id,
        action="LEAVE_APPLY",
        entity_type="leaves",
        entity_id=leave.id,
        meta={
            "leave_type": request.leave_type,
            "start_date": request.start_date,
            "end_date": request.end_date,
        }
    )
    return leave


def _with_people(query):
    return query.options(joinedload(Leave.user), joinedload(Leave.reviewed_by))


def list_my_leaves(db: Session, user: User) -> List[Leave]:
    return _with_people(db.query(Leave)).filter(
        Leave.user_id == user.id
    ).order_by(Leave.created_at.desc(), Leave.id.desc()).all()


def list_all_leaves(db: Session, status_filter: Optional[LeaveStatus] = None) -> List[Leave]:
    """Every leave request, newest first, optionally filtered by status."""
    query = _with_people(db.query(Leave))
    if status_filter:
        query = query.filter(Leave.status == status_filter.value)
    return query.order_by(Leave.created_at.desc(), Leave.id.desc()).all()


def _get_pending_leave(db: Session, leave_id: int) -> Leave:
    leave = db.query(Leave).filter(Leave.id == leave_id).first()
    if not leave:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Leave request not found"
        )
    if leave.status != LeaveStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Leave request has already been reviewed"
        )
    return leave


def _review(
    db: Session,
    leave: Leave,
    reviewer: User,
    new_status: LeaveStatus,
    comment: Optional[str],
    now: Optional[datetime]
) -> Leave:
    leave.status = new_status.value
    leave.reviewed_by_id = reviewer.id
    leave.review_comment = comment
    leave.reviewed_at = ensure_utc(now) if now else now_utc()
    db.commit()
    db.refresh(leave)

    logger.info("Leave %s: leave_id=%s reviewer_id=%s", new_status.value, leave.id, reviewer.id)
    log_audit(
        db=db,
        actor_id=reviewer.id,
        action="LEAVE_APPROVE" if new_status == LeaveStatus.APPROVED else "LEAVE_REJECT",
        entity_type="leaves",
        entity_id=leave.id,
        meta={"applicant_id": leave.user_id, "comment": comment}
    )
    return leave


def approve_leave(
    db: Session,
    leave_id: int,
    reviewer: User,
    comment: Optional[str] = None,
    now: Optional[datetime] = None
) -> Leave:
    """
    Approve a pending leave request (comment optional)

    Raises:
        HTTPException: 404 if not found, 400 if already reviewed
    """
    leave = _get_pending_leave(db, leave_id)
    comment = comment.strip() if comment else None
    return _review(db, leave, reviewer, LeaveStatus.APPROVED, comment or None, now)


def reject_leave(
    db: Session,
    leave_id: int,
    reviewer: User,
    comment: Optional[str],
    now: Optional[datetime] = None
) -> Leave:
    """
    Reject a pending leave request; a non-empty comment is mandatory

    Raises:
        HTTPException: 404 if not found, 400 if already reviewed or comment missing
    """
    leave = _get_pending_leave(db, leave_id)
    if not comment or not comment.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Rejection comment is required"
        )
    return _review(db, leave, reviewer, LeaveStatus.REJECTED, comment.strip(), now)
