"""
Leave endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_employee, require_manager
from app.models.leave import LeaveStatus
from app.models.user import User
from app.schemas.leave import (
    LeaveActionResponse,
    LeaveApplyRequest,
    LeaveListResponse,
    LeaveOut,
    LeaveReviewRequest,
)
from app.services import leave_service

router = APIRouter()


def _list_response(leaves) -> LeaveListResponse:
    return LeaveListResponse(items=[LeaveOut.model_validate(l) for l in leaves], total=len(leaves))


@router.post("/apply", response_model=LeaveActionResponse, status_code=201)
async def apply_leave_endpoint(
    leave_data: LeaveApplyRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Apply for leave (creates a pending request)

    Managers cannot apply. start_date must not be after end_date.
    """
    leave = leave_service.apply_leave(db, current_user, leave_data)
    return LeaveActionResponse(
        message="Leave request submitted successfully",
        leave=LeaveOut.model_validate(leave)
    )


@router.get("/my-leaves", response_model=LeaveListResponse)
async def my_leaves(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    return _list_response(leave_service.list_my_leaves(db, current_user))


@router.get("/all", response_model=LeaveListResponse)
async def all_leaves(
    status: Optional[LeaveStatus] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Every leave request, newest first (managers only)"""
    return _list_response(leave_service.list_all_leaves(db, status))


@router.put("/{leave_id}/approve", response_model=LeaveActionResponse)
async def approve_leave_endpoint(
    leave_id: int,
    review: Optional[LeaveReviewRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Approve a pending leave request; the comment is optional"""
    comment = review.comment if review else None
    leave = leave_service.approve_leave(db, leave_id, current_user, comment)
    return LeaveActionResponse(message="Leave request approved", leave=LeaveOut.model_validate(leave))


@router.put("/{leave_id}/reject", response_model=LeaveActionResponse)
async def reject_leave_endpoint(
    leave_id: int,
    review: LeaveReviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Reject a pending leave request; a comment is required"""
    leave = leave_service.reject_leave(db, leave_id, current_user, review.comment)
    return LeaveActionResponse(message="Leave request rejected", leave=LeaveOut.model_validate(leave))
