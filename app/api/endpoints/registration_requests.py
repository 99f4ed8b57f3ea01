"""
Registration request review endpoints (managers only)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_manager
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.registration import (
    RegistrationApproveResponse,
    RegistrationRejectRequest,
    RegistrationRequestListResponse,
    RegistrationRequestOut,
)
from app.schemas.user import UserOut
from app.services import registration_service

router = APIRouter()


def _list_response(requests) -> RegistrationRequestListResponse:
    return RegistrationRequestListResponse(
        items=[RegistrationRequestOut.model_validate(r) for r in requests],
        total=len(requests)
    )


@router.get("", response_model=RegistrationRequestListResponse)
async def pending_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Pending registration requests, newest first"""
    return _list_response(registration_service.list_requests(db, pending_only=True))


@router.get("/all", response_model=RegistrationRequestListResponse)
async def all_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Every registration request, including reviewed ones"""
    return _list_response(registration_service.list_requests(db, pending_only=False))


@router.post("/{request_id}/approve", response_model=RegistrationApproveResponse)
async def approve_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """
    Approve a pending request

    Creates an employee account with the password submitted at registration.
    """
    user = registration_service.approve_request(db, request_id, current_user)
    return RegistrationApproveResponse(
        message="Registration request approved successfully",
        user=UserOut.model_validate(user)
    )


@router.post("/{request_id}/reject", response_model=MessageResponse)
async def reject_request(
    request_id: int,
    reject_data: RegistrationRejectRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Reject a pending request; a reason is required"""
    registration_service.reject_request(db, request_id, current_user, reject_data.reason)
    return MessageResponse(message="Registration request rejected successfully")
