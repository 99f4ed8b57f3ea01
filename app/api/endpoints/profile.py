"""
Profile endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_employee
from app.models.user import User
from app.schemas.profile import AttendanceScoreResponse, HeatmapResponse
from app.schemas.user import ProfileUpdate, ProfileUpdateResponse, UserOut
from app.services import profile_service
from app.utils.datetime_utils import local_today

router = APIRouter()


@router.get("/attendance-heatmap", response_model=HeatmapResponse)
async def attendance_heatmap(
    year: Optional[int] = Query(None, ge=2000, le=9999, description="Year, defaults to the current year"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Day-by-day attendance for one year, keyed by ISO date"""
    return profile_service.get_heatmap(db, current_user, year or local_today().year)


@router.get("/attendance-score", response_model=AttendanceScoreResponse)
async def attendance_score(
    year: Optional[int] = Query(None, ge=2000, le=9999, description="Year, defaults to the current year"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Weighted attendance score for one year"""
    return profile_service.get_attendance_score(db, current_user, year or local_today().year)


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
    changes: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Edit own name and department"""
    user = profile_service.update_profile(db, current_user, changes)
    return ProfileUpdateResponse(message="Profile updated successfully", user=UserOut.model_validate(user))
