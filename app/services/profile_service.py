"""
Profile service - yearly heat map, yearly score and own profile edits
"""
import logging
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.models.attendance import Attendance
from app.models.user import User
from app.schemas.user import ProfileUpdate
from app.services import scoring_service
from app.services.audit_service import log_audit
from app.utils.datetime_utils import local_today

logger = logging.getLogger(__name__)


def _year_records(db: Session, user: User, year: int):
    start, end = scoring_service.year_bounds(year)
    records = db.query(Attendance).filter(
        Attendance.user_id == user.id,
        Attendance.date >= start,
        Attendance.date <= end
    ).order_by(Attendance.date).all()
    return records, start, end


def get_heatmap(db: Session, user: User, year: int) -> Dict:
    """ISO date -> day details for every stored record of the year."""
    records, _, _ = _year_records(db, user, year)
    data = {
        record.date.isoformat(): {
            "status": record.status,
            "check_in_time": record.check_in_time,
            "check_out_time": record.check_out_time,
            "total_hours": record.total_hours,
        }
        for record in records
    }
    return {"year": year, "data": data, "total_days": len(records)}


def get_attendance_score(db: Session, user: User, year: int, now: Optional[datetime] = None) -> Dict:
    """Weighted score over every working day of the year; absences inferred up to today."""
    records, start, end = _year_records(db, user, year)
    tally = scoring_service.tally_records(records, start, end, today=local_today(now))
    return {
        "year": year,
        "score": tally.score,
        "attendance_rate": tally.attendance_rate,
        "present": tally.present,
        "late": tally.late,
        "absent": tally.absent,
        "half_day": tally.half_day,
        "total_working_days": tally.working_days,
        "total_days": tally.total_records,
    }


def update_profile(db: Session, user: User, changes: ProfileUpdate) -> User:
    """Apply name/department edits; email, role and employee ID are not editable here."""
    update_data = changes.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        return user

    for field, value in update_data.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)

    logger.info("Profile updated: user_id=%s fields=%s", user.id, sorted(update_data))
    log_audit(
        db=db,
        actor_id=user.id,
        action="PROFILE_UPDATE",
        entity_type="users",
        entity_id=user.id,
        meta=update_data
    )
    return user
