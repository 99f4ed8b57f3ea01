"""
Problem report service
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from app.models.problem_report import (
    ProblemReport,
    ProblemStatus,
    ProblemPriority,
    ProblemCategory,
    TERMINAL_PROBLEM_STATUSES,
)
from app.models.user import User, Role
from app.schemas.problem import ProblemReportCreate
from app.services.audit_service import log_audit
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def create_report(db: Session, user: User, request: ProblemReportCreate) -> ProblemReport:
    """File a new problem report (employees only); starts open."""
    if user.role == Role.MANAGER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Managers cannot submit problem reports"
        )

    report = ProblemReport(
        user_id=user.id,
        subject=request.subject,
        description=request.description,
        category=request.category.value,
        priority=request.priority.value,
        status=ProblemStatus.OPEN.value,
    )
    db.add(report)
    db.commit()
    db.refresh(report)

    logger.info("Problem reported: report_id=%s user_id=%s priority=%s", report.id, user.id, report.priority)
    log_audit(
        db=db,
        actor_id=user.id,
        action="PROBLEM_REPORT",
        entity_type="problem_reports",
        entity_id=report.id,
        meta={"category": request.category, "priority": request.priority}
    )
    return report


def _with_people(query):
    return query.options(joinedload(ProblemReport.user), joinedload(ProblemReport.resolved_by))


def list_my_reports(db: Session, user: User) -> List[ProblemReport]:
    return _with_people(db.query(ProblemReport)).filter(
        ProblemReport.user_id == user.id
    ).order_by(ProblemReport.created_at.desc(), ProblemReport.id.desc()).all()


def list_all_reports(
    db: Session,
    status_filter: Optional[ProblemStatus] = None,
    priority: Optional[ProblemPriority] = None,
    category: Optional[ProblemCategory] = None
) -> List[ProblemReport]:
    query = _with_people(db.query(ProblemReport))
    if status_filter:
        query = query.filter(ProblemReport.status == status_filter.value)
    if priority:
        query = query.filter(ProblemReport.priority == priority.value)
    if category:
        query = query.filter(ProblemReport.category == category.value)
    return query.order_by(ProblemReport.created_at.desc(), ProblemReport.id.desc()).all()


def _get_report(db: Session, report_id: int) -> ProblemReport:
    report = db.query(ProblemReport).filter(ProblemReport.id == report_id).first()
    if not report:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Problem report not found"
        )
    return report


def _apply_status(
    db: Session,
    report: ProblemReport,
    manager: User,
    new_status: ProblemStatus,
    resolution: Optional[str],
    now: Optional[datetime],
    action: str
) -> ProblemReport:
    resolution = resolution.strip() if resolution else None
    if new_status in TERMINAL_PROBLEM_STATUSES and not (resolution or report.resolution):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Resolution is required to resolve or close a report"
        )

    previous = report.status
    report.status = new_status.value
    if resolution:
        report.resolution = resolution
    if new_status in TERMINAL_PROBLEM_STATUSES:
        report.resolved_by_id = manager.id
        report.resolved_at = ensure_utc(now) if now else now_utc()
    db.commit()
    db.refresh(report)

    logger.info(
        "Problem status: report_id=%s %s -> %s manager_id=%s",
        report.id, previous, new_status.value, manager.id
    )
    log_audit(
        db=db,
        actor_id=manager.id,
        action=action,
        entity_type="problem_reports",
        entity_id=report.id,
        meta={"from": previous, "to": new_status, "resolution": resolution}
    )
    return report


def resolve_report(
    db: Session,
    report_id: int,
    manager: User,
    resolution: Optional[str],
    new_status: ProblemStatus = ProblemStatus.RESOLVED,
    now: Optional[datetime] = None
) -> ProblemReport:
    """
    Resolve or close a report with resolution text

    Raises:
        HTTPException: 404 if not found, 400 for a non-terminal status or blank resolution
    """
    report = _get_report(db, report_id)
    if new_status not in TERMINAL_PROBLEM_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Status must be resolved or closed"
        )
    if not resolution or not resolution.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Resolution is required"
        )
    return _apply_status(db, report, manager, new_status, resolution, now, "PROBLEM_RESOLVE")


def update_status(
    db: Session,
    report_id: int,
    manager: User,
    new_status: ProblemStatus,
    resolution: Optional[str] = None,
    now: Optional[datetime] = None
) -> ProblemReport:
    """
    Move a report to any status

    Entering resolved/closed needs resolution text, either given here or
    already on the report. Reopening keeps the earlier resolution stamps.
    """
    report = _get_report(db, report_id)
    return _apply_status(db, report, manager, new_status, resolution, now, "PROBLEM_STATUS_UPDATE")
