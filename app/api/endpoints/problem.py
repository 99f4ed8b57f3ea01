"""
Problem report endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user, require_employee, require_manager
from app.models.problem_report import ProblemCategory, ProblemPriority, ProblemStatus
from app.models.user import User
from app.schemas.problem import (
    ProblemReportActionResponse,
    ProblemReportCreate,
    ProblemReportListResponse,
    ProblemReportOut,
    ProblemResolveRequest,
    ProblemStatusUpdate,
)
from app.services import problem_service

router = APIRouter()


def _list_response(reports) -> ProblemReportListResponse:
    return ProblemReportListResponse(
        items=[ProblemReportOut.model_validate(r) for r in reports],
        total=len(reports)
    )


def _action_response(message: str, report) -> ProblemReportActionResponse:
    return ProblemReportActionResponse(message=message, report=ProblemReportOut.model_validate(report))


@router.post("/report", response_model=ProblemReportActionResponse, status_code=201)
async def report_problem(
    report_data: ProblemReportCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """File a problem report (employees only)"""
    report = problem_service.create_report(db, current_user, report_data)
    return _action_response("Problem report submitted successfully", report)


@router.get("/my-reports", response_model=ProblemReportListResponse)
async def my_reports(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    return _list_response(problem_service.list_my_reports(db, current_user))


@router.get("/all", response_model=ProblemReportListResponse)
async def all_reports(
    status: Optional[ProblemStatus] = Query(None),
    priority: Optional[ProblemPriority] = Query(None),
    category: Optional[ProblemCategory] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Every problem report, newest first (managers only)"""
    return _list_response(problem_service.list_all_reports(db, status, priority, category))


@router.put("/{report_id}/resolve", response_model=ProblemReportActionResponse)
async def resolve_report(
    report_id: int,
    resolve_data: ProblemResolveRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Resolve (default) or close a report with resolution text"""
    report = problem_service.resolve_report(
        db, report_id, current_user, resolve_data.resolution, resolve_data.status
    )
    return _action_response("Problem report resolved", report)


@router.put("/{report_id}/update-status", response_model=ProblemReportActionResponse)
async def update_report_status(
    report_id: int,
    status_data: ProblemStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """
    Set any status, optionally updating the resolution

    Moving to resolved or closed needs resolution text.
    """
    report = problem_service.update_status(
        db, report_id, current_user, status_data.status, status_data.resolution
    )
    return _action_response("Problem report status updated", report)
