"""
Dashboard endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, require_employee, require_manager
from app.models.user import User
from app.schemas.dashboard import BestEmployeesOut, EmployeeDashboardOut, ManagerDashboardOut
from app.services import dashboard_service
from app.utils.datetime_utils import local_today

router = APIRouter()


@router.get("/employee", response_model=EmployeeDashboardOut)
async def employee_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Today's status, this month's stats and the last 7 days"""
    return dashboard_service.employee_dashboard(db, current_user)


@router.get("/manager", response_model=ManagerDashboardOut)
async def manager_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    return dashboard_service.manager_dashboard(db)


@router.get("/best-employees", response_model=BestEmployeesOut)
async def best_employees(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000, le=9999),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    """Employees ranked by monthly score; the first five are the top performers"""
    today = local_today()
    return dashboard_service.best_employees(db, month or today.month, year or today.year)
