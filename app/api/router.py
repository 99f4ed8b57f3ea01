"""
Main API router
"""
from fastapi import APIRouter

from app.api.endpoints import (
    health,
    version,
    auth,
    attendance,
    leave,
    problem,
    profile,
    registration_requests,
    dashboard,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(leave.router, prefix="/leave", tags=["leave"])
api_router.include_router(problem.router, prefix="/problem", tags=["problem-reports"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(registration_requests.router, prefix="/registration-requests", tags=["registration-requests"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
