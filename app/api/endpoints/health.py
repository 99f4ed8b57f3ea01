"""
Health check endpoints
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.db.session import database_is_ready

router = APIRouter()

SERVICE_NAME = "attendance-tracker-backend"


@router.get("/health")
async def health_check():
    """Liveness: the process is up and serving requests."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
async def readiness_check(db: Session = Depends(get_db)):
    """
    Readiness: the connection pool can reach the database

    Returns 503 while the database is unreachable.
    """
    if not database_is_ready(db):
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "service": SERVICE_NAME, "database": "unreachable"}
        )
    return {"status": "ok", "service": SERVICE_NAME, "database": "ok"}
