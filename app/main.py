"""
Attendance Tracker Backend - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError, OperationalError

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import (
    http_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    generic_exception_handler
)
from app.core.logging import setup_logging
from app.db.init_db import bootstrap_initial_manager
from app.db.session import SessionLocal, create_sqlite_schema, database_is_ready

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    try:
        parsed = urlparse(url)
        if parsed.scheme.startswith("sqlite"):
            return url
        if parsed.password:
            netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
            if parsed.port:
                netloc += f":{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc))
    except ValueError:
        return "***"
    return url


app = FastAPI(
    title="Attendance Tracker Backend",
    description="Employee attendance, leave, problem reports and registration approvals",
    version=settings.VERSION or "1.0.0"
)

# Configure CORS - must be before other middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Register exception handlers
# Starlette's class also covers routing 404/405 and FastAPI's subclass
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
def startup_database() -> None:
    """Log the database URL, create SQLite tables and check connectivity."""
    masked = _mask_database_url(settings.DATABASE_URL)
    logger.info("DATABASE_URL (app): %s", masked)

    create_sqlite_schema()

    db = SessionLocal()
    try:
        if database_is_ready(db):
            logger.info("Database connection OK")
        else:
            logger.error("Database is not reachable; /api/health/ready will report 503")
    finally:
        db.close()


@app.on_event("startup")
def bootstrap_manager() -> None:
    """Ensure the system always has at least one manager."""
    db = SessionLocal()
    try:
        bootstrap_initial_manager(db)
    except OperationalError as e:
        db.rollback()
        # Tables might not exist yet (migrations not applied)
        if "no such table" in str(e).lower() or "does not exist" in str(e).lower():
            logger.warning("Database tables not ready yet, skipping initial bootstrap")
        else:
            logger.error("Database error during manager bootstrap: %s", e)
    finally:
        db.close()
