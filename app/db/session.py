"""
Database engine and session management

One engine (and its connection pool) is created when the process starts;
requests borrow sessions from ``SessionLocal`` through ``get_db``.
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
    echo=False
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_sqlite_schema() -> None:
    """Create all tables for SQLite databases (no migration step locally)."""
    if "sqlite" in settings.DATABASE_URL:
        import app.models  # noqa: F401  registers every table on Base.metadata
        Base.metadata.create_all(bind=engine)


def database_is_ready(db: Session) -> bool:
    """Run a trivial query to confirm the database answers."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database readiness check failed: %s", e)
        return False
