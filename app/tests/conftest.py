"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time; give the app a throwaway database and key
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["APP_ENV"] = "local"
os.environ["TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from app.main import app
from app.db.base import Base
from app.core.deps import get_db

# Import all models to ensure they're registered with Base.metadata
from app.models import (
    User,
    Role,
    Attendance,
    Leave,
    ProblemReport,
    RegistrationRequest,
    AuditLog,
)  # noqa


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(db, password: str, **fields) -> User:
    user = User.with_password(password, **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_employee(db):
    """Create a test employee"""
    return _create_user(
        db,
        "testpass123",
        name="Test Employee",
        email="employee@company.com",
        employee_id="EMP001",
        department="Engineering",
        role=Role.EMPLOYEE.value,
    )


@pytest.fixture
def second_employee(db):
    """Create a second employee with no department"""
    return _create_user(
        db,
        "testpass123",
        name="Second Employee",
        email="second@company.com",
        employee_id="EMP002",
        department=None,
        role=Role.EMPLOYEE.value,
    )


@pytest.fixture
def manager_user(db):
    """Create a manager"""
    return _create_user(
        db,
        "mgrpass123",
        name="Manager",
        email="manager@company.com",
        employee_id="MGR001",
        department="Management",
        role=Role.MANAGER.value,
    )
