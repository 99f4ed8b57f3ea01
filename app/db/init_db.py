"""
Database initialization helpers
- bootstrap_initial_manager: run at startup so a fresh install has one manager
- init_db: seed demo data (manual, via scripts/seed_demo_data.py)
"""
import logging
from sqlalchemy.orm import Session
from app.core.config import settings
from app.models.user import User, Role

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_MANAGER = {
    "name": "Demo Manager",
    "email": "manager@example.com",
    "employee_id": "MGR001",
    "department": "Management",
}

DEMO_EMPLOYEES = [
    {"name": "Alice Johnson", "email": "alice@example.com", "employee_id": "EMP001", "department": "Engineering"},
    {"name": "Bob Smith", "email": "bob@example.com", "employee_id": "EMP002", "department": "Engineering"},
    {"name": "Carol White", "email": "carol@example.com", "employee_id": "EMP003", "department": "Sales"},
    {"name": "David Brown", "email": "david@example.com", "employee_id": "EMP004", "department": "Marketing"},
    {"name": "Eve Davis", "email": "eve@example.com", "employee_id": "EMP005", "department": "HR"},
]


def bootstrap_initial_manager(db: Session) -> bool:
    """
    Create the initial manager from INITIAL_MANAGER_* settings if no manager exists.

    Returns:
        True if a manager was created
    """
    if db.query(User).filter(User.role == Role.MANAGER.value).first():
        logger.info("Manager already exists, skipping initial bootstrap")
        return False

    taken = db.query(User).filter(
        (User.email == settings.INITIAL_MANAGER_EMAIL.lower())
        | (User.employee_id == settings.INITIAL_MANAGER_EMPLOYEE_ID)
    ).first()
    if taken:
        logger.warning(
            "Initial manager email or employee ID already used by user_id=%s, skipping bootstrap", taken.id
        )
        return False

    manager = User.with_password(
        settings.INITIAL_MANAGER_PASSWORD,
        name="System Manager",
        email=settings.INITIAL_MANAGER_EMAIL.lower(),
        employee_id=settings.INITIAL_MANAGER_EMPLOYEE_ID,
        department="Management",
        role=Role.MANAGER.value,
    )
    db.add(manager)
    db.commit()

    logger.info("Initial manager created successfully")
    logger.info("Email: %s", manager.email)
    logger.info("Password: [set via INITIAL_MANAGER_PASSWORD environment variable]")
    return True


def _ensure_user(db: Session, role: Role, fields: dict) -> User:
    user = db.query(User).filter(User.email == fields["email"]).first()
    if user:
        return user
    user = User.with_password(DEMO_PASSWORD, role=role.value, **fields)
    db.add(user)
    return user


def init_db(db: Session) -> None:
    """
    Seed one demo manager and a handful of employees across departments

    Idempotent: existing accounts (matched by email) are left untouched.
    This is a helper function and should NOT be auto-run on startup.
    """
    _ensure_user(db, Role.MANAGER, DEMO_MANAGER)
    for fields in DEMO_EMPLOYEES:
        _ensure_user(db, Role.EMPLOYEE, fields)
    db.commit()
    logger.info(
        "Demo data ready: manager=%s, employees=%d (password: %s)",
        DEMO_MANAGER["email"], len(DEMO_EMPLOYEES), DEMO_PASSWORD
    )
