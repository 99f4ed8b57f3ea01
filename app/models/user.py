"""
User model
"""
import enum
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.db.base import Base
from app.core.security import hash_password


class Role(str, enum.Enum):
    EMPLOYEE = "employee"
    MANAGER = "manager"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=Role.EMPLOYEE.value)
    employee_id = Column(String, unique=True, nullable=False, index=True)
    department = Column(String, nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    @classmethod
    def with_password(cls, password: str, **fields) -> "User":
        """Build a user from a raw password (hashed here)."""
        return cls(password_hash=hash_password(password), **fields)

    @classmethod
    def from_registration(cls, request) -> "User":
        """
        Build an employee from an approved registration request.

        The request already stores a hashed password, so it is copied as-is.
        """
        return cls(
            name=request.name,
            email=request.email,
            password_hash=request.password_hash,
            employee_id=request.employee_id,
            department=request.department,
            role=Role.EMPLOYEE.value,
        )
