"""
Authentication and registration schemas
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from app.core.security import validate_password
from app.schemas.user import UserOut


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """Public registration request (pending manager approval)"""
    name: str = Field(..., description="Full name")
    email: EmailStr = Field(..., description="Work email")
    password: str = Field(..., description="Password (at least 6 characters)")
    employee_id: str = Field(..., description="Employee ID")
    department: str = Field(..., description="Department")

    @field_validator("name", "employee_id", "department")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class MessageResponse(BaseModel):
    message: str
