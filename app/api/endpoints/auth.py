"""
Authentication endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_current_user
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from app.schemas.registration import RegistrationSubmitResponse
from app.schemas.user import UserOut
from app.services.auth_service import authenticate
from app.services.registration_service import submit_registration

router = APIRouter()


@router.post("/register", response_model=RegistrationSubmitResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Submit a registration request (public)

    No account is created until a manager approves the request.
    Email and employee ID must not belong to a user or another pending request.
    """
    registration = submit_registration(db, register_data)
    return RegistrationSubmitResponse(
        message="Registration request submitted successfully. Waiting for manager approval.",
        request_id=registration.id
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate with email and password and return a JWT

    Unknown email and wrong password both give 401 "Invalid credentials".
    """
    access_token, user = authenticate(db, login_data.email, login_data.password)
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserOut.model_validate(user)
    )


@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    """Current authenticated user's profile"""
    return current_user
