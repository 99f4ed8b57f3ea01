"""
Authentication service - credential check and token issue
"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.security import create_access_token, verify_password
from app.models.user import User
from app.services.audit_service import log_audit_best_effort
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def authenticate(
    db: Session,
    email: str,
    password: str,
    now: Optional[datetime] = None
) -> Tuple[str, User]:
    """
    Validate email/password, stamp last_login and issue a bearer token

    The same message is used for unknown email and wrong password.

    Returns:
        (access_token, user)
    """
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login failed for email=%s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    user.last_login = ensure_utc(now) if now else now_utc()
    db.commit()
    db.refresh(user)

    # JWT 'sub' claim must be a string
    access_token = create_access_token(data={"sub": str(user.id), "role": user.role})

    # A failed audit write never blocks a login
    log_audit_best_effort(
        db,
        actor_id=user.id,
        action="AUTH_LOGIN_SUCCESS",
        entity_type="auth",
        meta={"employee_id": user.employee_id, "role": user.role}
    )

    logger.info("Login: user_id=%s role=%s", user.id, user.role)
    return access_token, user
