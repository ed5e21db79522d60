import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from skillconnect.config import settings
from skillconnect.core.security import create_session_token, verify_password
from skillconnect.core.session_gate import post_login_target
from skillconnect.core.validators import is_valid_password, password_requirements, password_strength
from skillconnect.database import get_db
from skillconnect.dependencies import get_current_user
from skillconnect.models.user import User
from skillconnect.repos.user_repo import (
    create as create_user,
    get_by_email,
    touch_last_login,
    update_profile,
)
from skillconnect.schemas.auth import (
    LoginRequest,
    PasswordStrengthRequest,
    PasswordStrengthResponse,
    ProfileUpdate,
    SessionResponse,
    SignupRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        httponly=True,
        samesite="lax",
        secure=(settings.app_env or "").lower() in {"production", "prod"},
        max_age=settings.session_timeout_minutes * 60,
    )


def _issue_session(response: Response, user: User, redirect: str | None, strength: str | None = None) -> SessionResponse:
    now = datetime.now(timezone.utc)
    token = create_session_token(user.id, user.email, user.role, login_time=now, last_login=now)
    _set_session_cookie(response, token)
    return SessionResponse(
        access_token=token,
        redirect_to=post_login_target(user.role, redirect),
        user=UserResponse.model_validate(user),
        password_strength=strength,
    )


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def signup(
    data: SignupRequest,
    response: Response,
    redirect: str | None = None,
    db: Session = Depends(get_db),
):
    try:
        if get_by_email(db, data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered",
            )
        user = create_user(
            db,
            data.email,
            data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role=data.role,
        )
        logger.info("User signed up: %s role=%s", user.email, user.role)
        return _issue_session(response, user, redirect, strength=password_strength(data.password))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Signup failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Signup failed") from e


@router.post("/login", response_model=SessionResponse)
def login(
    data: LoginRequest,
    response: Response,
    redirect: str | None = None,
    db: Session = Depends(get_db),
):
    try:
        user = get_by_email(db, data.email)
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )
        if (user.status or "active") != "active":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Account is {user.status}",
            )
        user = touch_last_login(db, user.id) or user
        logger.info("User logged in: %s", user.email)
        return _issue_session(response, user, redirect)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out", "redirect_to": "/"}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserResponse)
def update_me(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        updated = update_profile(db, user.id, data.model_dump(exclude_unset=True))
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        logger.info("Profile updated for user=%s", user.id)
        return updated
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Profile update failed") from e


@router.post("/password-strength", response_model=PasswordStrengthResponse)
def check_password_strength(data: PasswordStrengthRequest):
    return PasswordStrengthResponse(
        strength=password_strength(data.password),
        requirements=password_requirements(data.password),
        valid=is_valid_password(data.password),
    )
