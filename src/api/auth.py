"""Authentication and profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.config import get_settings
from src.database import get_db
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    PasswordChange,
    PasswordReset,
    PasswordResetRequest,
    ProfileUpdate,
    ResetPasswordResponse,
    UserEnvelope,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.common import MessageResponse
from src.services import auth as auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user, token = auth_service.register(
        db, user_data.email, user_data.password, user_data.first_name, user_data.last_name
    )
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user, token = auth_service.login(db, credentials.email, credentials.password)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/profile", response_model=UserEnvelope)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return UserEnvelope(user=UserResponse.model_validate(current_user))


@router.put("/profile", response_model=UserEnvelope)
def update_profile(
    profile: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update name, email or profile picture."""
    user = auth_service.update_profile(
        db,
        current_user,
        email=profile.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
        profile_picture=profile.profile_picture,
    )
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    passwords: PasswordChange,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Change password after confirming the current one."""
    auth_service.change_password(
        db, current_user, passwords.current_password, passwords.new_password
    )
    return MessageResponse(message="Password updated successfully")


@router.post("/reset-password", response_model=MessageResponse)
def request_password_reset(
    reset_request: PasswordResetRequest,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    """Email a single-use password reset link."""
    link_base = get_settings().frontend_url or str(request.base_url)
    auth_service.request_password_reset(db, reset_request.email, link_base)
    return MessageResponse(message="Password reset email sent")


@router.put("/reset-password/{reset_token}", response_model=ResetPasswordResponse)
def reset_password(
    reset_token: str,
    reset: PasswordReset,
    db: Annotated[Session, Depends(get_db)],
):
    """Set a new password with a reset token."""
    _, token = auth_service.reset_password(db, reset_token, reset.password)
    return ResetPasswordResponse(token=token, message="Password reset successful")
