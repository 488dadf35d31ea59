"""Authentication and profile schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    email: EmailStr | None = Field(None, max_length=255)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    profile_picture: str | None = Field(None, max_length=1024)


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class PasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., max_length=255)


class PasswordReset(BaseModel):
    password: str = Field(..., min_length=6, max_length=128)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    profile_picture: str = ""
    is_admin: bool = False
    last_login: datetime | None = None
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    success: bool = True
    token: str
    user: UserResponse


class ResetPasswordResponse(BaseModel):
    success: bool = True
    token: str
    message: str


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserResponse
