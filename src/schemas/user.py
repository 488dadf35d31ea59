"""Admin user management schemas."""

from pydantic import BaseModel, EmailStr, Field


class AdminUserUpdate(BaseModel):
    """Admin edit of another user's account."""

    email: EmailStr | None = Field(None, max_length=255)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    is_admin: bool | None = None
