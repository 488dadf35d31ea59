"""User model."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    profile_picture = Column(String(1024), nullable=False, default="")
    reset_password_token = Column(String(64), nullable=True, index=True)  # sha256 hex
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)

    def set_password(self, plain_password: str) -> None:
        """Hash and store a new password. The only writer of password_hash."""
        from src.services.auth import get_password_hash

        self.password_hash = get_password_hash(plain_password)

    def check_password(self, plain_password: str) -> bool:
        """Compare a plaintext password against the stored hash."""
        from src.services.auth import verify_password

        return verify_password(plain_password, self.password_hash)

    def clear_reset_token(self) -> None:
        self.reset_password_token = None
        self.reset_password_expires = None
