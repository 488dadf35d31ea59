"""Authentication service for JWT, password handling and account recovery."""

import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import (
    ConflictError,
    EmailDeliveryError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailed,
)
from src.models.user import User
from src.services.email import send_email

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def normalize_email(email: str) -> str:
    """Emails are stored trimmed and lowercased."""
    return email.strip().lower()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def hash_reset_token(raw_token: str) -> str:
    """One-way digest stored in place of a raw reset token."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def create_access_token(user_id: int) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def verify_token(token: str) -> int:
    """Return the user id a token was issued for.

    Raises UnauthorizedError if the signature is bad, the token has expired,
    or it carries no usable subject.
    """
    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedError("Not authorized, token failed")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Not authorized, token failed") from None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not user.check_password(password):
        return None
    return user


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    is_admin: bool = False,
) -> User:
    """Create a new user."""
    user = User(
        email=normalize_email(email),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        is_admin=is_admin,
        last_login=datetime.now(UTC),
    )
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def register(
    db: Session, email: str, password: str, first_name: str, last_name: str
) -> tuple[User, str]:
    """Register a new account and return it with a fresh token."""
    if get_user_by_email(db, email):
        raise ConflictError("User already exists")

    user = create_user(db, email, password, first_name, last_name)
    logger.info(f"Registered user {user.id}")
    return user, create_access_token(user.id)


def login(db: Session, email: str, password: str) -> tuple[User, str]:
    """Check credentials, stamp last_login and issue a token."""
    user = authenticate_user(db, email, password)
    if not user:
        raise UnauthorizedError("Invalid credentials")

    user.last_login = datetime.now(UTC)
    db.commit()
    db.refresh(user)
    return user, create_access_token(user.id)


def update_profile(
    db: Session,
    user: User,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_picture: str | None = None,
) -> User:
    """Update the caller's own profile fields."""
    if email is not None:
        email = normalize_email(email)
        if email != user.email:
            if get_user_by_email(db, email):
                raise ConflictError("Email already in use")
            user.email = email
    if first_name is not None:
        user.first_name = first_name.strip()
    if last_name is not None:
        user.last_name = last_name.strip()
    if profile_picture is not None:
        user.profile_picture = profile_picture

    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Replace the password after confirming the current one."""
    if not user.check_password(current_password):
        raise UnauthorizedError("Current password is incorrect")

    user.set_password(new_password)
    db.commit()


def request_password_reset(db: Session, email: str, reset_url_base: str) -> None:
    """Issue a reset token and email the link carrying the raw token.

    Only the sha256 of the token is stored. If the email cannot be sent the
    token fields are cleared again so no usable reset is left behind.
    """
    user = get_user_by_email(db, email)
    if not user:
        raise NotFoundError("User not found")

    raw_token = secrets.token_hex(20)
    user.reset_password_token = hash_reset_token(raw_token)
    user.reset_password_expires = datetime.now(UTC) + timedelta(
        minutes=settings.password_reset_expire_minutes
    )
    db.commit()

    reset_url = f"{reset_url_base.rstrip('/')}/reset-password/{raw_token}"
    message = (
        "You are receiving this email because you (or someone else) has requested "
        "the reset of a password. Please click on the following link to reset your "
        f"password:\n\n{reset_url}\n\n"
        f"This link will expire in {settings.password_reset_expire_minutes} minutes."
    )

    try:
        send_email(user.email, "Password Reset Request", message)
    except EmailDeliveryError:
        logger.error(f"Password reset email to user {user.id} failed, clearing token")
        user.clear_reset_token()
        db.commit()
        raise


def reset_password(db: Session, raw_token: str, new_password: str) -> tuple[User, str]:
    """Set a new password using an unexpired reset token."""
    user = (
        db.query(User)
        .filter(
            User.reset_password_token == hash_reset_token(raw_token),
            User.reset_password_expires > datetime.now(UTC),
        )
        .first()
    )
    if not user:
        raise ValidationFailed("Invalid or expired token")

    user.set_password(new_password)
    user.clear_reset_token()
    db.commit()
    db.refresh(user)
    return user, create_access_token(user.id)
