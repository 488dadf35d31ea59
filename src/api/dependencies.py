"""FastAPI dependencies for authentication, authorization and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import ForbiddenError, NotFoundError, UnauthorizedError
from src.models.press_kit import PressKit
from src.models.user import User
from src.services.analytics_service import AnalyticsService
from src.services.auth import verify_token
from src.services.press_kit_service import PressKitService
from src.services.storage import StorageService

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Not authorized, no token")

    user_id = verify_token(credentials.credentials)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthorizedError("Not authorized, user not found")

    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Allow only administrators through."""
    if not current_user.is_admin:
        raise ForbiddenError("Not authorized as an admin")
    return current_user


def get_owned_press_kit(
    press_kit_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PressKit:
    """Load a press kit the caller may modify (owner or admin).

    The loaded kit is handed to the route, so the handler never looks it up
    a second time.
    """
    press_kit = db.query(PressKit).filter(PressKit.id == press_kit_id).first()
    if press_kit is None:
        raise NotFoundError(f"Press kit not found with id of {press_kit_id}")

    if press_kit.owner_id != current_user.id and not current_user.is_admin:
        raise ForbiddenError("User not authorized to access this press kit")

    return press_kit


def get_storage_service() -> StorageService:
    """Get object storage client."""
    return StorageService()


def get_press_kit_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[StorageService, Depends(get_storage_service)],
) -> PressKitService:
    """Get press kit service with dependencies."""
    return PressKitService(db, storage)


def get_analytics_service(
    db: Annotated[Session, Depends(get_db)],
) -> AnalyticsService:
    """Get analytics service with dependencies."""
    return AnalyticsService(db)
