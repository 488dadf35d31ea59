"""Admin user management endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_press_kit_service, require_admin
from src.database import get_db
from src.errors import ConflictError, NotFoundError
from src.models.user import User
from src.schemas.auth import UserResponse
from src.schemas.common import DataResponse, ListEnvelope
from src.schemas.user import AdminUserUpdate
from src.services.auth import get_user_by_email, normalize_email
from src.services.press_kit_service import PressKitService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"User not found with id of {user_id}")
    return user


@router.get("", response_model=ListEnvelope[UserResponse])
def list_users(
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all users."""
    users = db.query(User).order_by(User.id).all()
    return ListEnvelope(count=len(users), data=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=DataResponse[UserResponse])
def get_user(
    user_id: int,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get one user by id."""
    return DataResponse(data=UserResponse.model_validate(get_user_or_404(db, user_id)))


@router.put("/{user_id}", response_model=DataResponse[UserResponse])
def update_user(
    user_id: int,
    user_data: AdminUserUpdate,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a user's email, name or admin flag."""
    user = get_user_or_404(db, user_id)

    if user_data.email is not None:
        email = normalize_email(user_data.email)
        if email != user.email:
            if get_user_by_email(db, email):
                raise ConflictError("Email already in use")
            user.email = email
    if user_data.first_name is not None:
        user.first_name = user_data.first_name.strip()
    if user_data.last_name is not None:
        user.last_name = user_data.last_name.strip()
    if user_data.is_admin is not None:
        user.is_admin = user_data.is_admin

    db.commit()
    db.refresh(user)
    return DataResponse(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=DataResponse[dict])
def delete_user(
    user_id: int,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    press_kits: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Delete a user together with their press kits and everything they uploaded."""
    user = get_user_or_404(db, user_id)

    for press_kit in press_kits.list_owned(user.id):
        press_kits.delete(press_kit)
    press_kits.delete_uploads_by(user.id)

    db.delete(user)
    db.commit()
    logger.info(f"Admin {admin.id} deleted user {user_id}")
    return DataResponse(data={})
