"""Pydantic schemas for API requests and responses."""

from src.schemas.analytics import AnalyticsSummary
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.common import DataResponse, ListEnvelope, MessageResponse
from src.schemas.media import MediaResponse
from src.schemas.press_kit import (
    PressKitCreate,
    PressKitDetailResponse,
    PressKitResponse,
    PressKitUpdate,
    Section,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "DataResponse",
    "ListEnvelope",
    "MessageResponse",
    "PressKitCreate",
    "PressKitUpdate",
    "PressKitResponse",
    "PressKitDetailResponse",
    "Section",
    "MediaResponse",
    "AnalyticsSummary",
]
