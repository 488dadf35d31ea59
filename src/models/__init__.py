"""SQLAlchemy models."""

from src.models.analytics import Analytics
from src.models.media import Media
from src.models.press_kit import PressKit
from src.models.user import User

__all__ = [
    "User",
    "PressKit",
    "Media",
    "Analytics",
]
