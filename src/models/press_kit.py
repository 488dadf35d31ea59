"""Press kit model."""

from copy import deepcopy
from datetime import UTC, datetime
from typing import Any

from slugify import slugify
from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

DEFAULT_CUSTOMIZATION: dict[str, Any] = {
    "colors": {
        "primary": "#1976d2",
        "secondary": "#9c27b0",
        "text": "#212121",
        "background": "#ffffff",
    },
    "fonts": {
        "heading": "Roboto",
        "body": "Roboto",
    },
}

# Fields a caller may change through apply_changes(); owner_id is immutable.
EDITABLE_FIELDS = frozenset(
    {
        "title",
        "template",
        "customization",
        "is_published",
        "is_password_protected",
        "access_password_hash",
        "sections",
    }
)


def make_slug(title: str) -> str:
    """Derive the URL slug for a title: lowercase, ASCII, hyphen separated."""
    return slugify(title, lowercase=True)


def default_customization() -> dict[str, Any]:
    return deepcopy(DEFAULT_CUSTOMIZATION)


def merge_customization(
    current: dict[str, Any] | None, changes: dict[str, Any]
) -> dict[str, Any]:
    """Overlay sent styling keys on the stored styling, group by group."""
    merged = default_customization()
    for source in (current or {}, changes):
        for group, values in source.items():
            if isinstance(values, dict) and isinstance(merged.get(group), dict):
                merged[group].update(values)
            else:
                merged[group] = deepcopy(values)
    return merged


class PressKit(Base, TimestampMixin):
    """A user-owned, publishable microsite made of ordered sections."""

    __tablename__ = "press_kits"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    template = Column(String(100), nullable=False)
    customization = Column(JSON, nullable=False, default=default_customization)
    is_published = Column(Boolean, nullable=False, default=False)
    is_password_protected = Column(Boolean, nullable=False, default=False)
    access_password_hash = Column(String(255), nullable=True)
    sections = Column(JSON, nullable=False, default=list)  # list of section dicts
    last_published_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    owner = relationship("User")

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Assign editable fields, then recompute the derived ones.

        The slug follows the title whenever the title is written, and
        ``last_published_at`` is stamped only on a false -> true transition of
        ``is_published``. Unpublishing leaves the stamp alone.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")

        was_published = bool(self.is_published)
        for field, value in changes.items():
            setattr(self, field, value)

        if "title" in changes:
            self.slug = make_slug(self.title)
        if self.is_published and not was_published:
            self.last_published_at = datetime.now(UTC)
