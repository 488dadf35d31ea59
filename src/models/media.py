"""Media model."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Media(Base, TimestampMixin):
    """An uploaded asset that belongs to one press kit."""

    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    press_kit_id = Column(Integer, ForeignKey("press_kits.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # 'audio' | 'video' | 'image' | 'document'
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String(1024), nullable=False)
    thumbnail_url = Column(String(1024), nullable=True)
    file_size = Column(Integer, nullable=True)  # bytes
    duration = Column(Float, nullable=True)  # seconds, audio/video only
    storage_key = Column(String(512), nullable=True)
    extra = Column("metadata", JSON, nullable=True)

    # Relationships
    press_kit = relationship("PressKit")
