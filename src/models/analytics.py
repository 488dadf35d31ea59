"""Analytics model."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, func

from src.database import Base
from src.models.mixins import TimestampMixin


class Analytics(Base, TimestampMixin):
    """One public visit to a press kit. Append-only."""

    __tablename__ = "analytics"

    id = Column(Integer, primary_key=True, index=True)
    press_kit_id = Column(Integer, ForeignKey("press_kits.id"), nullable=False, index=True)
    visitor_ip = Column(String(45), nullable=True)
    user_agent = Column(String(512), nullable=True)
    referrer = Column(String(1024), nullable=True)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    # [{"section": "main", "action": "view", "timestamp": "..."}]
    interactions = Column(JSON, nullable=False, default=list)
