"""Analytics service: recording public views and aggregating them."""

import logging
from collections import Counter
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.models.analytics import Analytics

logger = logging.getLogger(__name__)

DEFAULT_INTERACTION = ("main", "view")


class AnalyticsService:
    """Service for press kit visit analytics."""

    def __init__(self, db: Session):
        self.db = db

    def record_view(
        self,
        press_kit_id: int,
        visitor_ip: str | None = None,
        user_agent: str | None = None,
        referrer: str | None = None,
        interactions: list[tuple[str, str]] | None = None,
        country: str | None = None,
        city: str | None = None,
    ) -> Analytics:
        """Append one visit record. Records are never updated afterwards."""
        now = datetime.now(UTC)
        events = interactions or [DEFAULT_INTERACTION]

        record = Analytics(
            press_kit_id=press_kit_id,
            visitor_ip=visitor_ip,
            user_agent=user_agent,
            referrer=referrer or "",
            country=country,
            city=city,
            timestamp=now,
            interactions=[
                {"section": section, "action": action, "timestamp": now.isoformat()}
                for section, action in events
            ],
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def summarize(self, press_kit_id: int) -> dict:
        """Exact counters over every stored record of one press kit.

        Returns:
            {
                "total_views": int,
                "unique_visitors": int,   # distinct visitor IPs
                "section_views": {section: count},   # over all interactions
                "referrers": {referrer: count},      # empty referrers skipped
            }
        """
        records = self.db.query(Analytics).filter(Analytics.press_kit_id == press_kit_id).all()

        visitors = {record.visitor_ip for record in records}
        section_views = Counter(
            interaction.get("section")
            for record in records
            for interaction in (record.interactions or [])
            if interaction.get("section")
        )
        referrers = Counter(record.referrer for record in records if record.referrer)

        return {
            "total_views": len(records),
            "unique_visitors": len(visitors),
            "section_views": dict(section_views),
            "referrers": dict(referrers),
        }
