"""Celery tasks for press kit analytics."""

import logging

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3, default_retry_delay=10)
def record_press_kit_view(
    self,
    press_kit_id: int,
    visitor_ip: str | None = None,
    user_agent: str | None = None,
    referrer: str | None = None,
) -> int | None:
    """Append one view record for a public press kit visit.

    Returns the analytics row id.
    """
    db: Session = SessionLocal()
    try:
        record = AnalyticsService(db).record_view(
            press_kit_id,
            visitor_ip=visitor_ip,
            user_agent=user_agent,
            referrer=referrer,
        )
        return record.id
    except Exception as e:
        db.rollback()
        logger.error(f"Recording view for press kit {press_kit_id} failed: {e}")
        raise self.retry(exc=e) from e
    finally:
        db.close()
