"""Celery tasks for object storage housekeeping."""

import logging

from src.celery_app import app as celery_app
from src.errors import StorageError
from src.services.storage import StorageService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=5)
def purge_storage_objects(self, keys: list[str]) -> dict:
    """Delete storage objects left behind by a cascade delete.

    Only the keys that still fail are retried, with exponential backoff.

    Returns:
        dict with the number of purged keys and the keys still pending
    """
    storage = StorageService()
    remaining = []

    for key in keys:
        try:
            storage.delete(key)
        except StorageError:
            remaining.append(key)

    purged = len(keys) - len(remaining)
    if remaining:
        if self.request.retries >= self.max_retries:
            logger.error(f"Giving up on {len(remaining)} orphaned storage objects: {remaining}")
        else:
            logger.warning(f"Purged {purged} objects, retrying {len(remaining)}")
            raise self.retry(args=[remaining], countdown=30 * 2**self.request.retries)

    logger.info(f"Purge complete: {purged} removed, {len(remaining)} abandoned")
    return {"purged": purged, "remaining": remaining}
