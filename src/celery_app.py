"""Celery application configuration."""

from celery import Celery

from src.config import get_settings

settings = get_settings()

app = Celery(
    "press_kits",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.analytics", "src.tasks.storage"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_time_limit=120,  # 2 minutes max per task
    task_soft_time_limit=90,
    task_ignore_result=True,  # fire-and-forget: nobody polls these results
    worker_prefetch_multiplier=1,
    broker_connection_timeout=2,
    task_publish_retry_policy={"max_retries": 1, "interval_start": 0, "interval_step": 0.2},
)
