# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Broker, serialization and the beat schedule for the daily question job.
# The run time comes from the same DAILY_QUESTIONS_* settings the in-process
# scheduler uses; enable one or the other (DAILY_QUESTIONS_ENABLED).
# =============================================================================

from celery.schedules import crontab

from app.config import get_settings

settings = get_settings()

DAILY_QUESTIONS_QUEUE = "scheduled"


class CeleryConfig:
    """
    Applied with app.config_from_object("workers.config:CeleryConfig").
    """

    # Redis is both broker and result store
    broker_url = settings.REDIS_URL
    result_backend = settings.REDIS_URL
    broker_connection_retry_on_startup = True

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]

    # The job is idempotent per day, so redelivery after a crash is safe
    task_acks_late = True
    worker_prefetch_multiplier = 1

    # One run a day; keep its result until the next one
    result_expires = 24 * 3600

    task_time_limit = 120
    task_soft_time_limit = 90

    task_default_queue = "default"
    task_routes = {
        "workers.tasks.set_daily_questions": {"queue": DAILY_QUESTIONS_QUEUE},
    }

    timezone = "UTC"
    enable_utc = True

    beat_schedule = {
        "set-daily-questions": {
            "task": "workers.tasks.set_daily_questions",
            "schedule": crontab(
                hour=settings.DAILY_QUESTIONS_HOUR,
                minute=settings.DAILY_QUESTIONS_MINUTE,
            ),
            "kwargs": {"count": settings.DAILY_QUESTIONS_COUNT},
            "options": {"queue": DAILY_QUESTIONS_QUEUE},
        },
    }
