# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Tasks:
# - set_daily_questions: pick today's daily questions (scheduled by beat)
# - healthcheck: verify a worker is consuming
# =============================================================================

import logging
from datetime import date
from typing import Any

from celery import shared_task

from app.config import get_settings
from core.services.daily_question_service import DailyQuestionService
from lib.supabase_client import Database

logger = logging.getLogger(__name__)

# One connected handle per worker process
_database: Database | None = None


def get_worker_database() -> Database:
    """
    Connect lazily on first use in this worker process.

    Raises:
        DatabaseConnectionError: If the database can't be reached
    """
    global _database
    if _database is None or not _database.is_connected:
        database = Database.from_settings(get_settings())
        database.connect_sync()
        _database = database
    return _database


@shared_task(bind=True, name="workers.tasks.set_daily_questions", max_retries=3, default_retry_delay=60)
def set_daily_questions(self, day: str | None = None, count: int = 3) -> dict[str, Any]:
    """
    Pick the daily questions for `day` (ISO date, default today UTC).

    Retries on failure; the job is idempotent per day so a retry after a
    partial failure can't double-insert.

    Returns:
        {"date": "...", "question_ids": [...]}
    """
    target = date.fromisoformat(day) if day else None
    try:
        rows = DailyQuestionService(get_worker_database()).set_daily_questions(target, count=count)
    except Exception as e:
        logger.error(f"set_daily_questions failed: {e}")
        raise self.retry(exc=e)

    return {
        "date": rows[0]["date"] if rows else (day or ""),
        "question_ids": [str(row["question_id"]) for row in rows],
    }


@shared_task(name="workers.tasks.healthcheck")
def healthcheck() -> str:
    """
    Usage:
        from workers.tasks import healthcheck
        healthcheck.delay().get(timeout=5)  # "OK"
    """
    return "OK"
