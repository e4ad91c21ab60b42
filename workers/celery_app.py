# =============================================================================
# workers/celery_app.py - Celery Application
# =============================================================================
# Runs the daily question job outside the API process. Beat enqueues
# workers.tasks.set_daily_questions once a day; a worker picks it up and
# writes through its own Database handle.
#
# Usage:
#   celery -A workers.celery_app worker --beat -Q default,scheduled --loglevel=info
#   python scripts/start_worker.py
# =============================================================================

import logging
import time

from celery import Celery
from celery.signals import task_failure, task_postrun, task_prerun, worker_ready
from dotenv import load_dotenv

from app.config import get_settings

# Worker processes don't go through app.main, so .env is loaded here
load_dotenv()

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# task_id -> monotonic start time, for the duration in the completion log
_task_started: dict[str, float] = {}


def _redact(url: str) -> str:
    return url.split("@")[-1] if "@" in url else url


def create_celery_app(name: str = "codebuddy_worker") -> Celery:
    """
    Build the worker app from workers.config.CeleryConfig.

    Args:
        name: Celery main name, shown in worker banners and task ids
    """
    app = Celery(name, include=["workers.tasks"])
    app.config_from_object("workers.config:CeleryConfig")

    scheduled = ", ".join(app.conf.beat_schedule) or "none"
    logger.info(f"Celery app {name}: broker {_redact(app.conf.broker_url or '')}, beat entries: {scheduled}")
    return app


celery_app = create_celery_app()


# =============================================================================
# Worker Signals
# =============================================================================

@worker_ready.connect
def connect_database_on_ready(sender=None, **extra):
    """Connect at startup so an unreachable database is logged before the first job."""
    from workers.tasks import get_worker_database

    get_worker_database()
    logger.info("Worker database connection ready")


@task_prerun.connect
def record_task_start(sender=None, task_id=None, task=None, **extra):
    _task_started[task_id] = time.monotonic()
    logger.info(f"{task.name} [{task_id}] started")


@task_postrun.connect
def record_task_end(sender=None, task_id=None, task=None, state=None, **extra):
    started = _task_started.pop(task_id, None)
    elapsed = f" in {time.monotonic() - started:.2f}s" if started is not None else ""
    logger.info(f"{task.name} [{task_id}] {state}{elapsed}")


@task_failure.connect
def report_task_failure(sender=None, task_id=None, exception=None, **extra):
    logger.error(f"{sender.name} [{task_id}] failed: {exception}")
