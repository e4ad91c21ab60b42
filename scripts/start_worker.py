#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a Celery worker with an embedded beat scheduler, so a single process
# runs the daily question job.
#
# Usage:
#   python scripts/start_worker.py
#
#   # Or use Celery CLI directly
#   celery -A workers.celery_app worker --beat -Q default,scheduled --loglevel=info
#
# Prerequisites:
#   - Redis must be running
#   - Environment variables must be set (.env file)
#   - DAILY_QUESTIONS_ENABLED=false on the API, so the job isn't scheduled twice
# =============================================================================

import logging

from workers.celery_app import celery_app

logger = logging.getLogger(__name__)


def main():
    """Start the Celery worker with beat."""
    logger.info("Starting CodeBuddy Celery worker (with beat)")
    celery_app.worker_main([
        "worker",
        "--beat",
        "--loglevel=info",
        "--queues=default,scheduled",
        "--concurrency=2",
    ])


if __name__ == "__main__":
    main()
