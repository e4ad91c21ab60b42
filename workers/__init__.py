# =============================================================================
# workers/ - Background Work
# =============================================================================
# - scheduler.py: in-process daily question loop started by the API lifespan
# - celery_app.py: Celery application configuration
# - tasks.py: Celery task definitions (daily questions, healthcheck)
# - config.py: Worker and beat settings
#
# Usage:
#   celery -A workers.celery_app worker -Q default,scheduled --loglevel=info
#   celery -A workers.celery_app beat --loglevel=info
#
# The API imports workers.scheduler directly; importing this package does
# not create the Celery app.
# =============================================================================
