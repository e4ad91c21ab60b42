# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CodeBuddy API:
# - test_gateway.py: Pipeline order, diagnostics, CORS, 404 and 500
# - test_body_parsing.py: JSON / nested URL-encoded bodies and size limits
# - test_lifecycle.py: Database connector and application lifespan
# - test_daily_questions.py: Daily question service and scheduler
# - test_routes.py: Mounted route collections against a fake Supabase
# - test_progress.py, test_models.py, test_config.py, test_workers.py
#
# Run tests with: pytest
# =============================================================================
