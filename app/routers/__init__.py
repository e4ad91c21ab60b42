# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Diagnostic endpoints (/, /health, /api/auth/test)
# - users.py: User profiles
# - topics.py: Topic CRUD
# - questions.py: Question CRUD and daily questions
# - progress.py: Attempts, summary and badge awarding
# - badges.py: Badge catalogue and earned badges
# - voice_interview.py: Mock interview sessions
#
# The auth collection lives in app/auth/routes.py.
# Each collection is mounted by the gateway under its prefix, in the order
# listed in ROUTE_COLLECTIONS.
# =============================================================================

from app.auth import routes as auth

from . import badges, health, progress, questions, topics, users, voice_interview

ROUTE_COLLECTIONS = [
    ("/api/auth", auth.router),
    ("/api/users", users.router),
    ("/api/topics", topics.router),
    ("/api/questions", questions.router),
    ("/api/progress", progress.router),
    ("/api/badges", badges.router),
    ("/api/voice-interview", voice_interview.router),
]

__all__ = [
    "ROUTE_COLLECTIONS",
    "auth",
    "badges",
    "health",
    "progress",
    "questions",
    "topics",
    "users",
    "voice_interview",
]
