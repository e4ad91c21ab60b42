# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeSupabase: a chainable stand-in for the Supabase query builder
# - make_client: builds a TestClient around an app with injected collaborators
# =============================================================================

import os
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds a module-level app, which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-tokens")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DAILY_QUESTIONS_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import Settings
from app.main import create_app
from lib.supabase_client import Database

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]


# =============================================================================
# Supabase Fake
# =============================================================================

class FakeQuery:
    """Records builder calls; execute() answers from the owning FakeSupabase."""

    def __init__(self, supabase: "FakeSupabase", table: str):
        self.supabase = supabase
        self.table = table
        self.ops: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name: str):
        def op(*args, **kwargs):
            self.ops.append((name, args, kwargs))
            return self
        return op

    def op_names(self) -> list[str]:
        return [name for name, _, _ in self.ops]

    def execute(self):
        self.supabase.executed.append(self)
        queue = self.supabase.responses.get(self.table, [[]])
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return SimpleNamespace(data=result)


class FakeSupabase:
    """
    Queue responses per table; the last queued response repeats.

    Example:
        fake = FakeSupabase({"topics": [[{"id": "t1"}]]})
        fake.table("topics").select("*").execute().data  # [{"id": "t1"}]
    """

    def __init__(self, responses: dict[str, list[Any]] | None = None):
        self.responses = responses or {}
        self.executed: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def queries_for(self, table: str) -> list[FakeQuery]:
        return [q for q in self.executed if q.table == table]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(ENVIRONMENT="development", DAILY_QUESTIONS_ENABLED=False)


@pytest.fixture
def production_settings() -> Settings:
    return Settings(ENVIRONMENT="production", DAILY_QUESTIONS_ENABLED=False)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def database(fake_supabase) -> MagicMock:
    """A connected Database whose client is the FakeSupabase."""
    db = MagicMock(spec=Database)
    db.state = "connected"
    db.is_connected = True
    db.client = fake_supabase
    return db


@pytest.fixture
def make_client(settings, database):
    """
    Build a TestClient without running the lifespan.

    Server errors are rendered as responses instead of re-raised.
    """

    def _make(settings_override=None, database_override=None, route_collections=None) -> TestClient:
        app = create_app(
            settings=settings_override or settings,
            database=database_override or database,
            route_collections=route_collections,
        )
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def user_id() -> str:
    return str(uuid.uuid4())


def make_token(sub: str, email: str = "ada@example.com", expires_in: int = 3600) -> str:
    now = datetime.now(timezone.utc)
    return jwt.encode(
        {
            "sub": sub,
            "email": email,
            "aud": "authenticated",
            "role": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        },
        JWT_SECRET,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers(user_id) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}
