# =============================================================================
# tests/test_lifecycle.py - Startup and Database Connector Tests
# =============================================================================
# Tests for:
# - Database: connect / probe / state signal / close
# - Application lifespan: fatal database failure, scheduler start and stop
#
# Run with: pytest tests/test_lifecycle.py -v
# =============================================================================

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.exceptions import DatabaseConnectionError, DatabaseNotConnectedError
from app.main import create_app
from lib.supabase_client import CONNECTED, DISCONNECTED, Database
from workers.scheduler import DailyQuestionScheduler


# =============================================================================
# Database Connector
# =============================================================================

class TestDatabase:
    """Tests for the Database connection handle."""

    @pytest.fixture
    def database(self) -> Database:
        return Database("https://test-project.supabase.co", "service-key", probe_table="topics")

    def test_starts_disconnected(self, database):
        assert database.state == DISCONNECTED
        assert database.is_connected is False

    def test_client_before_connect_raises(self, database):
        with pytest.raises(DatabaseNotConnectedError) as exc_info:
            database.client

        assert exc_info.value.status_code == 503

    @patch("lib.supabase_client.create_client")
    def test_connect_success(self, mock_create_client, database):
        supabase = MagicMock()
        mock_create_client.return_value = supabase

        asyncio.run(database.connect())

        mock_create_client.assert_called_once_with("https://test-project.supabase.co", "service-key")
        supabase.table.assert_called_with("topics")
        assert database.state == CONNECTED
        assert database.client is supabase

    @patch("lib.supabase_client.create_client")
    def test_connect_check_query_failure(self, mock_create_client, database):
        supabase = MagicMock()
        supabase.table.return_value.select.return_value.limit.return_value.execute.side_effect = (
            Exception("connection refused")
        )
        mock_create_client.return_value = supabase

        with pytest.raises(DatabaseConnectionError) as exc_info:
            database.connect_sync()

        assert "connection refused" in exc_info.value.message
        assert database.state == DISCONNECTED
        with pytest.raises(DatabaseNotConnectedError):
            database.client

    @patch("lib.supabase_client.create_client")
    def test_connect_bad_credentials(self, mock_create_client, database):
        mock_create_client.side_effect = Exception("Invalid API key")

        with pytest.raises(DatabaseConnectionError):
            database.connect_sync()

        assert database.state == DISCONNECTED

    @patch("lib.supabase_client.create_client")
    def test_ping_failure_flips_state(self, mock_create_client, database):
        supabase = MagicMock()
        mock_create_client.return_value = supabase
        database.connect_sync()

        supabase.table.return_value.select.return_value.limit.return_value.execute.side_effect = (
            Exception("timeout")
        )

        assert asyncio.run(database.ping()) is False
        assert database.state == DISCONNECTED

    def test_ping_without_client(self, database):
        assert asyncio.run(database.ping()) is False

    @patch("lib.supabase_client.create_client")
    def test_close(self, mock_create_client, database):
        mock_create_client.return_value = MagicMock()
        database.connect_sync()

        database.close()

        assert database.state == DISCONNECTED

    def test_from_settings(self, settings):
        database = Database.from_settings(settings)

        assert database.url == settings.SUPABASE_URL
        assert database.probe_table == settings.DB_PROBE_TABLE


# =============================================================================
# Application Lifespan
# =============================================================================

class TestLifespan:
    """Tests for startup and shutdown ordering."""

    @pytest.fixture
    def scheduler(self) -> MagicMock:
        return MagicMock(spec=DailyQuestionScheduler)

    def test_startup_connects_then_starts_scheduler(self, settings, database, scheduler):
        order = []
        database.connect.side_effect = lambda: order.append("connect")
        scheduler.start.side_effect = lambda: order.append("scheduler")

        app = create_app(settings=settings, database=database, scheduler=scheduler)
        with TestClient(app) as client:
            assert order == ["connect", "scheduler"]
            assert client.get("/health").status_code == 200

        scheduler.stop.assert_awaited_once()
        database.close.assert_called_once()

    def test_database_failure_aborts_startup(self, settings, database, scheduler):
        database.connect.side_effect = DatabaseConnectionError("connection refused")

        app = create_app(settings=settings, database=database, scheduler=scheduler)
        with pytest.raises(DatabaseConnectionError):
            with TestClient(app):
                pass

        scheduler.start.assert_not_called()

    def test_no_scheduler_when_disabled(self, settings, database):
        app = create_app(settings=settings, database=database)

        assert app.state.scheduler is None

        with TestClient(app) as client:
            assert client.get("/").status_code == 200

    def test_scheduler_built_when_enabled(self, database):
        enabled = Settings(DAILY_QUESTIONS_ENABLED=True, DAILY_QUESTIONS_HOUR=6, DAILY_QUESTIONS_COUNT=5)

        app = create_app(settings=enabled, database=database)

        assert isinstance(app.state.scheduler, DailyQuestionScheduler)
        assert app.state.scheduler.hour == 6
        assert app.state.scheduler.count == 5
        assert app.state.scheduler.database is database
