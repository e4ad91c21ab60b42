# =============================================================================
# lib/supabase_client.py - Supabase Database Connector
# =============================================================================
# Wraps the Supabase client behind an explicitly constructed connector.
# One Database instance is created by the startup routine and handed to
# everything that needs it (routes via app.state, the scheduler, workers).
#
# Usage:
#   database = Database.from_settings(settings)
#   await database.connect()
#   rows = database.client.table("topics").select("*").execute().data
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from supabase import Client, create_client

from app.exceptions import DatabaseConnectionError, DatabaseNotConnectedError

if TYPE_CHECKING:
    from app.config import Settings

logger = logging.getLogger(__name__)

CONNECTED = "connected"
DISCONNECTED = "disconnected"


class Database:
    """
    Supabase connection handle with a queryable connection state.

    Supabase speaks HTTP, so "connected" means a client exists and the last
    probe query against DB_PROBE_TABLE succeeded.

    Example:
        database = Database(url, service_key)
        await database.connect()
        database.state  # "connected"
    """

    def __init__(self, url: str, key: str, probe_table: str = "topics"):
        self.url = url
        self._key = key
        self.probe_table = probe_table
        self._client: Client | None = None
        self._state = DISCONNECTED

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        return cls(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY,
            probe_table=settings.DB_PROBE_TABLE,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> str:
        """Either "connected" or "disconnected"."""
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == CONNECTED

    @property
    def client(self) -> Client:
        """
        The live Supabase client.

        Raises:
            DatabaseNotConnectedError: If connect() has not succeeded yet
        """
        if self._client is None or not self.is_connected:
            raise DatabaseNotConnectedError()
        return self._client

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _probe(self, client: Client) -> None:
        client.table(self.probe_table).select("id").limit(1).execute()

    def connect_sync(self) -> None:
        """
        Create the client and verify it can query the database.

        Raises:
            DatabaseConnectionError: If the client can't be created or the
                probe query fails
        """
        try:
            client = create_client(self.url, self._key)
            self._probe(client)
        except Exception as e:
            self._client = None
            self._state = DISCONNECTED
            raise DatabaseConnectionError(str(e)) from e

        self._client = client
        self._state = CONNECTED
        logger.info(f"Database connected: {self.url}")

    async def connect(self) -> None:
        """Async wrapper around connect_sync(); the client itself is blocking."""
        await asyncio.to_thread(self.connect_sync)

    async def ping(self) -> bool:
        """
        Re-probe the database and update the state signal.

        Returns:
            True if the probe succeeded
        """
        if self._client is None:
            return False
        try:
            await asyncio.to_thread(self._probe, self._client)
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            self._state = DISCONNECTED
            return False
        self._state = CONNECTED
        return True

    def close(self) -> None:
        if self._client is not None:
            logger.info("Database connection closed")
        self._client = None
        self._state = DISCONNECTED
