# =============================================================================
# core/services/base.py - Shared Supabase Table Access
# =============================================================================
# Services are constructed per request with the application's Database
# handle and talk to one primary table. Rows are plain dicts straight from
# PostgREST; routers validate them into response models.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from supabase import Client

from app.exceptions import NotFoundError
from lib.supabase_client import Database
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


class TableService:
    """
    Base class for services backed by a single Supabase table.

    Subclasses set `table` and `resource` (used in not-found messages).
    """

    table: str = ""
    resource: str = "record"

    def __init__(self, database: Database):
        self.database = database

    @property
    def client(self) -> Client:
        return self.database.client

    def fetch_by_id(self, row_id: str | UUID, table: str | None = None) -> dict[str, Any] | None:
        response = (
            self.client.table(table or self.table)
            .select("*")
            .eq("id", normalize_uuid(row_id))
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0] if rows else None

    def require(self, row_id: str | UUID) -> dict[str, Any]:
        """
        Fetch a row or fail.

        Raises:
            NotFoundError: If no row has this id
        """
        row = self.fetch_by_id(row_id)
        if row is None:
            raise NotFoundError(self.resource, normalize_uuid(row_id))
        return row

    def insert(self, data: dict[str, Any], table: str | None = None) -> dict[str, Any]:
        response = self.client.table(table or self.table).insert(data).execute()
        if not response.data:
            raise RuntimeError(f"Insert into {table or self.table} returned no data")
        return response.data[0]

    def update(self, row_id: str | UUID, data: dict[str, Any]) -> dict[str, Any]:
        """
        Update a row; an empty update just returns the current row.

        Raises:
            NotFoundError: If no row has this id
        """
        if not data:
            return self.require(row_id)
        response = (
            self.client.table(self.table)
            .update(data)
            .eq("id", normalize_uuid(row_id))
            .execute()
        )
        if not response.data:
            raise NotFoundError(self.resource, normalize_uuid(row_id))
        return response.data[0]

    def delete(self, row_id: str | UUID) -> None:
        """
        Raises:
            NotFoundError: If no row has this id
        """
        response = (
            self.client.table(self.table)
            .delete()
            .eq("id", normalize_uuid(row_id))
            .execute()
        )
        if not response.data:
            raise NotFoundError(self.resource, normalize_uuid(row_id))
        logger.info(f"Deleted {self.resource} {row_id}")
