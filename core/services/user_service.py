# =============================================================================
# core/services/user_service.py - User Profiles
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from core.models.user import UserUpdate
from lib.utils import normalize_uuid, utc_now

from .base import TableService

logger = logging.getLogger(__name__)


class UserService(TableService):
    table = "users"
    resource = "user"

    def get_profile(self, user_id: UUID | str, email: str | None = None) -> dict[str, Any]:
        """
        Profile row for the user, or a bare one built from the token.

        A user can exist in Supabase Auth before the trigger that creates
        their public.users row has run.
        """
        profile = self.fetch_by_id(user_id)
        if profile:
            return profile
        logger.debug(f"No profile row yet for {user_id}")
        return {"id": normalize_uuid(user_id), "email": email}

    def update_profile(self, user_id: UUID | str, payload: UserUpdate, email: str | None = None) -> dict[str, Any]:
        """Update the caller's profile, creating the row if it doesn't exist yet."""
        changes = payload.model_dump(exclude_unset=True)
        row = {"id": normalize_uuid(user_id), **changes, "updated_at": utc_now().isoformat()}
        if email:
            row["email"] = email
        response = self.client.table(self.table).upsert(row).execute()
        logger.info(f"Updated profile {user_id}: {sorted(changes)}")
        return response.data[0] if response.data else row
