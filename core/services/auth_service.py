# =============================================================================
# core/services/auth_service.py - Supabase Auth Password Flow
# =============================================================================
# Sign-up and sign-in go through Supabase Auth with the anon key. Each call
# gets its own client: signing in stores the session on the client, and the
# shared service-role client must never carry an end user's session.
# =============================================================================

import logging
from typing import Any

from supabase import Client, create_client

from app.config import Settings
from app.exceptions import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)


def _token_payload(response: Any) -> dict[str, Any]:
    user = response.user
    session = response.session
    return {
        "user_id": user.id,
        "email": user.email,
        "access_token": session.access_token if session else None,
        "refresh_token": session.refresh_token if session else None,
        "expires_in": session.expires_in if session else None,
    }


class AuthService:
    """
    Example:
        tokens = AuthService(settings).login("ada@example.com", "secret123")
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _anon_client(self) -> Client:
        return create_client(self.settings.SUPABASE_URL, self.settings.SUPABASE_ANON_KEY)

    def register(self, email: str, password: str, display_name: str | None = None) -> dict[str, Any]:
        """
        Create a Supabase Auth user.

        Tokens are None when the project requires email confirmation.

        Raises:
            ConflictError: If Supabase rejects the sign-up (e.g. email taken)
        """
        options = {"data": {"display_name": display_name}} if display_name else {}
        try:
            response = self._anon_client().auth.sign_up(
                {"email": email, "password": password, "options": options}
            )
        except Exception as e:
            logger.warning(f"Sign-up rejected for {email}: {e}")
            raise ConflictError(f"Registration failed: {e}", details={"email": email})

        if response.user is None:
            raise ConflictError("Registration failed: no user returned", details={"email": email})

        logger.info(f"Registered user {response.user.id}")
        return _token_payload(response)

    def login(self, email: str, password: str) -> dict[str, Any]:
        """
        Raises:
            AuthenticationError: If the credentials are rejected
        """
        try:
            response = self._anon_client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.info(f"Sign-in failed for {email}: {e}")
            raise AuthenticationError()

        if response.user is None or response.session is None:
            raise AuthenticationError()
        return _token_payload(response)
