# =============================================================================
# app/auth/dependencies.py - Bearer Token Verification
# =============================================================================
# Access tokens are issued by Supabase Auth. Two signing schemes are in use:
#
#   asymmetric (ES256/RS256)  key looked up by "kid" in the project's JWKS
#   HS256                     shared SUPABASE_JWT_SECRET (older projects)
#
# Verification never touches the database; the user comes from the claims.
# =============================================================================

import logging
import time
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import Settings
from app.dependencies import SettingsDep

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()

TOKEN_AUDIENCE = "authenticated"


class JWKSCache:
    """
    Signing keys per Supabase project, refreshed at most once per `ttl`.

    A failed refresh keeps serving the previous keys and is not retried for
    `retry_after` seconds. Fetches block, so callers run off the event loop.
    """

    def __init__(self, ttl: float = 3600, retry_after: float = 30):
        self.ttl = ttl
        self.retry_after = retry_after
        self._keys: dict[str, tuple[float, list[dict]]] = {}
        self._failed_at: dict[str, float] = {}

    def keys_for(self, supabase_url: str) -> list[dict]:
        now = time.monotonic()
        fetched_at, keys = self._keys.get(supabase_url, (0.0, []))
        if keys and now - fetched_at < self.ttl:
            return keys
        failed_at = self._failed_at.get(supabase_url)
        if failed_at is not None and now - failed_at < self.retry_after:
            return keys

        jwks_url = f"{supabase_url.rstrip('/')}/auth/v1/.well-known/jwks.json"
        try:
            response = httpx.get(jwks_url, timeout=10)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"JWKS refresh from {jwks_url} failed: {e}")
            self._failed_at[supabase_url] = time.monotonic()
            return keys

        keys = response.json().get("keys", [])
        self._keys[supabase_url] = (time.monotonic(), keys)
        self._failed_at.pop(supabase_url, None)
        logger.debug(f"Loaded {len(keys)} signing key(s) from {jwks_url}")
        return keys


jwks_cache = JWKSCache()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_signing_key(token: str, settings: Settings) -> tuple[str | dict, str]:
    """
    Pick the verification key and algorithm from the token header.

    Unknown or unreadable headers fall back to the HS256 secret, which then
    fails verification with a normal JWTError.
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    algorithm = header.get("alg", "HS256")
    kid = header.get("kid")
    if algorithm != "HS256" and kid:
        key = next((k for k in jwks_cache.keys_for(settings.SUPABASE_URL) if k.get("kid") == kid), None)
        if key is not None:
            return key, algorithm
        logger.warning(f"No JWKS key with kid={kid} ({algorithm}); trying the HS256 secret")

    return settings.SUPABASE_JWT_SECRET, "HS256"


def decode_access_token(token: str, settings: Settings) -> AuthUser:
    """
    Verify a Supabase access token and extract the user.

    Raises:
        HTTPException: 401 if the token is invalid, expired or has no user ID
    """
    key, algorithm = resolve_signing_key(token, settings)
    try:
        claims = jwt.decode(token, key, algorithms=[algorithm], audience=TOKEN_AUDIENCE)
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    subject = claims.get("sub")
    if not subject:
        raise _unauthorized("Invalid token: missing user ID")
    try:
        user_id = UUID(subject)
    except ValueError:
        raise _unauthorized("Invalid token: malformed user ID")

    return AuthUser(id=user_id, email=claims.get("email"), role=claims.get("role"))


def get_current_user(
    settings: SettingsDep,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> AuthUser:
    """
    The caller, from the Authorization: Bearer header.

    A plain function so FastAPI runs it in the threadpool; a JWKS refresh
    is a blocking HTTP call.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    user = decode_access_token(credentials.credentials, settings)
    logger.debug(f"Authenticated user: {user.id}")
    return user
