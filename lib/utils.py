# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        topic_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        topic_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp() -> str:
    """
    Current UTC time as an ISO-8601 string with millisecond precision.

    Example:
        iso_timestamp()  # "2024-01-15T10:30:00.123Z"
    """
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
