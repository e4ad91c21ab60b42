# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Database connector with a connected/disconnected signal
# - utils.py: Shared utilities (UUID normalization, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import CONNECTED, DISCONNECTED, Database
from lib.utils import iso_timestamp, normalize_uuid, utc_now

__all__ = [
    # Database
    "Database",
    "CONNECTED",
    "DISCONNECTED",
    # Utils
    "iso_timestamp",
    "normalize_uuid",
    "utc_now",
]
