# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The startup routine stores them on app.state; handlers receive them here.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from lib.supabase_client import Database


def get_database(request: Request) -> Database:
    """Get the Database handle owned by this application."""
    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
