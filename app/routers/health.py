# =============================================================================
# app/routers/health.py - Diagnostic Endpoints
# =============================================================================
# Fixed endpoints for humans, monitors and load balancers. They never touch
# the database; they only report the connector's state signal.
# =============================================================================

from fastapi import APIRouter, Request
from pydantic import BaseModel

from lib.utils import iso_timestamp

router = APIRouter(tags=["Health"])


# =============================================================================
# Response Models
# =============================================================================

class RootResponse(BaseModel):
    """API banner."""
    message: str
    timestamp: str
    database: str
    environment: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: str
    routes: list[str]


class AuthTestResponse(BaseModel):
    success: bool
    message: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=RootResponse)
async def root(request: Request):
    """
    Root endpoint - returns API banner and database state.
    """
    return RootResponse(
        message="CodeBuddy API is running...",
        timestamp=iso_timestamp(),
        database=request.app.state.database.state,
        environment=request.app.state.settings.ENVIRONMENT,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint.

    Always 200 while the process is serving; the database field tells
    monitors whether the backend is usable.
    """
    return HealthResponse(
        status="OK",
        database=request.app.state.database.state,
        timestamp=iso_timestamp(),
        routes=list(request.app.state.route_names),
    )


@router.get("/api/auth/test", response_model=AuthTestResponse)
async def auth_test():
    """Probe that answers without going through the auth collection."""
    return AuthTestResponse(
        success=True,
        message="Auth test route is working!",
        timestamp=iso_timestamp(),
    )
