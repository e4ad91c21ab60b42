# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Mounted at /api/auth.
#
# Sign-up and sign-in proxy Supabase Auth so the frontend only ever talks to
# this API; /me and /verify work from the issued access token.
# =============================================================================

from fastapi import APIRouter, Depends, status

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, LoginRequest, RegisterRequest, TokenResponse
from app.dependencies import DatabaseDep, SettingsDep
from app.parsers import body_of
from core.models.user import UserProfile
from core.services.auth_service import AuthService
from core.services.user_service import UserService

router = APIRouter(tags=["Auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    settings: SettingsDep,
    payload: RegisterRequest = Depends(body_of(RegisterRequest)),
):
    """
    Create an account.

    Tokens are null when the project requires email confirmation first.
    """
    return AuthService(settings).register(payload.email, payload.password, payload.display_name)


@router.post("/login", response_model=TokenResponse)
def login(
    settings: SettingsDep,
    payload: LoginRequest = Depends(body_of(LoginRequest)),
):
    """Exchange email and password for access and refresh tokens."""
    return AuthService(settings).login(payload.email, payload.password)


@router.get("/me", response_model=UserProfile)
def get_current_user_info(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """Get the current authenticated user's profile."""
    return UserService(database).get_profile(user.id, email=user.email)


@router.get("/verify")
async def verify_token(user: AuthUser = Depends(get_current_user)) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
    }
