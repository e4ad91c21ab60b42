# =============================================================================
# app/routers/users.py - User Profile Endpoints
# =============================================================================
# Mounted at /api/users. All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import DatabaseDep
from app.exceptions import NotFoundError
from app.parsers import body_of
from core.models.user import UserProfile, UserUpdate
from core.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.get("/me", response_model=UserProfile)
def get_my_profile(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    return UserService(database).get_profile(user.id, email=user.email)


@router.put("/me", response_model=UserProfile)
def update_my_profile(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: UserUpdate = Depends(body_of(UserUpdate)),
):
    """Update display name, avatar or bio. Omitted fields are left untouched."""
    return UserService(database).update_profile(user.id, payload, email=user.email)


@router.get("/{user_id}", response_model=UserProfile)
def get_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    profile = UserService(database).fetch_by_id(user_id)
    if profile is None:
        raise NotFoundError("user", str(user_id))
    return profile
