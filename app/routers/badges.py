# =============================================================================
# app/routers/badges.py - Badge Endpoints
# =============================================================================
# Mounted at /api/badges.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from app.dependencies import DatabaseDep
from core.models.badge import BadgeResponse, UserBadgeResponse
from core.services.badge_service import BadgeService

router = APIRouter(tags=["Badges"])


@router.get("", response_model=list[BadgeResponse])
def list_badges(database: DatabaseDep):
    """Every badge that can be earned, easiest first."""
    return BadgeService(database).list_badges()


@router.get("/me", response_model=list[UserBadgeResponse])
def list_my_badges(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    rows = BadgeService(database).list_user_badges(user.id)
    return [row for row in rows if row.get("badge")]
