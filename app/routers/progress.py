# =============================================================================
# app/routers/progress.py - Progress Endpoints
# =============================================================================
# Mounted at /api/progress. Always scoped to the authenticated user.
# =============================================================================

from fastapi import APIRouter, Depends, status

from app.auth import AuthUser, get_current_user
from app.dependencies import DatabaseDep
from app.parsers import body_of
from core.models.progress import ProgressCreate, ProgressCreateResponse, ProgressRecord, ProgressSummary
from core.services.badge_service import BadgeService
from core.services.progress_service import ProgressService

router = APIRouter(tags=["Progress"])


@router.get("", response_model=list[ProgressRecord])
def list_progress(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    """All of the user's attempts, newest first."""
    return ProgressService(database).list_progress(user.id)


@router.post("", response_model=ProgressCreateResponse, status_code=status.HTTP_201_CREATED)
def record_attempt(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: ProgressCreate = Depends(body_of(ProgressCreate)),
):
    """
    Record an attempt at a question.

    Also awards any badges the new attempt unlocks and returns them.
    """
    record = ProgressService(database).record_attempt(user.id, payload)
    awarded = BadgeService(database).award_eligible(user.id)
    return ProgressCreateResponse(record=record, awarded_badges=awarded)


@router.get("/summary", response_model=ProgressSummary)
def get_summary(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    return ProgressService(database).summary(user.id)
