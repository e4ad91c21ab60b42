# =============================================================================
# app/routers/voice_interview.py - Voice Interview Endpoints
# =============================================================================
# Mounted at /api/voice-interview. Speech is handled in the browser; these
# endpoints keep the interview record and its transcript.
#
# Flow:
#   POST /sessions                 -> start (status in_progress)
#   POST /sessions/{id}/answers    -> append a question/answer turn
#   POST /sessions/{id}/complete   -> close (status completed)
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from app.dependencies import DatabaseDep
from app.parsers import body_of
from core.models.interview import InterviewCreate, InterviewResponse, InterviewTurn
from core.services.interview_service import InterviewService

router = APIRouter(tags=["Voice Interview"])

InterviewId = Annotated[UUID, Path(description="Interview UUID")]


@router.post("/sessions", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
def start_interview(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: InterviewCreate = Depends(body_of(InterviewCreate)),
):
    return InterviewService(database).start(user.id, payload.topic_id)


@router.get("/sessions", response_model=list[InterviewResponse])
def list_interviews(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    return InterviewService(database).list_for_user(user.id)


@router.get("/sessions/{interview_id}", response_model=InterviewResponse)
def get_interview(
    interview_id: InterviewId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    return InterviewService(database).get_owned(interview_id, user.id)


@router.post("/sessions/{interview_id}/answers", response_model=InterviewResponse)
def add_answer(
    interview_id: InterviewId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: InterviewTurn = Depends(body_of(InterviewTurn)),
):
    """Append a turn. Returns 409 once the interview is completed."""
    return InterviewService(database).add_turn(interview_id, user.id, payload)


@router.post("/sessions/{interview_id}/complete", response_model=InterviewResponse)
def complete_interview(
    interview_id: InterviewId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    return InterviewService(database).complete(interview_id, user.id)
