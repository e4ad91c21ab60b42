# =============================================================================
# app/routers/questions.py - Question Endpoints
# =============================================================================
# Mounted at /api/questions. Reading is public; writing requires
# authentication. Reference answers are never returned.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.dependencies import DatabaseDep
from app.parsers import body_of
from core.models.question import DailyQuestionsResponse, QuestionCreate, QuestionResponse, QuestionUpdate
from core.models.topic import Difficulty
from core.services.daily_question_service import DailyQuestionService
from core.services.question_service import QuestionService
from lib.utils import utc_now

router = APIRouter(tags=["Questions"])

QuestionId = Annotated[UUID, Path(description="Question UUID")]


@router.get("", response_model=list[QuestionResponse])
def list_questions(
    database: DatabaseDep,
    topic_id: Annotated[UUID | None, Query(description="Only questions in this topic")] = None,
    difficulty: Annotated[Difficulty | None, Query(description="Filter by difficulty")] = None,
):
    return QuestionService(database).list_questions(topic_id=topic_id, difficulty=difficulty)


@router.get("/daily", response_model=DailyQuestionsResponse)
def get_daily_questions(database: DatabaseDep):
    """
    Today's daily questions (UTC).

    Empty until the daily job has run for today.
    """
    today = utc_now().date()
    return DailyQuestionsResponse(
        date=today,
        questions=DailyQuestionService(database).get_daily_questions(today),
    )


@router.get("/{question_id}", response_model=QuestionResponse)
def get_question(question_id: QuestionId, database: DatabaseDep):
    return QuestionService(database).require(question_id)


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: QuestionCreate = Depends(body_of(QuestionCreate)),
):
    """Create a question. Returns 404 if the topic doesn't exist."""
    return QuestionService(database).create_question(payload)


@router.put("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: QuestionId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: QuestionUpdate = Depends(body_of(QuestionUpdate)),
):
    return QuestionService(database).update_question(str(question_id), payload)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    question_id: QuestionId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    QuestionService(database).delete(question_id)
