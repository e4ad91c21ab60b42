# =============================================================================
# core/models/question.py - Question Schemas
# =============================================================================
# Practice questions belong to a topic. A handful of them are picked every
# day as the "daily questions" (see core/services/daily_question_service.py).
# =============================================================================

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from .topic import Difficulty


class QuestionCreate(BaseModel):
    """
    Schema for creating a question.

    Example:
        {
            "topic_id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "Reverse a string",
            "prompt": "Write a function that reverses a string recursively.",
            "difficulty": "beginner"
        }
    """

    topic_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    prompt: str = Field(..., min_length=1, max_length=10000)
    difficulty: Difficulty = Field(default=Difficulty.BEGINNER)

    # Reference answer; never returned by list endpoints
    answer: str | None = Field(default=None, max_length=10000)


class QuestionUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    prompt: str | None = Field(default=None, min_length=1, max_length=10000)
    difficulty: Difficulty | None = None
    answer: str | None = Field(default=None, max_length=10000)


class QuestionResponse(BaseModel):
    id: UUID
    topic_id: UUID
    title: str
    prompt: str
    difficulty: Difficulty
    created_at: datetime | None = None


class DailyQuestionsResponse(BaseModel):
    """The questions picked for one day."""
    date: date
    questions: list[QuestionResponse] = Field(default_factory=list)
