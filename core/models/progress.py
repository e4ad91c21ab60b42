# =============================================================================
# core/models/progress.py - Progress Schemas
# =============================================================================
# One progress row per answered question attempt.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from .badge import BadgeResponse


class ProgressCreate(BaseModel):
    """
    Record an attempt at a question.

    Example:
        {"question_id": "550e8400-...", "is_correct": true}
    """
    question_id: UUID
    is_correct: bool


class ProgressRecord(BaseModel):
    id: UUID
    user_id: UUID
    question_id: UUID
    topic_id: UUID | None = None
    is_correct: bool
    created_at: datetime | None = None


class ProgressCreateResponse(BaseModel):
    """The stored attempt plus any badges it unlocked."""
    record: ProgressRecord
    awarded_badges: list[BadgeResponse] = Field(default_factory=list)


class TopicProgress(BaseModel):
    attempts: int = 0
    correct: int = 0


class ProgressSummary(BaseModel):
    """
    Aggregate stats over all of a user's attempts.

    Example:
        {
            "total_attempts": 12,
            "correct_answers": 9,
            "accuracy": 75.0,
            "questions_solved": 8,
            "topics_practiced": 3,
            "by_topic": {"550e...": {"attempts": 5, "correct": 4}}
        }
    """
    total_attempts: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    accuracy: float = Field(default=0.0, ge=0.0, le=100.0)

    # Distinct questions answered correctly at least once
    questions_solved: int = Field(default=0, ge=0)

    topics_practiced: int = Field(default=0, ge=0)
    by_topic: dict[str, TopicProgress] = Field(default_factory=dict)
