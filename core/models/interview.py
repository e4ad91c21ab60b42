# =============================================================================
# core/models/interview.py - Voice Interview Schemas
# =============================================================================
# A voice interview is a mock interview session. The browser handles speech;
# the API stores the running transcript of question/answer turns.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class InterviewStatus(str, Enum):
    """
    - in_progress: answers can still be appended
    - completed: closed, transcript is final

    Flow: in_progress -> completed
    """
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class InterviewCreate(BaseModel):
    topic_id: UUID | None = None


class InterviewTurn(BaseModel):
    """One question asked and the candidate's transcribed answer."""
    question: str = Field(..., min_length=1, max_length=2000)
    answer: str = Field(..., max_length=20000)


class InterviewResponse(BaseModel):
    id: UUID
    user_id: UUID
    topic_id: UUID | None = None
    status: InterviewStatus
    transcript: list[InterviewTurn] = Field(default_factory=list)
    created_at: datetime | None = None
    completed_at: datetime | None = None
