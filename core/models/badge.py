# =============================================================================
# core/models/badge.py - Badge Schemas
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel


class BadgeCriteria(str, Enum):
    """
    Which ProgressSummary metric a badge threshold is compared against.

    - correct_answers: total correct attempts
    - questions_solved: distinct questions answered correctly
    - topics_practiced: distinct topics with at least one attempt
    """
    CORRECT_ANSWERS = "correct_answers"
    QUESTIONS_SOLVED = "questions_solved"
    TOPICS_PRACTICED = "topics_practiced"


class BadgeResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    icon: str | None = None
    criteria_type: BadgeCriteria
    threshold: int


class UserBadgeResponse(BaseModel):
    badge: BadgeResponse
    awarded_at: datetime | None = None
