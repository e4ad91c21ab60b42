# =============================================================================
# core/models/topic.py - Topic Schemas
# =============================================================================
# A topic groups practice questions (e.g. "Arrays", "Recursion").
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    """Difficulty shared by topics and questions."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TopicCreate(BaseModel):
    """
    Schema for creating a topic.

    Example:
        {
            "title": "Recursion",
            "slug": "recursion",
            "difficulty": "intermediate"
        }
    """

    title: str = Field(..., min_length=1, max_length=120)

    # URL-friendly identifier, unique across topics
    slug: str = Field(..., min_length=1, max_length=120, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

    description: str | None = Field(default=None, max_length=2000)

    difficulty: Difficulty = Field(default=Difficulty.BEGINNER)


class TopicUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    title: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    difficulty: Difficulty | None = None


class TopicResponse(BaseModel):
    id: UUID
    title: str
    slug: str
    description: str | None = None
    difficulty: Difficulty
    created_at: datetime | None = None
