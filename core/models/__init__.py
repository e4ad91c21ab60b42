# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - topic.py: Topic CRUD schemas and the shared Difficulty enum
# - question.py: Question CRUD schemas and the daily questions response
# - progress.py: Attempt records and aggregate progress
# - badge.py: Badge definitions and awarded badges
# - user.py: User profile schemas
# - interview.py: Voice interview sessions and transcript turns
#
# These models define the "contract" between API and clients.
# =============================================================================

from .badge import BadgeCriteria, BadgeResponse, UserBadgeResponse
from .interview import InterviewCreate, InterviewResponse, InterviewStatus, InterviewTurn
from .progress import (
    ProgressCreate,
    ProgressCreateResponse,
    ProgressRecord,
    ProgressSummary,
    TopicProgress,
)
from .question import DailyQuestionsResponse, QuestionCreate, QuestionResponse, QuestionUpdate
from .topic import Difficulty, TopicCreate, TopicResponse, TopicUpdate
from .user import UserProfile, UserUpdate

__all__ = [
    # Badge
    "BadgeCriteria",
    "BadgeResponse",
    "UserBadgeResponse",
    # Interview
    "InterviewCreate",
    "InterviewResponse",
    "InterviewStatus",
    "InterviewTurn",
    # Progress
    "ProgressCreate",
    "ProgressCreateResponse",
    "ProgressRecord",
    "ProgressSummary",
    "TopicProgress",
    # Question
    "DailyQuestionsResponse",
    "QuestionCreate",
    "QuestionResponse",
    "QuestionUpdate",
    # Topic
    "Difficulty",
    "TopicCreate",
    "TopicResponse",
    "TopicUpdate",
    # User
    "UserProfile",
    "UserUpdate",
]
