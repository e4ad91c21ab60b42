# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService
from .badge_service import BadgeService
from .daily_question_service import DailyQuestionService
from .interview_service import InterviewService
from .progress_service import ProgressService
from .question_service import QuestionService
from .topic_service import TopicService
from .user_service import UserService

__all__ = [
    "AuthService",
    "BadgeService",
    "DailyQuestionService",
    "InterviewService",
    "ProgressService",
    "QuestionService",
    "TopicService",
    "UserService",
]
