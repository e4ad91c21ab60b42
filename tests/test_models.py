# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request and response models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from app.auth.models import AuthUser, RegisterRequest
from core.models import (
    BadgeCriteria,
    BadgeResponse,
    Difficulty,
    InterviewResponse,
    InterviewStatus,
    InterviewTurn,
    ProgressCreate,
    ProgressSummary,
    QuestionCreate,
    TopicCreate,
    TopicUpdate,
)


# =============================================================================
# Topic Model Tests
# =============================================================================

class TestTopicCreate:
    """Tests for TopicCreate model."""

    def test_valid_topic(self):
        topic = TopicCreate(title="Dynamic Programming", slug="dynamic-programming")

        assert topic.slug == "dynamic-programming"
        assert topic.difficulty == Difficulty.BEGINNER
        assert topic.description is None

    @pytest.mark.parametrize("slug", ["Has Spaces", "trailing-", "-leading", "double--dash", "UPPER"])
    def test_invalid_slug(self, slug):
        with pytest.raises(ValidationError):
            TopicCreate(title="Topic", slug=slug)

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            TopicCreate(title="", slug="topic")

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(ValidationError):
            TopicCreate(title="Topic", slug="topic", difficulty="impossible")


class TestTopicUpdate:
    """Tests for TopicUpdate model."""

    def test_only_set_fields_are_dumped(self):
        update = TopicUpdate(title="Graphs")

        assert update.model_dump(exclude_unset=True) == {"title": "Graphs"}


# =============================================================================
# Question Model Tests
# =============================================================================

class TestQuestionCreate:
    """Tests for QuestionCreate model."""

    def test_topic_id_parsed(self):
        topic_id = uuid4()

        question = QuestionCreate(topic_id=str(topic_id), title="FizzBuzz", prompt="Print 1 to 100...")

        assert question.topic_id == topic_id
        assert question.answer is None

    def test_malformed_topic_id(self):
        with pytest.raises(ValidationError):
            QuestionCreate(topic_id="topic-1", title="FizzBuzz", prompt="Print 1 to 100...")


# =============================================================================
# Progress Model Tests
# =============================================================================

class TestProgressModels:
    """Tests for ProgressCreate and ProgressSummary."""

    def test_progress_create_from_form_strings(self):
        """URL-encoded bodies deliver booleans as strings."""
        question_id = uuid4()

        attempt = ProgressCreate(question_id=str(question_id), is_correct="true")

        assert attempt.is_correct is True
        assert isinstance(attempt.question_id, UUID)

    def test_summary_defaults(self):
        summary = ProgressSummary()

        assert summary.total_attempts == 0
        assert summary.by_topic == {}

    def test_summary_accuracy_bounds(self):
        with pytest.raises(ValidationError):
            ProgressSummary(accuracy=120.0)


# =============================================================================
# Badge Model Tests
# =============================================================================

class TestBadgeResponse:
    """Tests for BadgeResponse model."""

    def test_criteria_parsed(self):
        badge = BadgeResponse(id=uuid4(), name="Explorer", criteria_type="topics_practiced", threshold=3)

        assert badge.criteria_type == BadgeCriteria.TOPICS_PRACTICED

    def test_unknown_criteria_rejected(self):
        with pytest.raises(ValidationError):
            BadgeResponse(id=uuid4(), name="Night Owl", criteria_type="late_night", threshold=1)


# =============================================================================
# Interview Model Tests
# =============================================================================

class TestInterviewModels:
    """Tests for voice interview models."""

    def test_status_values(self):
        assert InterviewStatus.IN_PROGRESS.value == "in_progress"
        assert InterviewStatus.COMPLETED.value == "completed"

    def test_transcript_defaults_empty(self):
        interview = InterviewResponse(id=uuid4(), user_id=uuid4(), status="in_progress")

        assert interview.transcript == []
        assert interview.completed_at is None

    def test_turn_requires_question(self):
        with pytest.raises(ValidationError):
            InterviewTurn(question="", answer="Something")


# =============================================================================
# Auth Model Tests
# =============================================================================

class TestAuthModels:
    """Tests for authentication models."""

    def test_auth_user_is_frozen(self):
        user = AuthUser(id=uuid4(), email="ada@example.com")

        with pytest.raises(ValidationError):
            user.email = "grace@example.com"

    def test_register_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="not-an-email", password="correct-horse")
