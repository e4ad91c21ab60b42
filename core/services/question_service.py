# =============================================================================
# core/services/question_service.py - Question Business Logic
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import NotFoundError
from core.models.question import QuestionCreate, QuestionUpdate
from core.models.topic import Difficulty
from lib.utils import normalize_uuid

from .base import TableService

logger = logging.getLogger(__name__)

# Everything except the reference answer
PUBLIC_COLUMNS = "id, topic_id, title, prompt, difficulty, created_at"


class QuestionService(TableService):
    """CRUD for the questions table."""

    table = "questions"
    resource = "question"

    def list_questions(
        self,
        topic_id: UUID | None = None,
        difficulty: Difficulty | None = None,
    ) -> list[dict[str, Any]]:
        query = self.client.table(self.table).select(PUBLIC_COLUMNS)
        if topic_id:
            query = query.eq("topic_id", normalize_uuid(topic_id))
        if difficulty:
            query = query.eq("difficulty", difficulty.value)
        return query.order("created_at").execute().data or []

    def fetch_many(self, question_ids: list[str]) -> list[dict[str, Any]]:
        if not question_ids:
            return []
        response = (
            self.client.table(self.table)
            .select(PUBLIC_COLUMNS)
            .in_("id", question_ids)
            .execute()
        )
        return response.data or []

    def create_question(self, payload: QuestionCreate) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: If the topic doesn't exist
        """
        topic_id = normalize_uuid(payload.topic_id)
        if self.fetch_by_id(topic_id, table="topics") is None:
            raise NotFoundError("topic", topic_id)
        question = self.insert(payload.model_dump(mode="json"))
        logger.info(f"Created question: {question['id']} in topic {topic_id}")
        return question

    def update_question(self, question_id: str, payload: QuestionUpdate) -> dict[str, Any]:
        return self.update(question_id, payload.model_dump(mode="json", exclude_unset=True))
