# =============================================================================
# core/services/progress_service.py - Progress Tracking
# =============================================================================
# Stores answer attempts and aggregates them into a ProgressSummary.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from core.models.progress import ProgressCreate, ProgressSummary, TopicProgress
from lib.utils import normalize_uuid

from .base import TableService
from .question_service import QuestionService

logger = logging.getLogger(__name__)


def summarize(records: list[dict[str, Any]]) -> ProgressSummary:
    """
    Aggregate attempt rows into a ProgressSummary.

    Example:
        summarize([{"question_id": "q1", "topic_id": "t1", "is_correct": True}])
        # total_attempts=1, correct_answers=1, accuracy=100.0, ...
    """
    by_topic: dict[str, TopicProgress] = {}
    solved: set[str] = set()
    correct = 0

    for record in records:
        topic_key = str(record.get("topic_id") or "unassigned")
        stats = by_topic.setdefault(topic_key, TopicProgress())
        stats.attempts += 1
        if record.get("is_correct"):
            stats.correct += 1
            correct += 1
            solved.add(str(record["question_id"]))

    total = len(records)
    return ProgressSummary(
        total_attempts=total,
        correct_answers=correct,
        accuracy=round(correct / total * 100, 1) if total else 0.0,
        questions_solved=len(solved),
        topics_practiced=len([k for k in by_topic if k != "unassigned"]),
        by_topic=by_topic,
    )


class ProgressService(TableService):
    """Read and write the progress table for one user at a time."""

    table = "progress"
    resource = "progress record"

    def list_progress(self, user_id: UUID | str) -> list[dict[str, Any]]:
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("user_id", normalize_uuid(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    def record_attempt(self, user_id: UUID | str, payload: ProgressCreate) -> dict[str, Any]:
        """
        Store one attempt, denormalizing the question's topic onto the row.

        Raises:
            NotFoundError: If the question doesn't exist
        """
        question = QuestionService(self.database).require(payload.question_id)
        record = self.insert({
            "user_id": normalize_uuid(user_id),
            "question_id": normalize_uuid(payload.question_id),
            "topic_id": question.get("topic_id"),
            "is_correct": payload.is_correct,
        })
        logger.info(f"Recorded attempt by {user_id} on {payload.question_id} (correct={payload.is_correct})")
        return record

    def summary(self, user_id: UUID | str) -> ProgressSummary:
        return summarize(self.list_progress(user_id))
