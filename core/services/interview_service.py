# =============================================================================
# core/services/interview_service.py - Voice Interview Sessions
# =============================================================================
# Interviews are owned by one user. Other users get "not found" rather than
# "forbidden" so ids can't be probed.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import ConflictError, NotFoundError
from core.models.interview import InterviewStatus, InterviewTurn
from lib.utils import normalize_uuid, utc_now

from .base import TableService

logger = logging.getLogger(__name__)


class InterviewService(TableService):
    table = "voice_interviews"
    resource = "interview"

    def start(self, user_id: UUID | str, topic_id: UUID | None = None) -> dict[str, Any]:
        if topic_id and self.fetch_by_id(topic_id, table="topics") is None:
            raise NotFoundError("topic", normalize_uuid(topic_id))
        interview = self.insert({
            "user_id": normalize_uuid(user_id),
            "topic_id": normalize_uuid(topic_id) if topic_id else None,
            "status": InterviewStatus.IN_PROGRESS.value,
            "transcript": [],
        })
        logger.info(f"Started interview {interview['id']} for {user_id}")
        return interview

    def list_for_user(self, user_id: UUID | str) -> list[dict[str, Any]]:
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("user_id", normalize_uuid(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    def get_owned(self, interview_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: If it doesn't exist or belongs to someone else
        """
        interview = self.require(interview_id)
        if str(interview.get("user_id")) != normalize_uuid(user_id):
            raise NotFoundError(self.resource, normalize_uuid(interview_id))
        return interview

    def _require_open(self, interview: dict[str, Any]) -> None:
        if interview.get("status") == InterviewStatus.COMPLETED.value:
            raise ConflictError(
                f"Interview already completed: {interview['id']}",
                details={"interview_id": str(interview["id"])},
            )

    def add_turn(self, interview_id: UUID | str, user_id: UUID | str, turn: InterviewTurn) -> dict[str, Any]:
        """
        Append one question/answer turn to the transcript.

        Raises:
            ConflictError: If the interview is already completed
        """
        interview = self.get_owned(interview_id, user_id)
        self._require_open(interview)
        transcript = list(interview.get("transcript") or [])
        transcript.append(turn.model_dump())
        return self.update(interview_id, {"transcript": transcript})

    def complete(self, interview_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        interview = self.get_owned(interview_id, user_id)
        self._require_open(interview)
        logger.info(f"Completed interview {interview_id} with {len(interview.get('transcript') or [])} turns")
        return self.update(interview_id, {
            "status": InterviewStatus.COMPLETED.value,
            "completed_at": utc_now().isoformat(),
        })
