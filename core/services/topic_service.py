# =============================================================================
# core/services/topic_service.py - Topic Business Logic
# =============================================================================

import logging
from typing import Any

from app.exceptions import ConflictError
from core.models.topic import TopicCreate, TopicUpdate

from .base import TableService

logger = logging.getLogger(__name__)


class TopicService(TableService):
    """CRUD for the topics table."""

    table = "topics"
    resource = "topic"

    def list_topics(self) -> list[dict[str, Any]]:
        response = self.client.table(self.table).select("*").order("title").execute()
        return response.data or []

    def fetch_by_slug(self, slug: str) -> dict[str, Any] | None:
        response = self.client.table(self.table).select("*").eq("slug", slug).limit(1).execute()
        rows = response.data or []
        return rows[0] if rows else None

    def create_topic(self, payload: TopicCreate) -> dict[str, Any]:
        """
        Raises:
            ConflictError: If the slug is already taken
        """
        if self.fetch_by_slug(payload.slug):
            raise ConflictError(f"Topic slug already exists: {payload.slug}", details={"slug": payload.slug})
        topic = self.insert(payload.model_dump(mode="json"))
        logger.info(f"Created topic: {topic['id']} ({payload.slug})")
        return topic

    def update_topic(self, topic_id: str, payload: TopicUpdate) -> dict[str, Any]:
        return self.update(topic_id, payload.model_dump(mode="json", exclude_unset=True))
