# =============================================================================
# core/services/badge_service.py - Badge Awarding
# =============================================================================
# Badges are defined in the badges table as (criteria_type, threshold).
# After each recorded attempt the user's summary is compared against every
# badge they don't hold yet; newly met badges are written to user_badges.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from core.models.badge import BadgeCriteria
from core.models.progress import ProgressSummary
from lib.utils import normalize_uuid, utc_now

from .base import TableService
from .progress_service import ProgressService

logger = logging.getLogger(__name__)


def metric_for(summary: ProgressSummary, criteria: BadgeCriteria) -> int:
    return {
        BadgeCriteria.CORRECT_ANSWERS: summary.correct_answers,
        BadgeCriteria.QUESTIONS_SOLVED: summary.questions_solved,
        BadgeCriteria.TOPICS_PRACTICED: summary.topics_practiced,
    }[criteria]


def eligible_badges(
    badges: list[dict[str, Any]],
    summary: ProgressSummary,
    held_ids: set[str],
) -> list[dict[str, Any]]:
    """Badges whose threshold `summary` meets and that aren't held yet."""
    eligible = []
    for badge in badges:
        if str(badge["id"]) in held_ids:
            continue
        try:
            criteria = BadgeCriteria(badge["criteria_type"])
        except ValueError:
            logger.warning(f"Badge {badge['id']} has unknown criteria: {badge['criteria_type']}")
            continue
        if metric_for(summary, criteria) >= int(badge["threshold"]):
            eligible.append(badge)
    return eligible


class BadgeService(TableService):
    table = "badges"
    resource = "badge"

    def list_badges(self) -> list[dict[str, Any]]:
        return self.client.table(self.table).select("*").order("threshold").execute().data or []

    def list_user_badges(self, user_id: UUID | str) -> list[dict[str, Any]]:
        """Awarded badges joined with their definitions."""
        response = (
            self.client.table("user_badges")
            .select("awarded_at, badge:badges(*)")
            .eq("user_id", normalize_uuid(user_id))
            .order("awarded_at")
            .execute()
        )
        return response.data or []

    def award_eligible(self, user_id: UUID | str) -> list[dict[str, Any]]:
        """
        Award every badge the user now qualifies for.

        Returns:
            Definitions of the newly awarded badges (empty if none)
        """
        user_id = normalize_uuid(user_id)
        summary = ProgressService(self.database).summary(user_id)
        held = {str(row["badge"]["id"]) for row in self.list_user_badges(user_id) if row.get("badge")}

        awarded = eligible_badges(self.list_badges(), summary, held)
        if awarded:
            now = utc_now().isoformat()
            self.client.table("user_badges").insert([
                {"user_id": user_id, "badge_id": badge["id"], "awarded_at": now}
                for badge in awarded
            ]).execute()
            logger.info(f"Awarded {len(awarded)} badge(s) to {user_id}: {[b['name'] for b in awarded]}")
        return awarded
