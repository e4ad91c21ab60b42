# =============================================================================
# core/services/daily_question_service.py - Daily Question Selection
# =============================================================================
# Picks a few random questions for each calendar day (UTC) and stores the
# choice in daily_questions. Running the job twice for the same day is safe:
# the second run returns the existing selection untouched.
#
# Used by:
# - workers/scheduler.py: in-process daily loop
# - workers/tasks.py: Celery task for beat-driven deployments
# - app/routers/questions.py: GET /api/questions/daily
# =============================================================================

import logging
import random
from datetime import date
from typing import Any

from lib.supabase_client import Database
from lib.utils import utc_now

from .question_service import QuestionService

logger = logging.getLogger(__name__)

TABLE = "daily_questions"


class DailyQuestionService:
    """
    Select and read the daily questions.

    Example:
        service = DailyQuestionService(database)
        rows = service.set_daily_questions(count=3)
    """

    def __init__(self, database: Database, rng: random.Random | None = None):
        self.database = database
        self.rng = rng or random.Random()

    def fetch_selection(self, day: date) -> list[dict[str, Any]]:
        response = (
            self.database.client.table(TABLE)
            .select("question_id, date")
            .eq("date", day.isoformat())
            .execute()
        )
        return response.data or []

    def set_daily_questions(self, day: date | None = None, count: int = 3) -> list[dict[str, Any]]:
        """
        Pick `count` random questions for `day` unless the day already has some.

        Args:
            day: Defaults to today in UTC
            count: How many questions to pick; fewer if the bank is smaller

        Returns:
            The daily_questions rows for the day, as {"question_id", "date"}
        """
        day = day or utc_now().date()

        existing = self.fetch_selection(day)
        if existing:
            logger.info(f"Daily questions already set for {day}: {len(existing)}")
            return existing

        bank = self.database.client.table("questions").select("id").execute().data or []
        if not bank:
            logger.warning(f"No questions available to pick for {day}")
            return []

        chosen = self.rng.sample(bank, min(count, len(bank)))
        rows = [{"question_id": q["id"], "date": day.isoformat()} for q in chosen]
        self.database.client.table(TABLE).insert(rows).execute()

        logger.info(f"Set {len(rows)} daily questions for {day}")
        return rows

    def get_daily_questions(self, day: date | None = None) -> list[dict[str, Any]]:
        """Full question rows (without answers) picked for `day`."""
        day = day or utc_now().date()
        question_ids = [row["question_id"] for row in self.fetch_selection(day)]
        return QuestionService(self.database).fetch_many(question_ids)
