"""Rollover service - once-per-day reset of the "completed today" flags."""
import logging
from datetime import date

from app.engine.rollover import apply_rollover
from app.models.habit import RolloverResult
from app.services.store_service import StoreService

logger = logging.getLogger(__name__)


class RolloverService:
    """Service running the daily rollover against the stored habits."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.store = StoreService(db)

    async def run(self, today: date) -> RolloverResult:
        """
        Roll habits over to ``today`` if that has not happened yet.

        Args:
            today: Caller's local date

        Returns:
            Whether a rollover happened and how many habits lost their
            "completed today" flag
        """
        last_reset, reset_version = await self.store.load_last_reset()
        if last_reset == today:
            return RolloverResult(performed=False, last_reset_date=today)

        habits, version = await self.store.load_habits()
        done_before = {h.id for h in habits if h.completed_today}
        apply_rollover(habits, last_reset, today)

        await self.store.save_habits(habits, version)
        await self.store.save_last_reset(today, reset_version)

        reset = sum(1 for h in habits if h.id in done_before and not h.completed_today)
        return RolloverResult(performed=True, last_reset_date=today, reset_habits=reset)
