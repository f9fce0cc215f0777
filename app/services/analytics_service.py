"""Analytics service - derived statistics over the stored habits."""
from datetime import date

from app.engine import analytics, records
from app.models.analytics import (
    Achievement,
    CategoryCount,
    HabitPerformance,
    PeriodCount,
    PersonalRecords,
    RatePoint,
    Summary,
    TimeSlot,
    WeekdayCount,
)
from app.models.habit import Habit
from app.services.store_service import StoreService


class AnalyticsService:
    """Service computing read-only views; nothing is written."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.store = StoreService(db)

    async def _habits(self) -> list[Habit]:
        habits, _ = await self.store.load_habits()
        return habits

    async def summary(self) -> Summary:
        return analytics.summary(await self._habits())

    async def weekly_pattern(self) -> list[WeekdayCount]:
        return analytics.weekly_pattern(await self._habits())

    async def completion_rate_trend(self, today: date, weeks: int) -> list[RatePoint]:
        return analytics.completion_rate_trend(await self._habits(), today, weeks)

    async def time_of_day(self) -> list[TimeSlot]:
        return analytics.time_of_day(await self._habits())

    async def category_distribution(self) -> list[CategoryCount]:
        return analytics.category_distribution(await self._habits())

    async def habit_performance(self) -> list[HabitPerformance]:
        return analytics.habit_performance(await self._habits())

    async def weekly_completions(self, today: date) -> list[PeriodCount]:
        return analytics.weekly_completions(await self._habits(), today)

    async def monthly_completions(self, today: date) -> list[PeriodCount]:
        return analytics.monthly_completions(await self._habits(), today)

    async def personal_records(self) -> PersonalRecords:
        return records.personal_records(await self._habits())

    async def achievements(self) -> list[Achievement]:
        return records.achievements(await self._habits())
