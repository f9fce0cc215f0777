"""Habit service - business logic for habits and their completion ledgers."""
import logging
from datetime import date, datetime, time
from typing import Optional

from bson import ObjectId

from app.engine import ledger
from app.engine.heatmap import generate_heatmap
from app.models.habit import (
    Completion,
    CompletionSet,
    Habit,
    HabitCreate,
    HabitUpdate,
    Schedule,
)
from app.models.heatmap import Heatmap, HeatmapWindow
from app.services.goal_service import GoalService
from app.services.store_service import StoreService
from app.utils.dates import local_time

logger = logging.getLogger(__name__)


class HabitService:
    """Service for handling habit operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.store = StoreService(db)
        self.goals = GoalService(db)

    async def _commit(self, habits: list[Habit], version: int, today: date) -> None:
        """Write the habit list and refresh every goal against it."""
        await self.store.save_habits(habits, version)
        await self.goals.refresh_all(habits, today)

    @staticmethod
    def _find(habits: list[Habit], habit_id: str) -> Optional[Habit]:
        return next((h for h in habits if h.id == habit_id), None)

    async def create_habit(self, habit_create: HabitCreate, today: date) -> Habit:
        """
        Create a new habit with an empty ledger.

        Args:
            habit_create: Habit creation data
            today: Caller's local date

        Returns:
            Created habit
        """
        habits, version = await self.store.load_habits()

        habit = Habit(
            id=str(ObjectId()),
            created_at=datetime.utcnow(),
            **habit_create.model_dump(),
        )
        habits.append(habit)

        await self._commit(habits, version, today)
        logger.info("Created habit %s (%s)", habit.id, habit.name)
        return habit

    async def list_habits(
        self,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Habit]:
        """
        List habits with optional filtering.

        Args:
            category: Optional category filter
            status: Optional "pending" or "completed" filter on today's state

        Returns:
            List of habits in creation order
        """
        habits, _ = await self.store.load_habits()

        if category:
            habits = [h for h in habits if h.category == category]
        if status == "pending":
            habits = [h for h in habits if not h.completed_today]
        elif status == "completed":
            habits = [h for h in habits if h.completed_today]

        return habits

    async def get_habit(self, habit_id: str) -> Optional[Habit]:
        """Get a single habit by id, or None."""
        habits, _ = await self.store.load_habits()
        return self._find(habits, habit_id)

    async def update_habit(
        self,
        habit_id: str,
        habit_update: HabitUpdate,
        today: date,
    ) -> Optional[Habit]:
        """
        Update descriptive fields of a habit.

        Args:
            habit_id: Habit id
            habit_update: Update data
            today: Caller's local date

        Returns:
            Updated habit, or None if the id is unknown

        Raises:
            ValueError: If the merged frequency and custom days are invalid
        """
        habits, version = await self.store.load_habits()
        habit = self._find(habits, habit_id)
        if habit is None:
            return None

        changes = habit_update.model_dump(exclude_unset=True)
        if "frequency" in changes or "custom_days" in changes:
            # Switching away from custom drops its days unless new ones are sent
            frequency = changes.get("frequency", habit.frequency)
            custom_days = changes.get("custom_days", habit.custom_days)
            if "frequency" in changes and "custom_days" not in changes and frequency != habit.frequency:
                custom_days = None
            schedule = Schedule(frequency=frequency, custom_days=custom_days)
            changes["frequency"] = schedule.frequency
            changes["custom_days"] = schedule.custom_days

        for field, value in changes.items():
            if field in ("frequency", "custom_days") or value is not None:
                setattr(habit, field, value)

        await self._commit(habits, version, today)
        return habit

    async def delete_habit(self, habit_id: str, today: date) -> dict:
        """
        Delete a habit together with its ledger.

        Goals linked to it become orphaned on the following refresh.

        Returns:
            Dictionary with deleted_count
        """
        habits, version = await self.store.load_habits()
        remaining = [h for h in habits if h.id != habit_id]
        deleted = len(habits) - len(remaining)

        if deleted:
            await self._commit(remaining, version, today)
            logger.info("Deleted habit %s", habit_id)

        return {"deleted_count": deleted}

    async def set_completion(
        self,
        habit_id: str,
        day: date,
        completion: CompletionSet,
        today: date,
    ) -> Optional[Habit]:
        """
        Record whether a habit was done on ``day``.

        When a completion for today arrives without a time, the local wall
        clock is used.

        Args:
            habit_id: Habit id
            day: Date of the entry
            completion: Completed flag, optional time and note
            today: Caller's local date

        Returns:
            Updated habit, or None if the id is unknown
        """
        habits, version = await self.store.load_habits()
        habit = self._find(habits, habit_id)
        if habit is None:
            return None

        occurred_at = completion.completion_time
        if occurred_at is None and completion.completed and day == today:
            occurred_at = local_time()

        ledger.set_completion(
            habit,
            day,
            completion.completed,
            today,
            occurred_at=occurred_at,
            note=completion.note,
        )
        await self._commit(habits, version, today)
        return habit

    async def toggle_today(
        self,
        habit_id: str,
        today: date,
        occurred_at: Optional[time] = None,
    ) -> Optional[Habit]:
        """
        Flip today's completion of a habit; None if the id is unknown.

        ``occurred_at`` is the caller's wall-clock time, defaulting to the
        service's local clock.
        """
        habits, version = await self.store.load_habits()
        habit = self._find(habits, habit_id)
        if habit is None:
            return None

        ledger.toggle_today(habit, today, occurred_at=occurred_at or local_time())
        await self._commit(habits, version, today)
        return habit

    async def list_completions(self, habit_id: str) -> Optional[list[Completion]]:
        """Ledger of a habit, most recent first; None if the id is unknown."""
        habit = await self.get_habit(habit_id)
        if habit is None:
            return None
        return ledger.sorted_completions(habit)

    async def get_heatmap(
        self,
        habit_id: str,
        window: HeatmapWindow,
        today: date,
    ) -> Optional[Heatmap]:
        """Heatmap grid of one habit; None if the id is unknown."""
        habit = await self.get_habit(habit_id)
        if habit is None:
            return None
        return generate_heatmap(habit, window, today)
